from dataclasses import dataclass
from typing import List
import cv2

from feature_match.domain.entities.pipeline_config import DEFAULT_ACCEPT_RATIO


@dataclass(frozen=True)
class MatchResult:
    name: str
    matches: List[cv2.DMatch]
    raw_match_count: int = 0
    accept_ratio: float = DEFAULT_ACCEPT_RATIO

    @property
    def num_matches(self) -> int:
        return len(self.matches)

    @property
    def mean_distance(self) -> float:
        """Average distance of the kept matches, 0.0 when nothing was kept."""
        if not self.matches:
            return 0.0
        return sum(m.distance for m in self.matches) / len(self.matches)

    def has_enough_matches(self, min_matches: int = 10) -> bool:
        return self.num_matches >= min_matches
