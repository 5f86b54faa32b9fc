from abc import ABC, abstractmethod
import numpy as np

from feature_match.domain.entities.detect_result import DetectResult
from feature_match.domain.entities.match_result import MatchResult


class IMatchRenderer(ABC):
    @abstractmethod
    def render(self, refer: DetectResult, inp: DetectResult, match: MatchResult, label: str) -> np.ndarray:
        """Draw input vs. reference side by side with the match lines and label."""
        pass

    @abstractmethod
    def placeholder(self, refer: DetectResult, inp: DetectResult) -> np.ndarray:
        """Blank frame with the size render() would have produced."""
        pass
