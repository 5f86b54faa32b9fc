import math
import logging
from typing import List
import numpy as np
import cv2

from feature_match.application.interfaces.matcher_interface import IMatcher
from feature_match.domain.entities.algorithm import FeatureAlgorithm, MatcherAlgorithm
from feature_match.domain.entities.match_result import MatchResult
from feature_match.domain.entities.pipeline_config import DEFAULT_ACCEPT_RATIO

logger = logging.getLogger(__name__)


class Matcher:
    """Descriptor matcher keeping the best accept_ratio fraction of its last matches."""

    def __init__(self, name: str, strategy: IMatcher):
        self.name = name
        self.strategy = strategy
        self.matches: List[cv2.DMatch] = []
        self.raw_match_count = 0
        self.accept_ratio = DEFAULT_ACCEPT_RATIO

    @classmethod
    def create(cls, name: str, descriptor_name: str) -> "Matcher":
        """
        Bind a Matcher to an OpenCV matching strategy. descriptor_name selects
        the distance metric and, for flann, the index structure.
        """
        from feature_match.infrastructure.matchers.opencv_matcher import OpenCVDescriptorMatcher

        algorithm = MatcherAlgorithm.parse(name)
        descriptor = FeatureAlgorithm.parse(descriptor_name)
        return cls(algorithm.value, OpenCVDescriptorMatcher(algorithm, descriptor))

    def match_descriptors(
            self,
            refer_desc: np.ndarray,
            input_desc: np.ndarray,
            accept_ratio: float = DEFAULT_ACCEPT_RATIO
    ) -> List[cv2.DMatch]:
        """
        Match every input descriptor to its nearest reference descriptor, sort
        by ascending distance and keep floor(count * accept_ratio) of them.
        """
        if not 0.0 <= accept_ratio <= 1.0:
            raise ValueError(f"accept_ratio must be within [0, 1], got {accept_ratio}")

        raw = self.strategy.match_features(input_desc, refer_desc)
        ordered = sorted(raw, key=lambda m: m.distance)
        num_good = math.floor(len(ordered) * accept_ratio)

        self.matches = ordered[:num_good]
        self.raw_match_count = len(ordered)
        self.accept_ratio = accept_ratio
        logger.debug("%s: kept %d of %d matches", self.name, num_good, len(ordered))
        return self.matches

    def get_result(self) -> MatchResult:
        return MatchResult(
            name=self.name,
            matches=list(self.matches),
            raw_match_count=self.raw_match_count,
            accept_ratio=self.accept_ratio
        )
