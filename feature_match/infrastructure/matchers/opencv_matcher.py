from typing import List, Optional
import logging
import numpy as np
import cv2

from feature_match.application.interfaces.matcher_interface import IMatcher
from feature_match.domain.entities.algorithm import FeatureAlgorithm, MatcherAlgorithm

logger = logging.getLogger(__name__)

FLANN_INDEX_KDTREE = 1
FLANN_INDEX_LSH = 6


class OpenCVDescriptorMatcher(IMatcher):
    """
    Nearest-neighbour matcher over cv2.BFMatcher or cv2.FlannBasedMatcher.
    The descriptor algorithm picks the metric: Hamming and an LSH index for
    binary descriptors, L1 and a KD-tree index otherwise.
    """

    def __init__(self, algorithm: MatcherAlgorithm, descriptor: FeatureAlgorithm):
        self.algorithm = MatcherAlgorithm.parse(algorithm)
        self.descriptor = FeatureAlgorithm.parse(descriptor)
        self.norm_type: Optional[int] = None
        self.index_params: Optional[dict] = None

        if self.algorithm is MatcherAlgorithm.BF:
            self.norm_type = cv2.NORM_HAMMING if self.descriptor.is_binary else cv2.NORM_L1
            self.matcher = cv2.BFMatcher(self.norm_type)
        else:
            if self.descriptor.is_binary:
                self.index_params = dict(algorithm=FLANN_INDEX_LSH,
                                         table_number=12,
                                         key_size=20,
                                         multi_probe_level=2)
            else:
                self.index_params = dict(algorithm=FLANN_INDEX_KDTREE, trees=5)
            search_params = dict(checks=50)
            self.matcher = cv2.FlannBasedMatcher(self.index_params, search_params)

        logger.debug("Created %s matcher for %s descriptors", self.algorithm.value, self.descriptor.value)

    def match_features(self, query_desc: np.ndarray, train_desc: np.ndarray) -> List[cv2.DMatch]:
        if query_desc is None or train_desc is None:
            return []
        if len(query_desc) == 0 or len(train_desc) == 0:
            return []

        # KD-tree index only accepts float32
        if self.index_params is not None and not self.descriptor.is_binary:
            query_desc = np.asarray(query_desc, dtype=np.float32)
            train_desc = np.asarray(train_desc, dtype=np.float32)

        return list(self.matcher.match(query_desc, train_desc))
