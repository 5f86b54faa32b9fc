from typing import Callable, Dict
import logging
import numpy as np
import cv2

from feature_match.application.interfaces.feature_extractor_interface import IFeatureExtractor, ExtractFeatureData
from feature_match.domain.entities.algorithm import FeatureAlgorithm
from feature_match.domain.exceptions import AlgorithmUnavailableError

logger = logging.getLogger(__name__)


def _create_surf() -> cv2.Feature2D:
    # SURF is patented; only contrib builds with OPENCV_ENABLE_NONFREE carry it
    xfeatures2d = getattr(cv2, "xfeatures2d", None)
    if xfeatures2d is None:
        raise AlgorithmUnavailableError("SURF requires opencv-contrib-python (cv2.xfeatures2d is missing)")
    try:
        return xfeatures2d.SURF_create()
    except cv2.error as e:
        raise AlgorithmUnavailableError(f"SURF is disabled in this OpenCV build: {e}") from e


def _main_module_factory(constructor: str) -> Callable[[], cv2.Feature2D]:
    # Resolved on use; OpenCV releases add and drop constructors
    def create() -> cv2.Feature2D:
        factory = getattr(cv2, constructor, None)
        if factory is None:
            raise AlgorithmUnavailableError(f"cv2.{constructor} is missing from this OpenCV build")
        return factory()
    return create


FEATURE_FACTORIES: Dict[FeatureAlgorithm, Callable[[], cv2.Feature2D]] = {
    FeatureAlgorithm.SIFT: _main_module_factory("SIFT_create"),
    FeatureAlgorithm.SURF: _create_surf,
    FeatureAlgorithm.ORB: _main_module_factory("ORB_create"),
    FeatureAlgorithm.KAZE: _main_module_factory("KAZE_create"),
    FeatureAlgorithm.BRISK: _main_module_factory("BRISK_create"),
}


class OpenCVFeatureExtractor(IFeatureExtractor):
    def __init__(self, algorithm: FeatureAlgorithm):
        self.algorithm = FeatureAlgorithm.parse(algorithm)
        self.feature = FEATURE_FACTORIES[self.algorithm]()
        logger.debug("Created %s feature extractor", self.algorithm.value)

    def extract_features(self, image: np.ndarray) -> ExtractFeatureData:
        gray = image if image.ndim == 2 else cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        keypoints, descriptors = self.feature.detectAndCompute(gray, None)
        return ExtractFeatureData(keypoints, descriptors)
