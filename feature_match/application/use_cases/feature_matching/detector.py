import logging
import numpy as np

from feature_match.application.interfaces.feature_extractor_interface import IFeatureExtractor
from feature_match.domain.entities.algorithm import FeatureAlgorithm
from feature_match.domain.entities.detect_result import DetectResult

logger = logging.getLogger(__name__)


class Detector:
    """
    Keypoint detector and descriptor computer together with its last result.
    Each detect_and_compute call replaces the previous image, keypoints and descriptors.
    """

    def __init__(self, name: str, extractor: IFeatureExtractor):
        self.name = name
        self.extractor = extractor
        self.image = None
        self.keypoints = ()
        self.descriptors = None

    @classmethod
    def create(cls, name: str) -> "Detector":
        """
        Bind a Detector to the OpenCV algorithm registered for name.
        Raises UnknownAlgorithmError for names outside FeatureAlgorithm.
        """
        from feature_match.infrastructure.feature_extractors.opencv_extractor import OpenCVFeatureExtractor

        algorithm = FeatureAlgorithm.parse(name)
        return cls(algorithm.value, OpenCVFeatureExtractor(algorithm))

    @property
    def has_result(self) -> bool:
        return self.image is not None

    def detect_and_compute(self, image: np.ndarray) -> DetectResult:
        feature = self.extractor.extract_features(image)
        self.image = image
        self.keypoints = feature.keypoints
        self.descriptors = feature.descriptors
        logger.debug("%s: %d keypoints", self.name, len(self.keypoints))
        return self.get_result()

    def get_result(self) -> DetectResult:
        return DetectResult(self.name, self.image, self.keypoints, self.descriptors)
