import numpy as np
import cv2

from feature_match.application.interfaces.match_renderer_interface import IMatchRenderer
from feature_match.domain.entities.detect_result import DetectResult
from feature_match.domain.entities.match_result import MatchResult


class OpenCVMatchRenderer(IMatchRenderer):
    def __init__(self, font_scale: float = 1.0, color=(0, 0, 0), thickness: int = 2):
        self.font = cv2.FONT_HERSHEY_SIMPLEX
        self.font_scale = font_scale
        self.color = color
        self.thickness = thickness

    def render(self, refer: DetectResult, inp: DetectResult, match: MatchResult, label: str) -> np.ndarray:
        # Input on the left: match queryIdx indexes input keypoints, trainIdx reference ones
        matchimg = cv2.drawMatches(
            inp.image, inp.keypoints,
            refer.image, refer.keypoints,
            match.matches, None
        )
        cv2.putText(matchimg, label, (10, 30), self.font, self.font_scale, self.color, self.thickness)
        return matchimg

    def placeholder(self, refer: DetectResult, inp: DetectResult) -> np.ndarray:
        h_in, w_in = inp.image.shape[:2]
        h_ref, w_ref = refer.image.shape[:2]
        return np.zeros((max(h_in, h_ref), w_in + w_ref, 3), dtype=np.uint8)
