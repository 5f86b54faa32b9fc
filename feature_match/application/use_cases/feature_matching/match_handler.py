import math
import logging
from typing import List, Optional, Sequence
import numpy as np
import cv2

from feature_match.application.interfaces.match_renderer_interface import IMatchRenderer
from feature_match.application.use_cases.feature_matching.detector import Detector
from feature_match.application.use_cases.feature_matching.matcher import Matcher
from feature_match.domain.entities.draw_result import DrawResult
from feature_match.domain.entities.match_result import MatchResult
from feature_match.domain.entities.pipeline_config import PipelineConfig, DEFAULT_ACCEPT_RATIO
from feature_match.domain.exceptions import PipelineConfigError, ReferenceNotSetError, NoMatchResultError

logger = logging.getLogger(__name__)


class MatchHandler:
    """
    Runs one (detector, matcher) pipeline per requested feature type.

    Index i of refer_dets, input_dets and matchers always belongs to the same
    pipeline. The reference and input sides get separate Detectors so each keeps
    its own keypoints and descriptors.
    """

    def __init__(
            self,
            features: Sequence[str],
            matchers: Sequence[str],
            accept_ratio: float = DEFAULT_ACCEPT_RATIO,
            renderer: Optional[IMatchRenderer] = None
    ):
        features = list(features)
        matchers = list(matchers)
        if len(features) != len(matchers):
            raise PipelineConfigError(
                f"Every feature needs a matcher: got {len(features)} features and {len(matchers)} matchers"
            )
        if not features:
            raise PipelineConfigError("At least one feature/matcher pipeline is required")
        if not 0.0 <= accept_ratio <= 1.0:
            raise PipelineConfigError(f"accept_ratio must be within [0, 1], got {accept_ratio}")

        # Build everything before assigning so a bad name leaves nothing behind
        refer_dets = [Detector.create(feat) for feat in features]
        input_dets = [Detector.create(feat) for feat in features]
        pipeline_matchers = [Matcher.create(match, feat) for feat, match in zip(features, matchers)]

        if renderer is None:
            from feature_match.infrastructure.renderers.opencv_match_renderer import OpenCVMatchRenderer
            renderer = OpenCVMatchRenderer()

        self.refer_dets: List[Detector] = refer_dets
        self.input_dets: List[Detector] = input_dets
        self.matchers: List[Matcher] = pipeline_matchers
        self.renderer = renderer
        self._accept_ratio = accept_ratio
        self._reference_set = False
        self._matched = False

        logger.info("Created match handler with pipelines: %s", ", ".join(self.pipeline_names))

    @classmethod
    def from_config(cls, config: PipelineConfig, renderer: Optional[IMatchRenderer] = None) -> "MatchHandler":
        config.validate()
        return cls(config.features, config.matchers, accept_ratio=config.accept_ratio, renderer=renderer)

    def __len__(self) -> int:
        return len(self.matchers)

    @property
    def pipeline_names(self) -> List[str]:
        return [f"{det.name}/{matcher.name}" for det, matcher in zip(self.refer_dets, self.matchers)]

    @property
    def accept_ratio(self) -> float:
        return self._accept_ratio

    def set_reference_image(self, image: np.ndarray):
        """Detect features and compute descriptors on the reference image for all pipelines."""
        for det in self.refer_dets:
            det.detect_and_compute(image)
        self._reference_set = True
        # Old matches index the previous reference keypoints
        self._matched = False
        logger.info("Reference image set (%s)",
                    ", ".join(f"{det.name}: {len(det.keypoints)} keypoints" for det in self.refer_dets))

    def match_image(self, image: np.ndarray) -> List[MatchResult]:
        """
        Detect features on the input image for all pipelines and match them
        against the reference descriptors with the current acceptance ratio.
        """
        if not self._reference_set:
            raise ReferenceNotSetError("set_reference_image() must be called before match_image()")

        for det in self.input_dets:
            det.detect_and_compute(image)

        for refer_det, input_det, matcher in zip(self.refer_dets, self.input_dets, self.matchers):
            matcher.match_descriptors(
                refer_det.get_result().descriptors,
                input_det.get_result().descriptors,
                accept_ratio=self._accept_ratio
            )
        self._matched = True
        return [matcher.get_result() for matcher in self.matchers]

    def change_accept_ratio(self, delta: float) -> float:
        """Shift the acceptance ratio by delta, clamped to [0, 1]; applies from the next match_image()."""
        if not math.isfinite(delta):
            raise ValueError(f"accept ratio change must be a finite number, got {delta}")
        self._accept_ratio = max(min(self._accept_ratio + delta, 1.0), 0.0)
        logger.debug("Accept ratio changed to %.2f", self._accept_ratio)
        return self._accept_ratio

    def draw_pipeline_results(self) -> List[DrawResult]:
        """
        Render every pipeline separately. A renderer error only fails its own
        pipeline and is reported in the returned DrawResult.
        """
        if not self._matched:
            raise NoMatchResultError("match_image() must be called after set_reference_image() before drawing")

        results = []
        for name, refer_det, input_det, matcher in zip(
                self.pipeline_names, self.refer_dets, self.input_dets, self.matchers):
            match = matcher.get_result()
            label = f"{name} {match.num_matches} matches"
            try:
                frame = self.renderer.render(refer_det.get_result(), input_det.get_result(), match, label)
                results.append(DrawResult.ok(name, frame))
            except Exception as e:
                logger.warning("Drawing matches for %s failed: %s", name, e)
                results.append(DrawResult.failure(name, str(e)))
        return results

    def draw_match_result(self, max_height: int = 1000) -> np.ndarray:
        """
        Stack every pipeline's drawing vertically. Failed pipelines get a blank
        frame of the same size. The composite is downscaled to max_height when
        it is taller than that.
        """
        frames = []
        for result, refer_det, input_det in zip(self.draw_pipeline_results(), self.refer_dets, self.input_dets):
            if result.success:
                frames.append(result.frame)
            else:
                frames.append(self.renderer.placeholder(refer_det.get_result(), input_det.get_result()))

        stacked = cv2.vconcat(_pad_to_width(frames))

        if 0 < max_height < stacked.shape[0]:
            scale = max_height / stacked.shape[0]
            new_size = (max(1, int(stacked.shape[1] * scale)), max_height)
            stacked = cv2.resize(stacked, new_size, interpolation=cv2.INTER_AREA)
        return stacked


def _pad_to_width(frames: List[np.ndarray]) -> List[np.ndarray]:
    width = max(frame.shape[1] for frame in frames)
    padded = []
    for frame in frames:
        if frame.ndim == 2:
            frame = cv2.cvtColor(frame, cv2.COLOR_GRAY2BGR)
        if frame.shape[1] < width:
            frame = cv2.copyMakeBorder(frame, 0, 0, 0, width - frame.shape[1], cv2.BORDER_CONSTANT, value=0)
        padded.append(frame)
    return padded
