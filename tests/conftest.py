"""
Shared fixtures: synthetic textured images and stub pipeline parts.
"""

import pytest
import numpy as np
import cv2

from feature_match.application.interfaces.feature_extractor_interface import IFeatureExtractor, ExtractFeatureData
from feature_match.application.interfaces.matcher_interface import IMatcher
from feature_match.infrastructure.renderers.opencv_match_renderer import OpenCVMatchRenderer


def make_textured_image(seed: int = 0, height: int = 360, width: int = 480) -> np.ndarray:
    """Random rectangles and circles on a noisy background, plenty of corners and blobs."""
    rng = np.random.default_rng(seed)
    image = rng.integers(90, 130, (height, width, 3), dtype=np.uint8)
    for _ in range(60):
        color = tuple(int(c) for c in rng.integers(0, 256, 3))
        x, y = int(rng.integers(0, width - 40)), int(rng.integers(0, height - 40))
        if rng.random() < 0.5:
            w, h = int(rng.integers(10, 60)), int(rng.integers(10, 60))
            cv2.rectangle(image, (x, y), (x + w, y + h), color, -1)
        else:
            cv2.circle(image, (x + 20, y + 20), int(rng.integers(5, 25)), color, -1)
    return image


def shift_image(image: np.ndarray, dx: int, dy: int) -> np.ndarray:
    h, w = image.shape[:2]
    transform = np.float32([[1, 0, dx], [0, 1, dy]])
    return cv2.warpAffine(image, transform, (w, h), borderMode=cv2.BORDER_REFLECT)


@pytest.fixture
def reference_image():
    return make_textured_image(seed=0)


@pytest.fixture
def input_image(reference_image):
    return shift_image(reference_image, 12, 8)


@pytest.fixture
def other_input_image():
    return make_textured_image(seed=1)


class StubExtractor(IFeatureExtractor):
    """Returns a fixed number of keypoints on a grid with random descriptors."""

    def __init__(self, count: int = 20, seed: int = 0):
        self.count = count
        self.rng = np.random.default_rng(seed)
        self.calls = 0

    def extract_features(self, image: np.ndarray) -> ExtractFeatureData:
        self.calls += 1
        keypoints = tuple(cv2.KeyPoint(float(5 + 10 * i), 5.0, 3.0) for i in range(self.count))
        descriptors = self.rng.random((self.count, 8)).astype(np.float32)
        return ExtractFeatureData(keypoints, descriptors)


class StubMatcher(IMatcher):
    """Pairs query i with train i at a preset distance."""

    def __init__(self, distances):
        self.distances = list(distances)
        self.calls = []

    def match_features(self, query_desc, train_desc):
        self.calls.append((query_desc, train_desc))
        return [cv2.DMatch(i, i, float(d)) for i, d in enumerate(self.distances)]


class FailingRenderer(OpenCVMatchRenderer):
    """Raises for the pipelines named in fail_on, draws normally otherwise."""

    def __init__(self, fail_on):
        super().__init__()
        self.fail_on = set(fail_on)

    def render(self, refer, inp, match, label):
        if label.split(" ")[0] in self.fail_on:
            raise cv2.error("simulated drawMatches failure")
        return super().render(refer, inp, match, label)


@pytest.fixture
def stub_extractor():
    return StubExtractor()
