from dataclasses import dataclass
from typing import Optional, Sequence
import numpy as np
import cv2


@dataclass(frozen=True)
class DetectResult:
    name: str
    image: Optional[np.ndarray]
    keypoints: Sequence[cv2.KeyPoint]
    descriptors: Optional[np.ndarray]

    @property
    def num_keypoints(self) -> int:
        return len(self.keypoints)
