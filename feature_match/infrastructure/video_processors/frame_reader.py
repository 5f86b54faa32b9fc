import cv2
import numpy as np
from pathlib import Path
from typing import Iterator

class FrameReader:
    def __init__(self, frame_skip: int = 1):
        if frame_skip < 1:
            raise ValueError(f"frame_skip must be >= 1, got {frame_skip}")
        self.frame_skip = frame_skip

    def read_frames(self, video_path: Path) -> Iterator[np.ndarray]:
        cap = cv2.VideoCapture(str(video_path))
        if not cap.isOpened():
            raise FileNotFoundError(f"Cannot open video: {video_path}")

        idx = 0
        try:
            while True:
                ret, frame = cap.read()
                if not ret:
                    break
                if idx % self.frame_skip == 0:
                    yield frame
                idx += 1
        finally:
            cap.release()
