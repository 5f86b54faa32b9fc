from typing import Iterator, Optional
import logging
import cv2
import numpy as np
from pathlib import Path
from feature_match.application.interfaces.image_repository_interface import IImageRepository
from feature_match.infrastructure.video_processors.frame_reader import FrameReader

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.bmp')
VIDEO_EXTENSIONS = ('.mp4', '.avi', '.mov', '.mkv')


class FileImageRepository(IImageRepository):
    def __init__(self, output_path: str = "data/results", frame_reader: Optional[FrameReader] = None):
        self.output_path = Path(output_path)
        self.frame_reader = frame_reader or FrameReader()

    def load_image(self, path: str) -> np.ndarray:
        image = cv2.imread(str(path))
        if image is None:
            raise FileNotFoundError(f"Image not found: {path}")
        return image

    def iter_input_images(self, path: str) -> Iterator[np.ndarray]:
        """
        Yield input images from a folder (sorted by file name), a video or a single image.
        """
        source = Path(path)
        if source.is_dir():
            files = sorted(p for p in source.iterdir() if p.suffix.lower() in IMAGE_EXTENSIONS)
            for file in files:
                image = cv2.imread(str(file))
                if image is None:
                    logger.warning("Skipping unreadable image %s", file)
                    continue
                yield image
        elif source.suffix.lower() in VIDEO_EXTENSIONS:
            yield from self.frame_reader.read_frames(source)
        else:
            yield self.load_image(str(source))

    def save_image(self, image: np.ndarray, name: str) -> str:
        self.output_path.mkdir(parents=True, exist_ok=True)
        image_path = self.output_path / name
        if not cv2.imwrite(str(image_path), image):
            raise IOError(f"Cannot write image: {image_path}")
        return str(image_path)
