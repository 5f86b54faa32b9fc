from abc import ABC, abstractmethod
from typing import Iterator
import numpy as np


class IImageRepository(ABC):
    @abstractmethod
    def load_image(self, path: str) -> np.ndarray:
        pass

    @abstractmethod
    def iter_input_images(self, path: str) -> Iterator[np.ndarray]:
        pass

    @abstractmethod
    def save_image(self, image: np.ndarray, name: str) -> str:
        pass
