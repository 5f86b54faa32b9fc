from abc import ABC, abstractmethod
from typing import List
import numpy as np
import cv2


class IMatcher(ABC):
    @abstractmethod
    def match_features(self, query_desc: np.ndarray, train_desc: np.ndarray) -> List[cv2.DMatch]:
        """Return the nearest train descriptor for every query descriptor, unfiltered."""
        pass
