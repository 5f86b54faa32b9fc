from dataclasses import dataclass
from typing import Optional
import numpy as np


@dataclass
class DrawResult:
    """Result of rendering one pipeline - either a frame or the reason it failed."""

    pipeline_name: str
    frame: Optional[np.ndarray] = None

    # Error handling
    error_message: Optional[str] = None
    success: bool = False

    @classmethod
    def ok(cls, pipeline_name: str, frame: np.ndarray) -> "DrawResult":
        return cls(pipeline_name=pipeline_name, frame=frame, success=True)

    @classmethod
    def failure(cls, pipeline_name: str, error_message: str) -> "DrawResult":
        """
        Create a failed result; the caller decides whether to substitute a placeholder.
        """
        return cls(
            pipeline_name=pipeline_name,
            frame=None,
            error_message=error_message,
            success=False
        )
