from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np

from ..errors import ModelLoadError


PathLike = Union[str, Path]


@dataclass(frozen=True)
class OpenCvDarknetBackendConfig:
    """
    Configuration for OpenCV DNN inference of Darknet models.

    - preferable_backend/preferable_target: cv2.dnn.DNN_BACKEND_* / DNN_TARGET_* values
    - output_names: override the auto-selected (unconnected) output layers if needed
    """

    preferable_backend: Optional[int] = None
    preferable_target: Optional[int] = None
    output_names: Optional[Sequence[str]] = None


class OpenCvDarknetBackend:
    """
    Minimal OpenCV DNN backend for Darknet `.cfg` + `.weights` models.

    Expects an NCHW float32 blob shaped (1, 3, H, W) with RGB values in [0, 1].
    Returns all detection layer outputs stacked into one (N, 5 + C) array of
    rows `[cx, cy, w, h, objectness, class_scores...]`, box values relative to
    the network input.
    """

    def __init__(
        self,
        model_config_path: PathLike,
        model_weights_path: PathLike,
        cfg: OpenCvDarknetBackendConfig = OpenCvDarknetBackendConfig(),
    ):
        try:
            import cv2  # type: ignore
        except Exception as e:  # pragma: no cover
            raise ImportError(
                "OpenCV is required for the Darknet backend. Install it with `pip install opencv-python`."
            ) from e

        self.model_config_path = Path(model_config_path)
        self.model_weights_path = Path(model_weights_path)
        for p in (self.model_config_path, self.model_weights_path):
            if not p.is_file():
                raise ModelLoadError(f"Model file not found: {p}")

        try:
            self.net = cv2.dnn.readNetFromDarknet(str(self.model_config_path), str(self.model_weights_path))
        except cv2.error as e:
            raise ModelLoadError(f"Could not load Darknet model {self.model_config_path}: {e}") from e
        if self.net.empty():
            raise ModelLoadError(f"Darknet model is empty: {self.model_config_path}")

        if cfg.preferable_backend is not None:
            self.net.setPreferableBackend(cfg.preferable_backend)
        if cfg.preferable_target is not None:
            self.net.setPreferableTarget(cfg.preferable_target)

        self.output_names = list(cfg.output_names or self.net.getUnconnectedOutLayersNames())

    def infer(self, blob: np.ndarray) -> np.ndarray:
        self.net.setInput(blob)
        outputs = self.net.forward(self.output_names)
        rows = [np.asarray(o, dtype=np.float32).reshape(-1, o.shape[-1]) for o in outputs]
        if not rows:
            return np.empty((0, 5), dtype=np.float32)
        return np.vstack(rows)
