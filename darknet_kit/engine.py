from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

import numpy as np

from .errors import ModelLoadError
from .letterbox import letterbox as letterbox_image
from .nms import NMSConfig, suppress_per_class
from .types import BBox, RawDetection


PathLike = Union[str, Path]


def read_network_input_size(model_config_path: PathLike) -> Tuple[int, int]:
    """
    Read (width, height) from the `[net]` section of a Darknet `.cfg` file.
    """

    width: Optional[int] = None
    height: Optional[int] = None
    in_net = False

    try:
        with open(model_config_path, "r", encoding="utf-8") as f:
            for raw in f:
                line = raw.split("#", 1)[0].split(";", 1)[0].strip()
                if not line:
                    continue
                if line.startswith("["):
                    if in_net:
                        break
                    in_net = line in ("[net]", "[network]")
                    continue
                if not in_net or "=" not in line:
                    continue
                key, value = (s.strip() for s in line.split("=", 1))
                if key == "width":
                    width = int(value)
                elif key == "height":
                    height = int(value)
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        raise ModelLoadError(f"Could not read network config {model_config_path}: {exc}") from exc

    if not width or not height:
        raise ModelLoadError(f"Network config has no [net] width/height: {model_config_path}")
    return width, height


@dataclass(frozen=True)
class PreprocessResult:
    blob: np.ndarray
    orig_size: Tuple[int, int]
    ratio: Tuple[float, float]
    pad: Tuple[float, float]


class DarknetNetwork:
    """
    Loaded network: preprocess (letterbox or resize) -> inference -> decode -> NMS.

    The network expects BGR images (OpenCV-style) as `np.ndarray` and returns
    `RawDetection`s whose boxes are relative to the network input. Boxes are
    not mapped back through the letterbox padding.
    """

    def __init__(
        self,
        infer_fn: Callable[[np.ndarray], np.ndarray],
        input_size: Tuple[int, int],
    ):
        self._infer_fn = infer_fn
        self.input_size = input_size

    def preprocess(self, image_bgr: np.ndarray, letterbox: bool = True) -> PreprocessResult:
        if image_bgr is None or not hasattr(image_bgr, "shape"):
            raise TypeError("image_bgr must be a NumPy array (BGR).")
        if image_bgr.ndim != 3 or image_bgr.shape[2] != 3:
            raise ValueError(f"Expected image shape (H, W, 3), got {getattr(image_bgr, 'shape', None)}")

        orig_h, orig_w = image_bgr.shape[:2]
        img, ratio, pad = letterbox_image(image_bgr, new_shape=self.input_size, scale_fill=not letterbox)

        # BGR -> RGB, normalize, HWC -> CHW, add batch
        blob = img[:, :, ::-1].astype(np.float32) / 255.0
        blob = np.ascontiguousarray(np.transpose(blob, (2, 0, 1))[None, ...])

        return PreprocessResult(blob=blob, orig_size=(orig_w, orig_h), ratio=ratio, pad=pad)

    @staticmethod
    def decode(preds: np.ndarray, objectness_threshold: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Split (N, 5 + C) rows into boxes, objectness and class probabilities.

        Rows whose objectness does not exceed the threshold are dropped and
        class probabilities not above it are zeroed, as Darknet does.
        """

        p = np.asarray(preds, dtype=np.float32)
        if p.ndim != 2 or p.shape[1] < 5:
            if p.size == 0:
                return np.empty((0, 4), np.float32), np.empty((0,), np.float32), np.empty((0, 0), np.float32)
            raise ValueError(f"Unsupported Darknet output shape: {p.shape}")

        p = p[p[:, 4] > objectness_threshold]
        boxes = p[:, 0:4]
        objectness = p[:, 4]
        probs = p[:, 5:]
        probs = np.where(probs > objectness_threshold, probs, 0.0).astype(np.float32)
        return boxes, objectness, probs

    def predict(
        self,
        image_bgr: np.ndarray,
        objectness_threshold: float,
        hierarchical_threshold: float,
        iou_threshold: float,
        letterbox: bool = True,
    ) -> List[RawDetection]:
        # hierarchical_threshold only matters for tree-structured (YOLO9000)
        # heads; flat heads coming out of the OpenCV importer ignore it.
        del hierarchical_threshold

        prep = self.preprocess(image_bgr, letterbox=letterbox)
        preds = self._infer_fn(prep.blob)
        boxes, objectness, probs = self.decode(preds, objectness_threshold)

        if iou_threshold > 0:
            probs = suppress_per_class(boxes, probs, NMSConfig(iou_threshold=iou_threshold))

        return [
            RawDetection(
                bbox=BBox(x=float(x), y=float(y), w=float(w), h=float(h)),
                objectness=float(obj),
                probabilities=tuple(float(v) for v in row),
            )
            for (x, y, w, h), obj, row in zip(boxes, objectness, probs)
        ]


def load_network(
    model_config_path: PathLike,
    model_weights_path: PathLike,
    *,
    backend: str = "opencv",
    opencv_preferable_backend: Optional[int] = None,
    opencv_preferable_target: Optional[int] = None,
) -> DarknetNetwork:
    """
    Load a Darknet network from its `.cfg` topology and `.weights` file.

    Raises ModelLoadError when either file is missing or the backend refuses
    the model.
    """

    config_path = Path(model_config_path)
    if not config_path.is_file():
        raise ModelLoadError(f"Model config not found: {config_path}")
    input_size = read_network_input_size(config_path)

    chosen = backend.lower()
    if chosen == "opencv":
        from .backends.opencv_dnn_backend import OpenCvDarknetBackend, OpenCvDarknetBackendConfig

        cv_backend = OpenCvDarknetBackend(
            config_path,
            model_weights_path,
            OpenCvDarknetBackendConfig(
                preferable_backend=opencv_preferable_backend,
                preferable_target=opencv_preferable_target,
            ),
        )
        return DarknetNetwork(cv_backend.infer, input_size)

    raise ValueError(f"Unsupported backend: {backend!r}")
