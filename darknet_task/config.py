from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union


EXECUTION_CONFIG_PATH = "/execution_config"

PATH_KEYS = (
    "input_path",
    "model_config_path",
    "model_weights_path",
    "labels_path",
    "output_path",
)
THRESHOLD_KEYS = (
    "objectness_threshold",
    "class_threshold",
    "hierarchical_threshold",
    "iou_threshold",
)


@dataclass(frozen=True)
class InferenceConfig:
    input_path: str
    model_config_path: str
    model_weights_path: str
    labels_path: str
    output_path: str
    # Darknet zeroes class probabilities below this, so class_threshold
    # should sit above it to make any difference.
    objectness_threshold: float
    class_threshold: float
    # Only used by tree-structured (YOLO9000) heads.
    hierarchical_threshold: float
    iou_threshold: float
    letterbox: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _is_number(value: object) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, float))


def try_parse(data: bytes) -> Optional[InferenceConfig]:
    """
    Deserialize an execution configuration.

    Only the structure is checked (keys present, values of the right type).
    Paths are not checked for existence and thresholds are not range-checked:
    those surface later as I/O or logic errors. Returns None when the payload
    is not a well-formed configuration.
    """

    try:
        payload = json.loads(data.decode("utf-8"))
    except (ValueError, RecursionError):
        # ValueError covers bad UTF-8, bad JSON and over-long integer literals.
        return None
    if not isinstance(payload, dict):
        return None

    allowed = set(PATH_KEYS) | set(THRESHOLD_KEYS) | {"letterbox"}
    if set(payload.keys()) != allowed:
        return None
    if not all(isinstance(payload[k], str) for k in PATH_KEYS):
        return None
    if not all(_is_number(payload[k]) for k in THRESHOLD_KEYS):
        return None
    if not isinstance(payload["letterbox"], bool):
        return None

    try:
        thresholds = {k: float(payload[k]) for k in THRESHOLD_KEYS}
    except OverflowError:
        return None

    return InferenceConfig(
        **{k: payload[k] for k in PATH_KEYS},
        **thresholds,
        letterbox=payload["letterbox"],
    )


def read_execution_config(path: Union[str, Path] = EXECUTION_CONFIG_PATH) -> bytes:
    return Path(path).read_bytes()
