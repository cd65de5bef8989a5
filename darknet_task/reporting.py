"""
Result formatting and writing for the inference task.

The line layout is consumed downstream and must stay byte-exact:

    <label>\\t<probability * 100, 2 decimals>%\\tx: <x>\\ty: <y>\\tw: <w>\\th: <h>\\n
"""

from __future__ import annotations

import math
import os
import tempfile
from pathlib import Path
from typing import Iterable, Union

import numpy as np

from darknet_kit.errors import ResultFormatError
from darknet_kit.types import LabeledDetection


def format_number(value: float) -> str:
    """
    Shortest float32 decimal form, no exponent, no trailing ".0" (10.0 -> "10").
    """

    try:
        v = np.float32(value)
    except (TypeError, ValueError) as exc:
        raise ResultFormatError(f"Not a number: {value!r}") from exc
    if not math.isfinite(float(v)):
        raise ResultFormatError(f"Not a finite number: {value!r}")
    return np.format_float_positional(v, trim="-")


def format_probability(probability: float) -> str:
    try:
        percent = np.float32(probability) * np.float32(100.0)
    except (TypeError, ValueError) as exc:
        raise ResultFormatError(f"Not a probability: {probability!r}") from exc
    if not math.isfinite(float(percent)):
        raise ResultFormatError(f"Not a finite probability: {probability!r}")
    return f"{float(percent):.2f}%"


def format_detection(det: LabeledDetection) -> str:
    x, y, w, h = det.bbox.as_xywh()
    return (
        f"{det.label}\t{format_probability(det.probability)}"
        f"\tx: {format_number(x)}\ty: {format_number(y)}"
        f"\tw: {format_number(w)}\th: {format_number(h)}\n"
    )


def format_detections(detections: Iterable[LabeledDetection]) -> str:
    return "".join(format_detection(d) for d in detections)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_result(text: str, path: Union[str, Path]) -> Path:
    """
    Write `text` to `path` atomically: a temporary sibling is written first and
    renamed over the destination, so a failure never leaves a partial file.
    """

    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        # mkstemp creates 0600; match a plainly created file instead.
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return path
