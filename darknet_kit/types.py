from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class BBox:
    """
    Darknet-native box: centre (x, y) and size (w, h), relative to the network input.
    """

    x: float
    y: float
    w: float
    h: float

    def as_xywh(self) -> Tuple[float, float, float, float]:
        return self.x, self.y, self.w, self.h


@dataclass(frozen=True)
class RawDetection:
    """
    One candidate box as produced by the engine, before class thresholding.
    """

    bbox: BBox
    objectness: float
    probabilities: Tuple[float, ...]


@dataclass(frozen=True)
class LabeledDetection:
    bbox: BBox
    probability: float
    label: str
    class_id: Optional[int] = None
