from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import ModelLabelMismatch
from .types import LabeledDetection, RawDetection


def best_class(probabilities: Sequence[float], threshold: float) -> Optional[Tuple[int, float]]:
    """
    Return (class_index, probability) of the most likely class, or None when
    no class reaches `threshold`. The first index wins on equal probabilities.
    """

    best: Optional[Tuple[int, float]] = None
    for index, prob in enumerate(probabilities):
        if not prob >= threshold:
            continue
        if best is None or prob > best[1]:
            best = (index, float(prob))
    return best


@dataclass
class PostConfig:
    """
    Konfigurasi untuk post processing hasil Darknet
    """
    class_threshold: float = 0.5


class DetectionPostprocessor:
    """
    Turns raw engine detections into a ranked, labeled result:

    - best class per detection, discarded when below `class_threshold`
    - class index resolved through the label table
    - stable sort by probability, highest first (input order kept on ties)
    """

    def __init__(self, labels: Sequence[str], cfg: PostConfig):
        self.labels = labels
        self.cfg = cfg

    def process(self, raw_detections: Iterable[RawDetection]) -> List[LabeledDetection]:
        # sorted() is stable, also with reverse=True
        return sorted(self._label(raw_detections), key=lambda d: d.probability, reverse=True)

    # ------------------------------------------------------------------ #
    # Helper internal
    # ------------------------------------------------------------------ #
    def _label(self, raw_detections: Iterable[RawDetection]) -> Iterator[LabeledDetection]:
        for det in raw_detections:
            match = best_class(det.probabilities, self.cfg.class_threshold)
            if match is None:
                continue
            class_id, prob = match
            yield LabeledDetection(
                bbox=det.bbox,
                probability=prob,
                label=self._resolve(class_id),
                class_id=class_id,
            )

    def _resolve(self, class_id: int) -> str:
        if class_id >= len(self.labels):
            raise ModelLabelMismatch(
                f"Model produced class {class_id} but the label table has {len(self.labels)} entries."
            )
        return self.labels[class_id]


def process(
    raw_detections: Iterable[RawDetection],
    labels: Sequence[str],
    class_threshold: float,
) -> List[LabeledDetection]:
    return DetectionPostprocessor(labels, PostConfig(class_threshold=class_threshold)).process(raw_detections)
