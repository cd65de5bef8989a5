from dataclasses import dataclass
import numpy as np


@dataclass
class NMSConfig:
    iou_threshold: float = 0.45


def box_iou(box: np.ndarray, others: np.ndarray) -> np.ndarray:
    """
    IoU of one centre-format box (4,) against (N, 4) centre-format boxes.
    """

    x1 = np.maximum(box[0] - box[2] / 2, others[:, 0] - others[:, 2] / 2)
    y1 = np.maximum(box[1] - box[3] / 2, others[:, 1] - others[:, 3] / 2)
    x2 = np.minimum(box[0] + box[2] / 2, others[:, 0] + others[:, 2] / 2)
    y2 = np.minimum(box[1] + box[3] / 2, others[:, 1] + others[:, 3] / 2)

    w = np.maximum(0.0, x2 - x1)
    h = np.maximum(0.0, y2 - y1)
    inter = w * h
    union = box[2] * box[3] + others[:, 2] * others[:, 3] - inter
    return inter / np.maximum(union, 1e-9)


def suppress_per_class(boxes: np.ndarray, probs: np.ndarray, cfg: NMSConfig) -> np.ndarray:
    """
    Darknet-style sorted NMS. Expects boxes shape (N,4) in cx, cy, w, h and
    class probabilities shape (N, C).

    For every class, detections are visited in descending probability order;
    a later detection whose IoU with a surviving one exceeds the threshold has
    that class probability set to 0. Boxes are never removed, so indices stay
    aligned with the input. Returns a new probability array.
    """

    probs = np.array(probs, dtype=np.float32, copy=True)
    if boxes.size == 0 or probs.size == 0:
        return probs

    for k in range(probs.shape[1]):
        # Stable so that equal scores are visited in input order.
        order = np.argsort(-probs[:, k], kind="stable")
        order = order[probs[order, k] > 0]

        while order.size > 0:
            i = order[0]
            rest = order[1:]
            if rest.size == 0:
                break

            iou = box_iou(boxes[i], boxes[rest])
            suppressed = iou > cfg.iou_threshold
            probs[rest[suppressed], k] = 0.0
            order = rest[~suppressed]

    return probs
