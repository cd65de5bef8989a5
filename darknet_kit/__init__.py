"""
Lightweight Darknet detection helpers.

Loads a Darknet `.cfg` + `.weights` network through OpenCV DNN, runs a single
forward pass and turns the raw per-box, per-class outputs into a ranked,
labeled result. No external dependencies beyond NumPy and OpenCV.
"""

from .types import BBox, LabeledDetection, RawDetection
from .errors import ModelLabelMismatch, ModelLoadError, ResourceUnavailable, ResultFormatError
from .letterbox import letterbox
from .nms import NMSConfig, suppress_per_class
from .labels import load_labels, parse_labels
from .postprocess import DetectionPostprocessor, PostConfig, best_class, process
from .engine import DarknetNetwork, load_network, read_network_input_size

__all__ = [
    "BBox",
    "LabeledDetection",
    "RawDetection",
    "ModelLabelMismatch",
    "ModelLoadError",
    "ResourceUnavailable",
    "ResultFormatError",
    "letterbox",
    "NMSConfig",
    "suppress_per_class",
    "load_labels",
    "parse_labels",
    "DetectionPostprocessor",
    "PostConfig",
    "best_class",
    "process",
    "DarknetNetwork",
    "load_network",
    "read_network_input_size",
]
