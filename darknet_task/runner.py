from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List, Optional, Union

import cv2
import numpy as np

from darknet_kit import DarknetNetwork, LabeledDetection, load_labels, load_network, process
from darknet_kit.errors import ModelLabelMismatch, ResourceUnavailable, ResultFormatError
from darknet_task.config import EXECUTION_CONFIG_PATH, InferenceConfig, read_execution_config, try_parse
from darknet_task.reporting import format_detections, write_result
from darknet_task.sandbox import Sandbox

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_MALFORMED_CONFIG = 2

NetworkLoader = Callable[[Path, Path], DarknetNetwork]


def read_image(path: Union[str, Path]) -> np.ndarray:
    img = cv2.imread(str(path))
    if img is None:
        raise ResourceUnavailable(f"Could not read image at path: {path}")
    return img


def run_inference(
    config: InferenceConfig,
    sandbox: Sandbox,
    *,
    network_loader: Optional[NetworkLoader] = None,
) -> List[LabeledDetection]:
    """
    Load the network and labels, run one prediction on the input image and
    write the ranked result to the configured output path.
    """

    loader = network_loader or load_network

    print("loading network...")
    net = loader(sandbox.resolve(config.model_config_path), sandbox.resolve(config.model_weights_path))
    labels = load_labels(sandbox.resolve(config.labels_path))

    image = read_image(sandbox.resolve(config.input_path))
    print("running inference on image...")
    raw = net.predict(
        image,
        config.objectness_threshold,
        config.hierarchical_threshold,
        config.iou_threshold,
        config.letterbox,
    )

    detections = process(raw, labels, config.class_threshold)

    # Format fully before touching the output path.
    text = format_detections(detections)
    print("writing results...")
    write_result(text, sandbox.resolve(config.output_path))
    return detections


def main(
    config_path: Union[str, Path] = EXECUTION_CONFIG_PATH,
    root: Union[str, Path] = "/",
    *,
    network_loader: Optional[NetworkLoader] = None,
) -> int:
    print("reading execution configuration file...")
    try:
        data = read_execution_config(config_path)
    except OSError as exc:
        print(f"ERROR: could not read execution configuration {config_path}: {exc}", file=sys.stderr)
        return EXIT_FAILED

    print("parsing input...")
    config = try_parse(data)
    if config is None:
        print(f"ERROR: malformed execution configuration: {config_path}", file=sys.stderr)
        return EXIT_MALFORMED_CONFIG

    try:
        detections = run_inference(config, Sandbox(root), network_loader=network_loader)
    except (OSError, ModelLabelMismatch, ResultFormatError) as exc:
        print(f"ERROR: {type(exc).__name__}: {exc}", file=sys.stderr)
        return EXIT_FAILED

    print(f"Detections: {len(detections)}")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
