"""
Single-shot Darknet inference task built on top of `darknet_kit`.

The host drops a serialized configuration at a well-known path; the task
loads the network, runs one prediction, ranks and labels the detections and
writes one result file below the sandbox root.

- config: execution configuration (structural parse only)
- sandbox: fixed-root path resolution
- reporting: result line format + atomic write
- runner: the sequential pipeline and process entry point
"""

from __future__ import annotations

from .config import EXECUTION_CONFIG_PATH, InferenceConfig, read_execution_config, try_parse
from .reporting import format_detection, format_detections, write_result
from .sandbox import Sandbox
from .runner import main, run_inference

__all__ = [
    "EXECUTION_CONFIG_PATH",
    "InferenceConfig",
    "read_execution_config",
    "try_parse",
    "format_detection",
    "format_detections",
    "write_result",
    "Sandbox",
    "main",
    "run_inference",
]
