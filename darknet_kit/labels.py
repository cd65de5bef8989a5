from __future__ import annotations

from pathlib import Path
from typing import List, Union

from .errors import ResourceUnavailable


PathLike = Union[str, Path]


def parse_labels(text: str) -> List[str]:
    """
    Split a Darknet `.names` payload into a label table.

    Line N (0-indexed) is the label for class N. Only the line terminator is
    removed: blank lines stay in place so indices keep matching line numbers,
    and a final terminator does not add an empty entry.
    """

    if not text:
        return []

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def load_labels(labels_path: PathLike) -> List[str]:
    """
    Load a label table from a UTF-8 file with one label per line.

    I/O errors propagate to the caller; a file that is not UTF-8 raises
    ResourceUnavailable.
    """

    with open(labels_path, "r", encoding="utf-8", newline="") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as exc:
            raise ResourceUnavailable(f"Labels file is not UTF-8: {labels_path}") from exc
    return parse_labels(text)
