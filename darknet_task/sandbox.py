from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from typing import Union

from darknet_kit.errors import ResourceUnavailable


PathLike = Union[str, Path]


class Sandbox:
    """
    Fixed-root file layer. Every path handed to the task is resolved below
    `root`; absolute paths are re-anchored at the root.

    Paths are untrusted, so `..` components are normalised first and anything
    that would land outside the root is refused.
    """

    def __init__(self, root: PathLike = "/"):
        self.root = Path(root).resolve()

    def resolve(self, path: PathLike) -> Path:
        p = PurePosixPath(os.fspath(path))
        if p.is_absolute():
            p = p.relative_to(p.anchor)

        normalised = os.path.normpath(str(self.root / p))
        resolved = Path(normalised)
        if resolved != self.root and self.root not in resolved.parents:
            raise ResourceUnavailable(f"Path escapes sandbox root {self.root}: {path}")
        return resolved
