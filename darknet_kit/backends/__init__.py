"""
Inference backends for darknet_kit.

Backends are kept in a separate module so core functionality (post-processing,
label loading) stays lightweight and can be used without an inference runtime.
"""

from __future__ import annotations

__all__ = []
