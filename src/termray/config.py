"""Taichi runtime configuration.

The parallel renderer keeps its geometry and rays in float64 Taichi fields
and relies on IEEE infinities and NaN comparisons inside its kernels, so
Taichi must be initialized with ``default_fp=ti.f64`` and fast math
disabled. ``init_taichi`` does this once per process; later calls are
no-ops.

Example:
    >>> from termray.config import init_taichi
    >>> init_taichi()  # CPU backend
"""

from __future__ import annotations

from typing import Any

import taichi as ti

_initialized = False


def init_taichi(arch: Any = None, **kwargs: Any) -> bool:
    """Initialize Taichi for float64 rendering.

    Args:
        arch: Taichi backend (e.g. ``ti.cpu``, ``ti.gpu``); defaults to CPU.
        **kwargs: Extra options forwarded to ``ti.init``.

    Returns:
        True if this call initialized Taichi, False if it already was.
    """
    global _initialized
    if _initialized:
        return False

    ti.init(
        arch=ti.cpu if arch is None else arch,
        default_fp=ti.f64,
        fast_math=False,
        **kwargs,
    )
    _initialized = True
    return True


def is_initialized() -> bool:
    """Whether ``init_taichi`` has run in this process."""
    return _initialized
