"""Taichi runtime initialization.

The tracer relies on double precision and strict IEEE-754 semantics:
reference colors are reproduced to the last few bits, and degenerate rays
must yield NaN roots that compare false against any range. Fast-math
lowering would break both, so it is switched off here.

Taichi fields in :mod:`src.whitted.scene` and :mod:`src.whitted.core.render`
are allocated at import time, so call :func:`init` before importing them.

Example:
    >>> from src.whitted.core.runtime import init
    >>> init()  # CPU backend, f64 by default
    >>> from src.whitted.scene.classic import create_classic_scene
"""

import taichi as ti


def init(arch=None, **kwargs) -> None:
    """Initialize Taichi for double-precision ray tracing.

    Args:
        arch: Taichi backend (e.g. ``ti.cpu``, ``ti.cuda``). Defaults to
            ``ti.cpu``, which supports f64 on every platform.
        **kwargs: Extra options forwarded to ``ti.init`` (e.g.
            ``random_seed``, ``debug``).
    """
    if arch is None:
        arch = ti.cpu
    ti.init(arch=arch, default_fp=ti.f64, fast_math=False, **kwargs)


def arch_from_name(name: str):
    """Resolve a backend name such as ``"cpu"`` or ``"cuda"`` to a Taichi arch.

    Raises:
        ValueError: If Taichi has no backend with that name.
    """
    archs = {
        "cpu": ti.cpu,
        "gpu": ti.gpu,
        "cuda": ti.cuda,
        "vulkan": ti.vulkan,
    }
    try:
        return archs[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown Taichi backend: {name}") from None
