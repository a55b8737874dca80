"""Core rendering module.

Components:
    runtime: Taichi initialization (float64, CPU by default)
    vector: 3-vector type and vector helpers used in Taichi scope
    lighting: Ambient, diffuse and specular lighting with hard shadows
    tracer: Local shading blended with depth-bounded reflection
    render: Render target and per-pixel render loop
"""

from .vector import (
    INF,
    add,
    add_scalar,
    dot,
    length,
    normalize,
    ray_at,
    real,
    reflect,
    scale,
    sub,
    sub_scalar,
    vec3,
)

# Note: lighting, tracer and render allocate Taichi fields and are NOT
# imported here, so that importing runtime does not require ti.init first.
# Import them directly, e.g. from src.whitted.core.tracer import trace

__all__ = [
    "INF",
    "real",
    "vec3",
    "add",
    "sub",
    "add_scalar",
    "sub_scalar",
    "scale",
    "dot",
    "length",
    "normalize",
    "ray_at",
    "reflect",
]
