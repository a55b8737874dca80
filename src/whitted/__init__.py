"""Whitted-style ray tracer built on Taichi.

This package renders scenes of spheres lit by ambient, point and
directional lights, with hard shadows and depth-bounded mirror
reflections. All per-ray work runs in Taichi functions over float64 data.

Subpackages:
    core: Vector math, lighting, the tracer and the render loop
    geometry: The sphere primitive and its ray intersection
    scene: Sphere and light storage, the scene manager, the classic scene
    camera: The fixed-eye viewport mapping pixels to ray directions
    preview: PNG export and Matplotlib preview

Taichi must be initialized with :func:`src.whitted.core.runtime.init`
before importing modules that allocate fields (scene, camera,
core.lighting, core.tracer, core.render).
"""

__version__ = "0.1.0"
