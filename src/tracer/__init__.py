"""Animated Taichi ray caster.

This package renders a small animated scene by casting one ray per pixel
against analytic primitives, with support for:
- Sphere and plane primitives with nearest-hit selection
- Point and directional lights with shadow rays
- Incremental rendering spread over display ticks
- A bouncing-ball animation driven by frame time and a jump input

Subpackages:
    core: Vector utilities, colors, shading, incremental renderer, frame loop
    geometry: Shape primitives and intersection algorithms
    scene: Scene storage, scene manager and the default scene
    camera: Fixed pinhole camera with ray generation
    animation: Bounce physics for the animated primitive
    preview: Interactive window, Matplotlib display and PNG export
"""

__version__ = "0.1.0"
