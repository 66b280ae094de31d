"""Monte Carlo path tracer for scenes of analytic spheres.

This package renders a static scene into an 8-bit color buffer by casting
many jittered camera rays per pixel and simulating their bounces, with
support for:
- Diffuse, glossy, mirror and fuzzy-mirror surfaces
- Fresnel glass with Beer-Lambert absorption
- Emissive surfaces and a gradient skybox
- Thin-lens depth of field
- Deterministic, thread-count independent output

Subpackages:
    core: Vector algebra, random streams, integrator, scheduler, color buffer
    geometry: Shape contract and the sphere primitive
    materials: Material record and scatter rules
    scene: Shape collections and demonstration scenes
    camera: Thin-lens camera model
    preview: Image export
"""

__version__ = "0.1.0"
