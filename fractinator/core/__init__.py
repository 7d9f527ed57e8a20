"""Animation core for fractinator.

Modules:
- branching: branching-line fractal engine
- triangles: nested-triangle fractal engine
- params / commands: tunable state and the per-frame command channel
- framebuffer / render_loop: persistent raster and the worker that drives it
- view: host-independent glue (surface, pointer, menu commands, music)
- music: drum/noise track player
"""
