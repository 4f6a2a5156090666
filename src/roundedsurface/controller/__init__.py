"""
Surface Generation Engine
=========================
The core implementation of the rounded surface mesher.

Why is this file needed?
------------------------
1. Geometry: It builds the spherical corner primitive and stitches corners,
   faces and side walls into one closed mesh.
2. Lifecycle: It rebuilds the mesh whenever a parameter or the host
   rectangle changes.

Note: The geometry modules are pure Python/NumPy and do NOT import PySide6;
only `component` does.
"""
