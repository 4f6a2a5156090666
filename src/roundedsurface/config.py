"""
Configuration & Defaults
========================
This module serves as the central registry for global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (subdivisions, depth bias, mesh
   names) from being scattered throughout the code.
2. Deployment: It reads the few environment overrides the command line
   honours.

Exports:
    DEFAULT_CORNER_SUBDIVISIONS (int): Corner resolution used when none is given.
    DEFAULT_DEPTH_OFFSET (float): Depth bias applied to every surface.
    SURFACE_MESH_NAME (str): Name given to every built surface mesh.
"""
import logging
import os

# Geometry defaults
DEFAULT_CORNER_SUBDIVISIONS: int = 3
DEFAULT_DEPTH_OFFSET: float = 0.001
DEFAULT_RECT_SIZE: tuple[float, float] = (1.0, 1.0)
DEFAULT_PIVOT: tuple[float, float] = (0.5, 0.5)

SURFACE_MESH_NAME: str = "Surface Mesh"

# Export
DEFAULT_EXPORT_PATH: str = "surface.obj"

# Logging
LOG_LEVEL_ENV_VAR: str = "ROUNDEDSURFACE_LOG_LEVEL"


def get_log_level(default: int = logging.INFO) -> int:
    """
    Log level from the environment, e.g. ROUNDEDSURFACE_LOG_LEVEL=DEBUG.
    Unknown names fall back to `default`.
    """
    name = os.environ.get(LOG_LEVEL_ENV_VAR, "")
    level = logging.getLevelName(name.upper()) if name else default
    return level if isinstance(level, int) else default
