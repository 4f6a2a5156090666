import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from roundedsurface.controller.corner_cache import CornerCache
from roundedsurface.controller.mesher import SurfaceMesher
from roundedsurface.model.corner_radii import CornerRadii
from roundedsurface.model.parameters import RectGeometry, SurfaceParameters, UVMode


@pytest.fixture()
def mesher():
    return SurfaceMesher(cache=CornerCache())


@pytest.fixture()
def scenario_parameters():
    """10 x 6 rect, radius 1, n = 3, depth 1, both bevels 0.25."""
    return SurfaceParameters(
        corner_radii=CornerRadii.uniform(1.0),
        surface_depth=1.0,
        front_face_depth=0.25,
        back_face_depth=0.25,
        corner_subdivisions=3,
        uv_mode=UVMode.NORMALIZED,
    )


@pytest.fixture()
def scenario_rect():
    return RectGeometry(size=(10.0, 6.0), pivot=(0.5, 0.5))


@pytest.fixture()
def scenario_mesh(mesher, scenario_parameters, scenario_rect):
    return mesher.build(scenario_parameters, scenario_rect)


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
