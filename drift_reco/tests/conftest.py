import math
import pytest

from drift_reco.algo.drift_config import DriftAlgoConfig
from drift_reco.geom.geom_service import GeometryService, Layer

GEOMETRY_TSV = """# det_id	det_name	n_ele	cell_spacing	cell_width	angle_from_vert	xoffset	height	x0	y0	z0	theta_x	theta_y	theta_z
1	MB1_SL1_L1	50	4.2	4.2	0.0	0.0	250.0	0.0	0.0	400.0	0.0	0.0	0.0
2	MB1_SL1_L2	50	4.2	4.2	0.0	2.1	250.0	0.0	0.0	401.3	0.0	0.0	0.0
3	MB1_SL2_L1	60	4.2	4.2	{angle}	0.0	250.0	10.0	-5.0	420.0	0.0	0.0	0.0
""".format(angle=math.pi / 2)


@pytest.fixture
def config():
    return DriftAlgoConfig(drift_velocity=0.00543, min_time=-3.0, max_time=415.0, hit_resolution=0.02)


@pytest.fixture
def geometry_tsv(tmp_path):
    path = tmp_path / "geometry.tsv"
    path.write_text(GEOMETRY_TSV)
    return str(path)


@pytest.fixture
def geom(geometry_tsv):
    return GeometryService(tsv_path=geometry_tsv)


@pytest.fixture
def layer():
    return Layer(detector_id=7, detector_name="MB2_SL1_L3", x0=0.0, y0=0.0, z0=500.0,
                 n_elements=49, spacing=4.2, cell_width=4.2)
