import pytest

from gravcore.data_models import Body
from gravcore.vector_utils import Vec3


@pytest.fixture
def make_body():
    def _make(mass=1.0, position=(0.0, 0.0, 0.0), velocity=(0.0, 0.0, 0.0), density=1.0, **kwargs):
        return Body(mass, density, Vec3(*position), Vec3(*velocity), **kwargs)
    return _make
