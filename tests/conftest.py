import pytest

from fluidblob.engine import FieldParams, PointField


@pytest.fixture
def make_field():
    """Build a small seeded field; keyword args go to FieldParams."""
    def _make(count=1, width=800, height=600, **params):
        return PointField(width, height, params=FieldParams(count=count, **params), seed=1234)
    return _make


@pytest.fixture
def still_point(make_field):
    """A one-point field whose point has no ambient velocity."""
    def _make(x, y, **params):
        field = make_field(count=1, **params)
        pt = field.points[0]
        pt.x, pt.y, pt.dx, pt.dy = x, y, 0.0, 0.0
        return field, pt
    return _make
