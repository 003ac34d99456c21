import pytest

from src.utils.trace import Tracer, reset_tracer


@pytest.fixture(autouse=True)
def _fresh_tracer():
    reset_tracer()
    yield
    reset_tracer()


@pytest.fixture
def quiet_tracer():
    return Tracer(enabled=False)
