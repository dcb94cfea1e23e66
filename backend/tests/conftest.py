import pytest

from factories import build_hotel


@pytest.fixture
def make_hotel():
    return build_hotel
