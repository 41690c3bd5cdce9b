import pytest

from tessera import Container


@pytest.fixture
def container():
    return Container()
