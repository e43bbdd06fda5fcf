import pytest

from dictkit import Dictionary


@pytest.fixture
def sample() -> Dictionary[str, int]:
    return Dictionary[str, int]({"a": 1, "b": 2, "c": 3})
