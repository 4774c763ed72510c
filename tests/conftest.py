import pytest

from shelgon.runtime import Runtime


@pytest.fixture
def runtime():
    """A session runtime, closed after the test."""
    with Runtime() as rt:
        yield rt
