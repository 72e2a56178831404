import pytest

from pymocks import PytestMockBackend, UnittestMockBackend


@pytest.fixture(params=["unittest", "pytest-mock"])
def backend(request, mocker):
    """Every mock test runs once per spy backend."""
    if request.param == "unittest":
        b = UnittestMockBackend()
        yield b
        b.stopall()
    else:
        # mocker undoes its own patches at teardown
        yield PytestMockBackend(mocker)
