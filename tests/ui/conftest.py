# mypy: disable-error-code=no-untyped-def

import pytest
from fakes import FakeBackend, FakeTerminal, two_sinks


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend(two_sinks())


@pytest.fixture
def terminal() -> FakeTerminal:
    return FakeTerminal()
