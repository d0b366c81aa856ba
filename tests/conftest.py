import pytest

from equation_engine.logging_system import LogLevel, configure_logging


@pytest.fixture(autouse=True)
def quiet_logging():
    """Fresh global logger per test, warnings only"""
    configure_logging(LogLevel.MINIMAL)
    yield
