import warnings
import pytest

from elevator_control.dispatcher import Dispatcher

def pytest_configure():
    warnings.filterwarnings("ignore", category=DeprecationWarning)
    warnings.filterwarnings("ignore", category=pytest.PytestUnknownMarkWarning)

@pytest.fixture
def dispatcher():
    return Dispatcher(2, 10)
