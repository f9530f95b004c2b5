"""
Pytest configuration file for lazyiter tests.

This file ensures that the project root is in the Python path so that test
files can import lazyiter without installing it.
"""

import sys
from pathlib import Path

# Add the parent directory to the Python path
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import pytest

from lazyiter.utils import clear_performance_metrics, set_config


@pytest.fixture(autouse=True)
def reset_global_state():
    """Every test starts from the environment's configuration and no metrics"""
    set_config(None)
    clear_performance_metrics()
    yield
    set_config(None)
    clear_performance_metrics()

