import os
import sys

# Keep test runs off the log directory and the rate limiter
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

# Add the parent directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../')))

import pytest

from services.picker.picker_service import PickerService


@pytest.fixture
def small_service():
    """maxId=10, the size used by most hand-checked scenarios."""
    return PickerService(max_id=10, max_identifier=2**53 - 1)
