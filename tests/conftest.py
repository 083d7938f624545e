import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from stagegen.grid import OccupancyGrid  # noqa: E402
from stagegen.metrics import init_metrics  # noqa: E402


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch):
    """Keep generation chatter out of test output unless a test opts back in."""
    monkeypatch.setenv("STAGEGEN_LOG_LEVEL", "warn")
    monkeypatch.delenv("STAGEGEN_LOG_JSON", raising=False)


@pytest.fixture()
def metrics():
    return init_metrics()


@pytest.fixture()
def grid20():
    return OccupancyGrid(20)
