import pytest

from rrsim.scheduler import RRScheduler


@pytest.fixture
def three_way():
    """Three equal bursts arriving two ticks apart, quantum 3"""
    return RRScheduler(
        [
            {"pid": "P1", "arrival": 0, "burst": 5},
            {"pid": "P2", "arrival": 2, "burst": 5},
            {"pid": "P3", "arrival": 4, "burst": 5},
        ],
        quantum=3,
    )
