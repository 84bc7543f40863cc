"""
Re-useable fixtures for tests
"""

import datetime as dt

import pytest

from gencore.persistence import FileBlobStore, GenerationRepository
from gencore.store import ObservationStore


@pytest.fixture
def blobs(tmp_path):
    return FileBlobStore(tmp_path / "data")


@pytest.fixture
def repository(blobs):
    return GenerationRepository(blobs, "test_generation")


@pytest.fixture
def flat_store():
    """Constant 10.0 every day from 2023-01-01 to 2024-12-31."""
    start = dt.date(2023, 1, 1)
    n_days = (dt.date(2024, 12, 31) - start).days + 1
    return ObservationStore({(start + dt.timedelta(days=i)).isoformat(): 10.0 for i in range(n_days)})
