"""
Tests of gencore.persistence
"""

from __future__ import annotations

import json
import logging

import pytest

from gencore.errors import InvalidValue
from gencore.persistence import GenerationRepository, decode_store, import_csv, load_store, save_store
from gencore.store import Observation, ObservationStore


def test_missing_blob_is_empty_store(blobs):
    assert len(load_store(blobs, "nothing")) == 0


@pytest.mark.parametrize(
    "raw",
    (
        pytest.param(b"{not json", id="corrupt"),
        pytest.param(b"[1, 2, 3]", id="list"),
        pytest.param(b"\xff\xfe", id="binary"),
        pytest.param(b"", id="empty"),
    ),
)
def test_corrupt_blob_degrades_to_empty(raw):
    assert len(decode_store(raw)) == 0


def test_invalid_entries_dropped(caplog):
    raw = json.dumps(
        {
            "2025-01-01": 10,
            "2025-01-02": "12.5",
            "2023-02-29": 5,
            "01-01-2025": 7,
            "2025-01-03": -1,
            "2025-01-04": None,
            "2025-01-05": "abc",
        }
    ).encode()
    with caplog.at_level(logging.WARNING, logger="gencore.persistence"):
        store = decode_store(raw)
    assert store.as_dict() == {"2025-01-01": 10.0, "2025-01-02": 12.5}
    assert "Dropped 5 invalid stored observations" in caplog.text


def test_save_then_load(blobs):
    store = ObservationStore({"2025-01-02": 2.5, "2025-01-01": 1.0})
    save_store(blobs, "k", store)
    assert json.loads(blobs.get("k")) == {"2025-01-01": 1.0, "2025-01-02": 2.5}
    assert load_store(blobs, "k") == store


def test_repository_persists_every_mutation(blobs):
    repo = GenerationRepository(blobs, "gen")
    repo.insert("2025-01-01", 5)
    repo.merge([Observation("2025-01-02", 6.0), Observation("2025-01-01", 7.0)])
    reloaded = GenerationRepository(blobs, "gen")
    assert reloaded.snapshot().as_dict() == {"2025-01-01": 7.0, "2025-01-02": 6.0}


def test_repository_rejected_insert_keeps_state(repository, blobs):
    repository.insert("2025-01-01", 5)
    before = repository.snapshot()
    with pytest.raises(InvalidValue):
        repository.insert("2025-01-02", -5)
    assert repository.snapshot() is before
    assert json.loads(blobs.get("test_generation")) == {"2025-01-01": 5.0}


def test_snapshot_is_not_aliased(repository):
    first = repository.snapshot()
    repository.insert("2025-01-01", 5)
    assert len(first) == 0
    assert len(repository.snapshot()) == 1


def test_load_sample(repository):
    store = repository.load_sample()
    assert store.as_dict() == {"2025-12-18": 4140.0, "2025-12-19": 4215.0, "2025-12-20": 4198.0}


def test_import_csv_partial(repository):
    summary = import_csv(repository, "date,generation_gwh\n18-12-2025,4140\nxx,abc\n19-12-2025,4215")
    assert summary.imported == 2
    assert summary.total_errors == 1
    assert summary.message == "Imported 2 rows (with 1 issues)."
    assert len(repository.snapshot()) == 2


def test_import_csv_caps_errors(repository):
    text = "\n".join(f"bad{i},1" for i in range(20)) + "\n01-01-2025,3"
    summary = import_csv(repository, text, max_errors=12)
    assert len(summary.errors) == 12
    assert summary.total_errors == 20
    assert summary.errors[0] == "Row 1: invalid date 'bad0' (expected DD-MM-YYYY)"


def test_import_csv_nothing_valid(repository):
    summary = import_csv(repository, "just,junk,here\n")
    assert summary.imported == 0
    assert summary.message is None
    assert len(repository.snapshot()) == 0

    summary = import_csv(repository, "")
    assert summary.errors == ["No valid rows found in CSV."]


def test_non_canonical_keys_dropped_on_load():
    raw = json.dumps({"2024-01-15\n": 5, "٢٠٢٤-01-15": 6, "2024-01-16": 7}).encode()
    store = decode_store(raw)
    assert store.as_dict() == {"2024-01-16": 7.0}
    assert store.latest_date() == "2024-01-16"
