from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from gencore.csv_codec import parse_csv, sample_csv
from gencore.dates import is_iso
from gencore.errors import InvalidValue
from gencore.store import Observation, ObservationStore, validate_value

logger = logging.getLogger(__name__)


class FileBlobStore:
    """Key-value byte store backed by one file per key."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def put(self, key: str, data: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.replace(tmp, self._path(key))
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise


def decode_store(raw: Optional[bytes]) -> ObservationStore:
    if not raw:
        return ObservationStore()
    try:
        obj = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.warning("Stored observations are not valid JSON; starting empty")
        return ObservationStore()
    if not isinstance(obj, dict):
        logger.warning("Stored observations are not a JSON object; starting empty")
        return ObservationStore()

    kept = {}
    dropped = 0
    for k, v in obj.items():
        if not is_iso(k):
            dropped += 1
            continue
        try:
            kept[k] = validate_value(v)
        except InvalidValue:
            dropped += 1
    if dropped:
        logger.warning("Dropped %d invalid stored observations", dropped)
    return ObservationStore(kept)


def encode_store(store: ObservationStore) -> bytes:
    return json.dumps(store.as_dict()).encode("utf-8")


def load_store(blobs: FileBlobStore, key: str) -> ObservationStore:
    try:
        raw = blobs.get(key)
    except OSError:
        logger.exception("Could not read stored observations; starting empty")
        return ObservationStore()
    return decode_store(raw)


def save_store(blobs: FileBlobStore, key: str, store: ObservationStore) -> None:
    blobs.put(key, encode_store(store))


class GenerationRepository:
    """Single owner of the current store snapshot.

    Mutations are serialized by a lock; each one swaps in a new snapshot and
    re-persists the whole store. Readers get the snapshot current at call time.
    """

    def __init__(self, blobs: FileBlobStore, key: str) -> None:
        self.blobs = blobs
        self.key = key
        self._lock = threading.Lock()
        self._store = load_store(blobs, key)
        logger.info("Loaded %d observations from %s", len(self._store), key)

    def snapshot(self) -> ObservationStore:
        return self._store

    def insert(self, date: str, value: object) -> ObservationStore:
        with self._lock:
            updated = self._store.insert(date, value)
            save_store(self.blobs, self.key, updated)
            self._store = updated
        return updated

    def merge(self, records: Iterable[Observation]) -> ObservationStore:
        with self._lock:
            updated = self._store.merge_all(records)
            save_store(self.blobs, self.key, updated)
            self._store = updated
        logger.info("Store now holds %d observations", len(updated))
        return updated

    def load_sample(self) -> ObservationStore:
        result = parse_csv(sample_csv())
        return self.merge(result.records)


@dataclass(frozen=True)
class ImportSummary:
    imported: int
    errors: List[str]
    total_errors: int
    message: Optional[str]


def import_csv(repository: GenerationRepository, text: str, *, max_errors: int = 12) -> ImportSummary:
    """Merge the valid rows of a CSV upload; nothing is merged when no row parses."""
    result = parse_csv(text)
    errors = result.errors[: max(1, max_errors)]
    if not result.records:
        return ImportSummary(imported=0, errors=errors or ["No valid rows found in CSV."], total_errors=len(result.errors), message=None)

    repository.merge(result.records)
    issues = f" (with {len(result.errors)} issues)" if result.errors else ""
    logger.info("Imported %d CSV rows, %d rejected", len(result.records), len(result.errors))
    return ImportSummary(
        imported=len(result.records),
        errors=errors,
        total_errors=len(result.errors),
        message=f"Imported {len(result.records)} rows{issues}.",
    )
