from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Mapping, Optional

import pandas as pd

from gencore.dates import parse_iso
from gencore.errors import InvalidValue


@dataclass(frozen=True)
class Observation:
    date: str
    value: float


def validate_value(raw: object) -> float:
    """Return ``raw`` as a finite, non-negative float or raise ``InvalidValue``."""
    if isinstance(raw, bool):
        raise InvalidValue(raw)
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise InvalidValue(raw) from None
    if not math.isfinite(value) or value < 0:
        raise InvalidValue(raw)
    return value


class ObservationStore:
    """Sparse ISO date -> generation mapping.

    Instances are treated as immutable snapshots: ``insert`` and ``merge_all``
    return a new store and leave the receiver untouched.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Mapping[str, float]] = None) -> None:
        self._values: Dict[str, float] = {}
        for d, v in (values or {}).items():
            self._values[parse_iso(d)] = validate_value(v)

    @classmethod
    def _from_trusted(cls, values: Dict[str, float]) -> "ObservationStore":
        store = cls()
        store._values = values
        return store

    def insert(self, date: str, value: object) -> "ObservationStore":
        key = parse_iso(date)
        checked = validate_value(value)
        values = dict(self._values)
        values[key] = checked
        return self._from_trusted(values)

    def merge_all(self, records: Iterable[Observation]) -> "ObservationStore":
        # Validate everything first so a bad record leaves no partial merge behind.
        incoming = [(parse_iso(r.date), validate_value(r.value)) for r in records]
        values = dict(self._values)
        for key, value in incoming:
            values[key] = value
        return self._from_trusted(values)

    def lookup(self, date: str) -> Optional[float]:
        return self._values.get(date)

    def sorted_entries(self) -> Iterator[Observation]:
        for key in sorted(self._values):
            yield Observation(date=key, value=self._values[key])

    def __iter__(self) -> Iterator[Observation]:
        return self.sorted_entries()

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, date: object) -> bool:
        return date in self._values

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObservationStore):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"ObservationStore({len(self._values)} observations)"

    def first_date(self) -> Optional[str]:
        return min(self._values) if self._values else None

    def latest_date(self) -> Optional[str]:
        return max(self._values) if self._values else None

    def as_dict(self) -> Dict[str, float]:
        return dict(sorted(self._values.items()))

    def to_series(self) -> pd.Series:
        """Values indexed by ``DatetimeIndex``, ascending."""
        if not self._values:
            return pd.Series(dtype=float, index=pd.DatetimeIndex([]), name="generation_gwh")
        items = self.as_dict()
        return pd.Series(list(items.values()), index=pd.to_datetime(list(items.keys())), dtype=float, name="generation_gwh")

    def to_frame(self) -> pd.DataFrame:
        rows = [{"date": o.date, "generation_gwh": o.value} for o in self.sorted_entries()]
        return pd.DataFrame(rows, columns=["date", "generation_gwh"])


def insert(store: ObservationStore, date: str, value: object) -> ObservationStore:
    return store.insert(date, value)


def merge_all(store: ObservationStore, records: Iterable[Observation]) -> ObservationStore:
    return store.merge_all(records)
