from __future__ import annotations

from dataclasses import asdict
import logging
import math
from functools import lru_cache

import numpy as np
import pandas as pd
from fastapi import Depends, FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import CsvImportModel, MonthlyFiltersModel, ObservationModel, SeriesFiltersModel
from gencore.csv_codec import export_filename, serialize_csv
from gencore.dates import parse_flexible
from gencore.errors import GenerationDataError
from gencore.filters import SeriesFilters, normalize_filters
from gencore.metrics_monthly import compute_monthly
from gencore.metrics_overview import compute_overview
from gencore.metrics_series import compute_series
from gencore.persistence import FileBlobStore, GenerationRepository, import_csv
from gencore.settings import Settings, configure_logging, load_settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def get_repository() -> GenerationRepository:
    settings = get_settings()
    return GenerationRepository(FileBlobStore(settings.data_dir), settings.storage_key)


configure_logging(get_settings().log_level)
app = FastAPI(title="Generation Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _filters_from_model(model: SeriesFiltersModel) -> SeriesFilters:
    raw = model.model_dump()
    return normalize_filters(raw, default_range_days=get_settings().default_range_days)


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


def _error(exc: Exception, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/overview")
def meta_overview(repo: GenerationRepository = Depends(get_repository)):
    try:
        return _json(compute_overview(repo.snapshot()))
    except Exception as exc:
        logger.exception("meta_overview failed")
        return _error(exc, 500)


@app.post("/series")
def series(filters: SeriesFiltersModel, repo: GenerationRepository = Depends(get_repository)):
    try:
        f = _filters_from_model(filters)
        return _json(compute_series(f, repo.snapshot()))
    except GenerationDataError as exc:
        return _error(exc, 400)
    except Exception as exc:
        logger.exception("series failed")
        return _error(exc, 500)


@app.post("/monthly")
def monthly(filters: MonthlyFiltersModel, repo: GenerationRepository = Depends(get_repository)):
    try:
        f = normalize_filters(filters.model_dump())
        return _json(compute_monthly(f, repo.snapshot()))
    except GenerationDataError as exc:
        return _error(exc, 400)
    except Exception as exc:
        logger.exception("monthly failed")
        return _error(exc, 500)


@app.post("/observations")
def add_observation(obs: ObservationModel, repo: GenerationRepository = Depends(get_repository)):
    try:
        iso = parse_flexible(obs.date)
        store = repo.insert(iso, obs.value)
        logger.info("Saved %s = %s", iso, obs.value)
        return _json({"date": iso, "value": store.lookup(iso), "records": len(store)})
    except GenerationDataError as exc:
        return _error(exc, 400)
    except Exception as exc:
        logger.exception("add_observation failed")
        return _error(exc, 500)


@app.post("/import")
def import_rows(payload: CsvImportModel, repo: GenerationRepository = Depends(get_repository)):
    try:
        summary = import_csv(repo, payload.text, max_errors=get_settings().max_import_errors)
        return _json({**asdict(summary), "records": len(repo.snapshot())})
    except Exception as exc:
        logger.exception("import failed")
        return _error(exc, 500)


@app.post("/sample")
def load_sample(repo: GenerationRepository = Depends(get_repository)):
    try:
        store = repo.load_sample()
        return _json({"message": "Loaded sample data.", "records": len(store)})
    except Exception as exc:
        logger.exception("load_sample failed")
        return _error(exc, 500)


@app.get("/export")
def export_csv(repo: GenerationRepository = Depends(get_repository)):
    text = serialize_csv(repo.snapshot().sorted_entries())
    filename = export_filename()
    return Response(
        content=text.encode("utf-8"),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
