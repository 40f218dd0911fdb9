"""hive-assess — health scoring and follow-up scheduling for beekeeping records.

This is the application entry point.  It wires the AssessmentEngine,
its policies and the REST endpoints together.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError

from hive_assess.api.assess import create_assess_router
from hive_assess.config import settings
from hive_assess.core.assessment_engine import AssessmentEngine
from hive_assess.core.profiles import ProfileRegistry
from hive_assess.core.risk import RiskPolicy
from hive_assess.core.scheduler import SchedulePolicy

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

logger = logging.getLogger(__name__)

# ── Assessment Engine ────────────────────────────────────────────────────────

engine = AssessmentEngine(
    registry=ProfileRegistry.with_defaults(),
    risk_policy=RiskPolicy(
        critical_below=settings.risk_critical_below,
        high_below=settings.risk_high_below,
        medium_below=settings.risk_medium_below,
    ),
    schedule_policy=SchedulePolicy(
        critical_days=settings.interval_critical_days,
        high_days=settings.interval_high_days,
        medium_days=settings.interval_medium_days,
        low_days=settings.interval_low_days,
        default_days=settings.default_interval_days,
        type_caps={
            "disease_check": settings.disease_check_cap_days,
            "treatment": settings.treatment_cap_days,
            "emergency_feeding": settings.emergency_feeding_cap_days,
        },
    ),
)

# ── App ──────────────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    description="Weighted health scoring, classification and follow-up scheduling",
    version="0.3.0",
    debug=settings.debug,
)


@app.exception_handler(RequestValidationError)
async def log_rejected_observation(request: Request, exc: RequestValidationError):
    logger.warning("Rejected observation on %s: %d error(s)", request.url.path, len(exc.errors()))
    return await request_validation_exception_handler(request, exc)


# ── Routes ───────────────────────────────────────────────────────────────────

app.include_router(create_assess_router(engine))


# ── Health ───────────────────────────────────────────────────────────────────

@app.get("/health")
async def health() -> dict:
    return {
        "status": "ok",
        "entity_kinds": [k.value for k in engine.registry.kinds],
    }
