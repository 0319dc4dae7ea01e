# backend/app/api/community.py
from fastapi import APIRouter, HTTPException, Query
import logging

from app.analytics.errors import NonNumericMetricError, UnsupportedPeriodError
from app.schemas.metrics import (
    AdaptabilityMetrics,
    AwarenessMetrics,
    CommunityCollaborationMetrics,
    TransparencyMetrics,
)
from app.services import community

router = APIRouter(prefix="/api/analytics/community", tags=["community"])

DEFAULT_PERIOD = "last-3-months"

_HANDLERS = {
    "collaboration": community.get_community_collaboration_metrics,
    "awareness": community.get_awareness_metrics,
    "transparency": community.get_transparency_metrics,
    "adaptability": community.get_adaptability_metrics,
}

async def _run(family: str, period: str):
    try:
        return await _HANDLERS[family](period)
    except UnsupportedPeriodError as e:
        logging.warning("Rejected period %r for %s", e.period, family)
        raise HTTPException(status_code=400, detail=str(e)) from e
    except NonNumericMetricError as e:
        logging.warning("Non-numeric %s value in %s: %r", e.metric_name, family, e.value)
        raise HTTPException(status_code=422, detail=str(e)) from e

# period is a plain str: unknown tokens get the resolver's 400
@router.get("/collaboration", response_model=CommunityCollaborationMetrics)
async def community_collaboration(period: str = Query(DEFAULT_PERIOD)):
    return await _run("collaboration", period)

@router.get("/awareness", response_model=AwarenessMetrics)
async def awareness(period: str = Query(DEFAULT_PERIOD)):
    return await _run("awareness", period)

@router.get("/transparency", response_model=TransparencyMetrics)
async def transparency(period: str = Query(DEFAULT_PERIOD)):
    return await _run("transparency", period)

@router.get("/adaptability", response_model=AdaptabilityMetrics)
async def adaptability(period: str = Query(DEFAULT_PERIOD)):
    return await _run("adaptability", period)
