from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from healthbot.api.dependencies import (
    get_alert_preferences,
    get_outbreak_cache,
    get_scheduler,
    require_admin_key,
)
from healthbot.main.pydantic_models.models import CanonicalState, ManualRunResponse, OutbreakResult
from healthbot.utils.errors import NoDataAvailable
from healthbot.utils.logger import get_api_logger

logger = get_api_logger()

router = APIRouter(prefix="/alerts", tags=["ALERTS"], dependencies=[Depends(require_admin_key)])


@router.get("/jobs")
async def get_jobs(scheduler=Depends(get_scheduler)) -> Dict[str, Any]:
    """Scheduler state and the last outcome of every job"""
    return scheduler.get_status()


@router.post("/jobs/{name}/run", response_model=ManualRunResponse)
async def run_job(name: str, scheduler=Depends(get_scheduler)):
    """
    Run a job immediately. A failing job is reported in the response body
    rather than as an HTTP error.
    """
    logger.info(f"Manual run requested for job {name}")
    try:
        result = await scheduler.run_job(name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown job '{name}'")
    except Exception as e:
        return ManualRunResponse(job=name, success=False, error=str(e))
    return ManualRunResponse(job=name, success=True, result=result if isinstance(result, dict) else {"value": result})


@router.get("/outbreaks", response_model=OutbreakResult)
async def get_outbreaks(state: Optional[str] = Query(None), cache=Depends(get_outbreak_cache)):
    try:
        return await cache.get_outbreak_data(state)
    except NoDataAvailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/cache/stats")
async def get_cache_stats(cache=Depends(get_outbreak_cache)):
    return await cache.get_cache_statistics()


@router.get("/states", response_model=List[CanonicalState])
async def get_states(search: Optional[str] = Query(None), preferences=Depends(get_alert_preferences)):
    return await preferences.search_states(search)
