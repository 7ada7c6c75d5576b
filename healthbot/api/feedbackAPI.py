from typing import Optional

from fastapi import APIRouter, Depends, Query

from healthbot.api.dependencies import get_feedback_service, require_admin_key
from healthbot.main.pydantic_models.models import FeedbackRequest, FeedbackResponse, FeedbackStats
from healthbot.utils.logger import get_api_logger

router = APIRouter(prefix="/feedback", tags=["FEEDBACK"], dependencies=[Depends(require_admin_key)])
logger = get_api_logger()


@router.post("/submit", response_model=FeedbackResponse)
async def submit_feedback(request: FeedbackRequest, feedback=Depends(get_feedback_service)):
    """
    Record a rating from outside the chat, e.g. a follow-up survey
    """
    record = await feedback.save_feedback(request.phone_number, request.rating,
                                          feature_used=request.feature_used, comment=request.comment)
    logger.info(f"Feedback received: ID={record['feedback_id']}, Rating={request.rating}")
    return FeedbackResponse(success=True, message="Feedback submitted successfully", feedback_id=record["feedback_id"])


@router.get("/stats", response_model=FeedbackStats)
async def get_feedback_stats(days: Optional[int] = Query(None, ge=1, le=365), feedback=Depends(get_feedback_service)):
    return await feedback.get_feedback_stats(days)
