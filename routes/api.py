from fastapi import APIRouter
from healthbot.api import whatsappAPI, alertsAPI, feedbackAPI

router = APIRouter()
router.include_router(whatsappAPI.router)
router.include_router(alertsAPI.router)
router.include_router(feedbackAPI.router)
