import re
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

RISK_LEVELS = ("low", "medium", "high", "critical")

MessageType = Literal["text", "button_reply", "list_reply", "image", "audio", "document"]
OutbreakSource = Literal["cache", "fresh", "fallback_cache"]


def _as_list(value):
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(item).strip() for item in value if str(item).strip()]


class AffectedLocation(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    state: Optional[str] = None
    districts: List[str] = Field(default_factory=list)
    estimated_cases: Optional[int] = None
    trend: Optional[str] = None

    @field_validator("districts", mode="before")
    @classmethod
    def _districts(cls, value):
        return _as_list(value)

    @field_validator("estimated_cases", mode="before")
    @classmethod
    def _cases(cls, value):
        # The model writes counts like "1,200+" or "about 40"
        if value is None or isinstance(value, int):
            return value
        digits = re.sub(r"[^\d]", "", str(value))
        return int(digits) if digits else None


class Disease(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    disease_type: Optional[str] = Field(None, alias="type")
    risk_level: str = "medium"
    symptoms: List[str] = Field(default_factory=list)
    safety_measures: List[str] = Field(default_factory=list)
    prevention_methods: List[str] = Field(default_factory=list, alias="prevention")
    transmission: Optional[str] = None
    affected_locations: List[AffectedLocation] = Field(default_factory=list)

    @field_validator("risk_level", mode="before")
    @classmethod
    def _risk(cls, value):
        level = str(value or "medium").strip().lower()
        return level if level in RISK_LEVELS else "medium"

    @field_validator("symptoms", "safety_measures", "prevention_methods", mode="before")
    @classmethod
    def _lists(cls, value):
        return _as_list(value)

    @property
    def location_text(self) -> str:
        """States and districts named by the model, joined for display and matching"""
        parts = []
        for location in self.affected_locations:
            if location.districts:
                parts.append(f"{', '.join(location.districts)}, {location.state or ''}".strip(", "))
            elif location.state:
                parts.append(location.state)
        return "; ".join(parts)


class FetchResult(BaseModel):
    diseases: List[Disease]
    raw_response: str = ""
    is_fallback: bool = False


class OutbreakResult(BaseModel):
    diseases: List[Disease]
    source: OutbreakSource
    cached_at: datetime


class CanonicalState(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    code: str
    region: str
    is_union_territory: bool = False


class AlertPreference(BaseModel):
    model_config = ConfigDict(extra="ignore")

    phone_number: str
    state: Optional[str] = None
    district: Optional[str] = None
    pincode: Optional[str] = None
    selected_state_id: Optional[int] = None
    alert_enabled: bool = True
    alert_frequency: Literal["daily", "weekly", "immediate"] = "daily"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_alert_sent: Optional[datetime] = None


class MediaData(BaseModel):
    id: str
    mime_type: Optional[str] = None
    sha256: Optional[str] = None
    filename: Optional[str] = None
    data: Optional[bytes] = None


class InboundMessage(BaseModel):
    phone_number: str
    message_id: str
    content: str = ""
    type: MessageType = "text"
    timestamp: datetime
    media_data: Optional[MediaData] = None
    context: Optional[Dict[str, Any]] = None


class ManualRunResponse(BaseModel):
    job: str
    success: bool
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class FeedbackRequest(BaseModel):
    phone_number: str
    rating: int = Field(..., ge=1, le=5)
    feature_used: Optional[str] = None
    comment: Optional[str] = None


class FeedbackResponse(BaseModel):
    success: bool
    message: str
    feedback_id: Optional[str] = None


class FeedbackStats(BaseModel):
    days: int
    total_feedback: int
    average_rating: float
    accuracy_breakdown: Dict[str, int]
    feature_breakdown: Dict[str, int]
    daily_trends: Dict[str, Dict[str, float]]
