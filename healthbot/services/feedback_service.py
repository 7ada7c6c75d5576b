"""
Thumbs up / down feedback on AI answers, sent with the inline buttons
shown after each reply.
"""
import uuid
from collections import Counter, defaultdict
from typing import Any, Dict, Optional

from healthbot.utils.gen_utils import days_ago, utcnow
from healthbot.utils.settings import settings
from healthbot.utils.logger import get_db_logger

logger = get_db_logger()

# 5 for thumbs up, 1 for thumbs down
FEEDBACK_RATINGS = {
    "feedback_good": 5,
    "feedback_bad": 1,
}


def categorize_rating(rating: int) -> str:
    if rating >= 4:
        return "helpful"
    if rating >= 3:
        return "partially_helpful"
    return "not_helpful"


class FeedbackService:

    def __init__(self, store):
        self.store = store

    async def save_feedback(self, phone_number: str, rating: int, feature_used: Optional[str] = None,
                            answer: Optional[str] = None, comment: Optional[str] = None) -> Dict[str, Any]:
        record = {
            "feedback_id": str(uuid.uuid4()),
            "phone_number": phone_number,
            "rating": rating,
            "accuracy_category": categorize_rating(rating),
            "feature_used": feature_used,
            "answer": answer,
            "comment": comment,
            "created_at": utcnow(),
        }
        await self.store.insert_feedback(record)
        logger.info(f"Feedback saved: {phone_number} rated {rating} ({feature_used or 'unknown feature'})")
        return record

    async def get_feedback_stats(self, days: Optional[int] = None) -> Dict[str, Any]:
        """Totals, average rating, accuracy and feature breakdowns, and daily trends over the last `days` days"""
        days = settings.FEEDBACK_STATS_DAYS if days is None else days
        rows = await self.store.list_feedback_since(days_ago(days))

        accuracy = {"helpful": 0, "partially_helpful": 0, "not_helpful": 0}
        features = Counter()
        daily = defaultdict(list)
        for row in rows:
            accuracy[row["accuracy_category"]] += 1
            if row.get("feature_used"):
                features[row["feature_used"]] += 1
            daily[row["created_at"].date().isoformat()].append(row["rating"])

        total = len(rows)
        return {
            "days": days,
            "total_feedback": total,
            "average_rating": round(sum(row["rating"] for row in rows) / total, 2) if total else 0,
            "accuracy_breakdown": accuracy,
            "feature_breakdown": dict(features),
            "daily_trends": {
                day: {"count": len(ratings), "average_rating": round(sum(ratings) / len(ratings), 2)}
                for day, ratings in sorted(daily.items())
            },
        }
