from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException
from uuid import UUID
import logging
from emoclass.api.deps import Authed
from emoclass.core.config import settings
from emoclass.repositories.checkin_repo import list_class_checkins
from emoclass.repositories.student_repo import get_class, list_students
from emoclass.schemas.dashboard import ClassDashboardOut
from emoclass.services.checkin import TRACKED_EMOTIONS
from emoclass.services.dashboard import (
    calculate_dashboard_stats,
    emotion_distribution,
    students_needing_attention,
    weekly_trend,
)
from emoclass.utils.time import local_today, local_tz

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

@router.get("/class/{class_id}", response_model=ClassDashboardOut)
def class_dashboard(class_id: UUID, ctx=Depends(Authed)):
    db = ctx["db"]
    c = get_class(db, class_id)
    if not c:
        raise HTTPException(status_code=404, detail="Class not found")

    today = local_today(local_tz(settings.APP_TIMEZONE))
    students = list_students(db, class_id)
    week = list_class_checkins(db, class_id, today - timedelta(days=6), today)
    todays = [ci for ci in week if ci.checkin_date == today]
    emotions = [ci.emotion for ci in todays]
    logger.debug("Dashboard for class %s: %s check-ins today, %s this week", class_id, len(todays), len(week))

    return {
        "class_id": c.id,
        "class_name": c.name,
        "date": today.isoformat(),
        "stats": calculate_dashboard_stats(emotions, len(students)),
        "emotion_distribution": emotion_distribution(emotions),
        "students_needing_attention": students_needing_attention(todays, TRACKED_EMOTIONS),
        "weekly_trend": weekly_trend(week, today),
        "students": students,
    }
