from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from emoclass.api.deps import get_notifier
from emoclass.db.session import get_db
from emoclass.schemas.alert import CheckAlertIn, CheckAlertOut
from emoclass.schemas.common import ErrorResponse
from emoclass.services.alerts import Notifier, PatternDetector
from emoclass.services.checkin import parse_student_id

router = APIRouter(prefix="/api/check-alert", tags=["alerts"])

@router.post(
    "",
    response_model=CheckAlertOut,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def check_alert(payload: CheckAlertIn, db: Session = Depends(get_db), notifier: Notifier = Depends(get_notifier)):
    """
    Run the pattern check for one student right now and report the outcome.
    """
    sid = parse_student_id(payload.student_id)
    result = PatternDetector(db, notifier).evaluate(sid)
    if not result.matched:
        msg = (
            f"Only {len(result.checkins)} check-ins found"
            if result.reason == "insufficient_history"
            else "Last 3 check-ins do not share one tracked emotion"
        )
        return CheckAlertOut(alert=False, message=msg)

    event = result.alert
    return CheckAlertOut(
        alert=True,
        alert_type=event.alert_type,
        priority=event.severity.priority,
        sent=result.sent,
        student=event.student_name,
        class_name=event.class_name,
        message="Alert sent" if result.sent else "Pattern detected but the alert could not be sent",
    )
