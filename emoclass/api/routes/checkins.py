from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session
from emoclass.api.deps import get_alert_trigger
from emoclass.db.session import get_db
from emoclass.schemas.checkin import CheckinCreate, CheckinOut, CheckinResponse
from emoclass.schemas.common import ErrorResponse
from emoclass.services.alerts import AlertTrigger
from emoclass.services.checkin import is_tracked, submit_checkin

router = APIRouter(prefix="/api/checkin", tags=["checkins"])

@router.post(
    "",
    response_model=CheckinResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def create(
    payload: CheckinCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    trigger: AlertTrigger = Depends(get_alert_trigger),
):
    # domain errors are rendered by the handlers registered in create_app
    ci = submit_checkin(db, payload.student_id, payload.emotion, payload.note)
    if is_tracked(ci.emotion):
        trigger.schedule(background_tasks, ci.student_id)
    return {"success": True, "message": "Check-in saved", "data": CheckinOut.model_validate(ci)}
