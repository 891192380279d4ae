from datetime import date, datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from emoclass.db.models import EmotionCheckin, Student

def find_checkin_on_day(db: Session, student_id: UUID, day: date) -> EmotionCheckin | None:
    res = db.execute(
        select(EmotionCheckin)
        .where(EmotionCheckin.student_id == student_id, EmotionCheckin.checkin_date == day)
        .limit(1)
    )
    return res.scalar_one_or_none()

def insert_checkin(
    db: Session,
    student_id: UUID,
    emotion: str,
    note: Optional[str],
    day: date,
    created_at: Optional[datetime] = None,
) -> EmotionCheckin:
    ci = EmotionCheckin(student_id=student_id, emotion=emotion, note=note, checkin_date=day)
    if created_at is not None:
        ci.created_at = created_at
    db.add(ci)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    db.refresh(ci)
    return ci

def get_recent_checkins(db: Session, student_id: UUID, limit: int = 3) -> list[EmotionCheckin]:
    q = (
        select(EmotionCheckin)
        .where(EmotionCheckin.student_id == student_id)
        .order_by(EmotionCheckin.created_at.desc())
        .limit(limit)
    )
    return list(db.execute(q).scalars())

def list_class_checkins(db: Session, class_id: UUID, start: date, end: date) -> list[EmotionCheckin]:
    """
    Check-ins of every student in the class whose local day falls in [start, end],
    newest first, with the student loaded.
    """
    q = (
        select(EmotionCheckin)
        .join(Student, EmotionCheckin.student_id == Student.id)
        .options(joinedload(EmotionCheckin.student))
        .where(
            Student.class_id == class_id,
            EmotionCheckin.checkin_date >= start,
            EmotionCheckin.checkin_date <= end,
        )
        .order_by(EmotionCheckin.created_at.desc())
    )
    return list(db.execute(q).scalars())
