from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from emoclass.core.config import settings
from emoclass.core.errors import (
    AlreadyCheckedInToday,
    InvalidEmotion,
    InvalidInput,
    NoteTooLong,
    PersistenceFailure,
)
from emoclass.db.models import EMOTIONS, NOTE_MAX_LENGTH, EmotionCheckin
from emoclass.repositories.checkin_repo import find_checkin_on_day, insert_checkin
from emoclass.repositories.student_repo import get_student
from emoclass.utils.time import local_date, local_tz, utcnow

logger = logging.getLogger(__name__)

VALID_EMOTIONS = frozenset(EMOTIONS)
# emotions the pattern detector watches for three-in-a-row streaks
TRACKED_EMOTIONS = frozenset({"stressed", "sleepy", "normal"})


def parse_student_id(raw: Any) -> UUID:
    if not raw or not isinstance(raw, str):
        raise InvalidInput("Invalid student ID")
    try:
        return UUID(raw)
    except ValueError as e:
        raise InvalidInput("Invalid student ID") from e


def validate_emotion(raw: Any) -> str:
    """
    Exact, case-sensitive membership. " happy" and "Happy" are both rejected.
    """
    if not raw or not isinstance(raw, str):
        raise InvalidInput("An emotion must be selected")
    if raw not in VALID_EMOTIONS:
        raise InvalidEmotion("Invalid emotion value. Please pick one of the available emojis.")
    return raw


def normalize_note(raw: Any) -> Optional[str]:
    """
    Trim and length-check the optional note. Blank notes are stored as None.
    """
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise InvalidInput("Note must be text")
    note = raw.strip()
    if len(note) > NOTE_MAX_LENGTH:
        raise NoteTooLong(f"Note cannot be longer than {NOTE_MAX_LENGTH} characters")
    return note or None


def submit_checkin(
    db: Session,
    student_id: Any,
    emotion: Any,
    note: Any = None,
    *,
    tz: Optional[tzinfo] = None,
    now: Optional[datetime] = None,
) -> EmotionCheckin:
    """
    Validate and store one daily check-in.
    - Validation runs in order: student id, emotion, note.
    - The student must exist and must not have checked in during the current
      local day; the unique (student, day) constraint backs this up when two
      submissions race.
    - The timestamp is assigned here, never taken from the caller.
    """
    sid = parse_student_id(student_id)
    tag = validate_emotion(emotion)
    clean_note = normalize_note(note)

    zone = tz or local_tz(settings.APP_TIMEZONE)
    created_at = now or utcnow()
    day = local_date(created_at, zone)

    try:
        if get_student(db, sid) is None:
            raise InvalidInput("Student does not exist")
        if find_checkin_on_day(db, sid, day) is not None:
            raise AlreadyCheckedInToday("You have already checked in today. Please try again tomorrow.")
        ci = insert_checkin(db, sid, tag, clean_note, day, created_at=created_at)
    except IntegrityError as e:
        # lost the race against a concurrent submission for the same day
        logger.info("Duplicate check-in for student %s on %s rejected by constraint", sid, day)
        raise AlreadyCheckedInToday(
            "You have already checked in today. Please try again tomorrow."
        ) from e
    except SQLAlchemyError as e:
        logger.error("Failed to store check-in for student %s: %s", sid, e)
        raise PersistenceFailure("Something went wrong. Please try again.", {"student_id": str(sid)}) from e

    logger.info("Stored check-in %s for student %s (%s)", ci.id, sid, tag)
    return ci


def is_tracked(emotion: str) -> bool:
    return emotion in TRACKED_EMOTIONS
