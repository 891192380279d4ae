"""Three-in-a-row mood pattern detection and staff alerting.

A student is flagged when their three most recent check-ins all carry the
same tracked emotion. Mixed sequences never alert, even when every entry is
tracked (e.g. stressed, sleepy, stressed). Each tracked emotion maps to one
fixed severity bundle which is rendered into the Telegram message.

The detector keeps no memory between calls: evaluating the same window twice
sends twice.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol
from uuid import UUID

from fastapi import BackgroundTasks
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from emoclass.core.errors import PersistenceFailure, StudentNotFound
from emoclass.db.models import EmotionCheckin
from emoclass.repositories.checkin_repo import get_recent_checkins
from emoclass.repositories.student_repo import get_student_with_class
from emoclass.services.checkin import TRACKED_EMOTIONS

logger = logging.getLogger(__name__)

WINDOW = 3


class Notifier(Protocol):
    def send(self, text: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class SeverityBundle:
    priority: str
    label: str
    headline: str
    recommendations: tuple[str, ...]
    action: str


SEVERITY: dict[str, SeverityBundle] = {
    "stressed": SeverityBundle(
        priority="HIGH",
        label="Sad/stressed mood for 3 consecutive check-ins",
        headline="EMOCLASS ALERT - NEEDS SPECIAL ATTENTION",
        recommendations=(
            "Hold an individual counselling session as soon as possible",
            "Contact parents/guardians to coordinate",
            "Consider a peer support group session",
            "Review academic or social factors that may be the cause",
            "Monitor daily check-ins over the next week",
        ),
        action="Schedule a meeting within 1-2 school days",
    ),
    "sleepy": SeverityBundle(
        priority="MEDIUM",
        label="Sleepy/fatigued for 3 consecutive check-ins",
        headline="EMOCLASS ALERT - HEALTH ATTENTION",
        recommendations=(
            "Ask about the student's sleep pattern and health",
            "Review device use before bedtime",
            "Talk with parents about the evening routine",
            "Consider referral to a health professional if needed",
            "Explain the importance of sleep hygiene and enough rest",
            "Review homework load and extracurricular activities",
        ),
        action="Light counselling within 2-3 days",
    ),
    "normal": SeverityBundle(
        priority="LOW",
        label="Flat/normal energy for 3 consecutive check-ins",
        headline="EMOCLASS MONITORING - ROUTINE OBSERVATION",
        recommendations=(
            "Do an informal check-in to understand how the student is doing",
            "Review motivation and engagement in class",
            "Look for chances to increase positive involvement",
            "Consider activities that could lift their spirits",
            "Watch whether this is a consistent pattern or a passing phase",
        ),
        action="Observe and check in informally this week",
    ),
}


@dataclass(slots=True)
class AlertEvent:
    student_id: UUID
    alert_type: str
    severity: SeverityBundle
    checkins: list[EmotionCheckin]
    student_name: str
    class_name: str
    message: str


@dataclass(slots=True)
class DetectionResult:
    student_id: UUID
    alert: Optional[AlertEvent] = None
    sent: bool = False
    reason: str = ""
    checkins: list[EmotionCheckin] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.alert is not None


def classify(emotions: list[str]) -> Optional[str]:
    """
    The shared tag when exactly WINDOW entries are all identical and tracked, else None.
    """
    if len(emotions) < WINDOW:
        return None
    window = emotions[:WINDOW]
    first = window[0]
    if first not in TRACKED_EMOTIONS:
        return None
    if all(e == first for e in window):
        return first
    return None


def compose_message(bundle: SeverityBundle, student_name: str, class_name: str) -> str:
    lines = [
        bundle.headline,
        "",
        f"Student: {student_name}",
        f"Class: {class_name}",
        f"Pattern: {bundle.label}",
        "",
        "RECOMMENDED FOLLOW-UP FOR THE COUNSELLOR:",
    ]
    lines += [f"{i}. {rec}" for i, rec in enumerate(bundle.recommendations, start=1)]
    lines += [
        "",
        f"Action: {bundle.action}",
        f"Priority: {bundle.priority}",
    ]
    return "\n".join(lines)


class PatternDetector:
    def __init__(self, db: Session, notifier: Notifier):
        self.db = db
        self.notifier = notifier

    def evaluate(self, student_id: UUID) -> DetectionResult:
        """
        Inspect the student's latest check-ins and alert staff on a uniform tracked streak.

        Raises:
            StudentNotFound: a streak matched but the student/class could not be resolved.
            PersistenceFailure: reading history or the student failed.
        """
        try:
            recent = get_recent_checkins(self.db, student_id, limit=WINDOW)
        except SQLAlchemyError as e:
            raise PersistenceFailure("Could not read check-in history", {"student_id": str(student_id)}) from e

        if len(recent) < WINDOW:
            logger.debug("Only %s check-ins for student %s, need %s", len(recent), student_id, WINDOW)
            return DetectionResult(student_id, reason="insufficient_history", checkins=recent)

        alert_type = classify([c.emotion for c in recent])
        if alert_type is None:
            return DetectionResult(student_id, reason="no_uniform_pattern", checkins=recent)

        bundle = SEVERITY[alert_type]
        logger.warning("3 consecutive %s check-ins detected for student %s", alert_type, student_id)

        try:
            student = get_student_with_class(self.db, student_id)
        except SQLAlchemyError as e:
            raise PersistenceFailure("Could not read student", {"student_id": str(student_id)}) from e
        if student is None or student.classroom is None:
            raise StudentNotFound("Student not found", {"student_id": str(student_id)})

        message = compose_message(bundle, student.name, student.classroom.name)
        event = AlertEvent(
            student_id=student_id,
            alert_type=alert_type,
            severity=bundle,
            checkins=recent,
            student_name=student.name,
            class_name=student.classroom.name,
            message=message,
        )
        sent = self.notifier.send(message)
        return DetectionResult(student_id, alert=event, sent=sent, reason="uniform_pattern", checkins=recent)


class AlertTrigger:
    """
    Fire-and-forget handoff from the check-in route to the detector.

    `schedule` queues exactly one evaluation on the response's BackgroundTasks;
    `run` makes a single attempt in its own session and only logs failures.
    """

    def __init__(self, session_factory: Callable[[], Session], notifier_factory: Callable[[], Notifier]):
        self.session_factory = session_factory
        self.notifier_factory = notifier_factory

    def schedule(self, background_tasks: BackgroundTasks, student_id: UUID) -> None:
        background_tasks.add_task(self.run, student_id)

    def run(self, student_id: UUID) -> Optional[DetectionResult]:
        try:
            with self.session_factory() as db:
                result = PatternDetector(db, self.notifier_factory()).evaluate(student_id)
        except StudentNotFound as e:
            logger.error("Alert check skipped: %s", e)
            return None
        except Exception:
            logger.exception("Alert check failed for student %s", student_id)
            return None

        if result.matched:
            logger.info(
                "Alert %s for student %s: sent=%s", result.alert.alert_type, student_id, result.sent
            )
        else:
            logger.info("No alert for student %s (%s)", student_id, result.reason)
        return result
