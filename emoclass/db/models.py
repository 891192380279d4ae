from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, String, UniqueConstraint, Uuid
import uuid
from datetime import date, datetime
from typing import Optional, List

from emoclass.utils.time import utcnow

EMOTIONS = ("happy", "neutral", "normal", "stressed", "sleepy")
NOTE_MAX_LENGTH = 100

class Base(DeclarativeBase):
    pass

class ClassRoom(Base):
    __tablename__ = "classes"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    students: Mapped[List["Student"]] = relationship(
        back_populates="classroom", cascade="all, delete-orphan", order_by="Student.name"
    )

class Student(Base):
    __tablename__ = "students"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100))
    class_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("classes.id", ondelete="CASCADE"), index=True)
    classroom: Mapped["ClassRoom"] = relationship(back_populates="students")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    checkins: Mapped[List["EmotionCheckin"]] = relationship(back_populates="student", cascade="all, delete-orphan")

class EmotionCheckin(Base):
    __tablename__ = "emotion_checkins"
    __table_args__ = (
        # one check-in per student per local calendar day, enforced by the database
        UniqueConstraint("student_id", "checkin_date", name="uq_checkin_student_day"),
        CheckConstraint(
            "emotion IN ('happy', 'neutral', 'normal', 'stressed', 'sleepy')",
            name="ck_checkin_emotion",
        ),
    )
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("students.id", ondelete="CASCADE"), index=True)
    student: Mapped["Student"] = relationship(back_populates="checkins")
    emotion: Mapped[str] = mapped_column(String(16))
    note: Mapped[Optional[str]] = mapped_column(String(NOTE_MAX_LENGTH))
    checkin_date: Mapped[date] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
