"""classes, students and daily emotion check-ins

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-11-27 08:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "classes",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "students",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("class_id", sa.Uuid(), sa.ForeignKey("classes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_students_class_id", "students", ["class_id"])
    op.create_table(
        "emotion_checkins",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("student_id", sa.Uuid(), sa.ForeignKey("students.id", ondelete="CASCADE"), nullable=False),
        sa.Column("emotion", sa.String(length=16), nullable=False),
        sa.Column("note", sa.String(length=100), nullable=True),
        sa.Column("checkin_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("student_id", "checkin_date", name="uq_checkin_student_day"),
        sa.CheckConstraint(
            "emotion IN ('happy', 'neutral', 'normal', 'stressed', 'sleepy')",
            name="ck_checkin_emotion",
        ),
    )
    op.create_index("ix_emotion_checkins_student_id", "emotion_checkins", ["student_id"])
    op.create_index("ix_emotion_checkins_created_at", "emotion_checkins", ["created_at"])


def downgrade() -> None:
    op.drop_table("emotion_checkins")
    op.drop_table("students")
    op.drop_table("classes")
