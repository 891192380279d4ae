"""
Tests for checkin and student repositories against SQLite.
"""
import uuid
from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from emoclass.db.models import ClassRoom, Student
from emoclass.repositories.checkin_repo import (
    find_checkin_on_day,
    get_recent_checkins,
    insert_checkin,
    list_class_checkins,
)
from emoclass.repositories.student_repo import (
    count_students,
    create_class,
    create_student,
    get_student_with_class,
    list_classes,
)

DAY = date(2025, 11, 27)


class TestCheckinRepo:

    def test_insert_and_find(self, db_session, student):
        ci = insert_checkin(db_session, student.id, "happy", "hi", DAY)

        assert find_checkin_on_day(db_session, student.id, DAY).id == ci.id
        assert find_checkin_on_day(db_session, student.id, date(2025, 11, 28)) is None

    def test_unique_per_day(self, db_session, student):
        """Test the database rejects a second row for the same day."""
        insert_checkin(db_session, student.id, "happy", None, DAY)

        with pytest.raises(IntegrityError):
            insert_checkin(db_session, student.id, "sleepy", None, DAY)

        # session is usable after the rollback
        assert find_checkin_on_day(db_session, student.id, DAY).emotion == "happy"

    def test_check_constraint_on_emotion(self, db_session, student):
        with pytest.raises(IntegrityError):
            insert_checkin(db_session, student.id, "angry", None, DAY)

    def test_recent_is_newest_first(self, db_session, student, add_history):
        add_history(student.id, ["happy", "normal", "sleepy", "stressed"])

        recent = get_recent_checkins(db_session, student.id, limit=3)

        assert [c.emotion for c in recent] == ["stressed", "sleepy", "normal"]

    def test_list_class_checkins_filters_class_and_range(self, db_session, student, add_history):
        other_class = ClassRoom(name="8B")
        db_session.add(other_class)
        db_session.commit()
        outsider = Student(name="Eko", class_id=other_class.id)
        db_session.add(outsider)
        db_session.commit()

        add_history(student.id, ["happy", "sleepy"], end=DAY)
        add_history(outsider.id, ["stressed"], end=DAY)

        rows = list_class_checkins(db_session, student.class_id, DAY, DAY)

        assert [(r.student.name, r.emotion) for r in rows] == [("Budi Santoso", "sleepy")]


class TestStudentRepo:

    def test_create_and_resolve(self, db_session):
        c = create_class(db_session, "9A")
        s = create_student(db_session, c, "Rina")

        resolved = get_student_with_class(db_session, s.id)

        assert resolved.classroom.name == "9A"
        assert count_students(db_session, c.id) == 1
        assert [x.name for x in list_classes(db_session)] == ["9A"]

    def test_unknown_student(self, db_session):
        assert get_student_with_class(db_session, uuid.uuid4()) is None
