from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from emoclass.db.models import ClassRoom, Student

def create_class(db: Session, name: str) -> ClassRoom:
    c = ClassRoom(name=name)
    db.add(c)
    db.commit()
    db.refresh(c)
    return c

def list_classes(db: Session) -> list[ClassRoom]:
    return list(db.execute(select(ClassRoom).order_by(ClassRoom.name)).scalars())

def get_class(db: Session, class_id: UUID) -> ClassRoom | None:
    return db.get(ClassRoom, class_id)

def create_student(db: Session, classroom: ClassRoom, name: str) -> Student:
    s = Student(name=name, class_id=classroom.id)
    db.add(s)
    db.commit()
    db.refresh(s)
    return s

def list_students(db: Session, class_id: UUID) -> list[Student]:
    res = db.execute(select(Student).where(Student.class_id == class_id).order_by(Student.name))
    return list(res.scalars())

def count_students(db: Session, class_id: UUID) -> int:
    res = db.execute(select(func.count()).select_from(Student).where(Student.class_id == class_id))
    return int(res.scalar_one())

def get_student(db: Session, student_id: UUID) -> Student | None:
    return db.get(Student, student_id)

def get_student_with_class(db: Session, student_id: UUID) -> Student | None:
    q = select(Student).options(joinedload(Student.classroom)).where(Student.id == student_id)
    return db.execute(q).scalar_one_or_none()
