from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from uuid import UUID
from emoclass.core.security import require_role
from emoclass.db.session import get_db
from emoclass.repositories.student_repo import create_class, create_student, get_class, list_classes, list_students
from emoclass.schemas.classroom import ClassCreate, ClassOut, StudentCreate, StudentOut

router = APIRouter(prefix="/api/classes", tags=["classes"])

admin_only = require_role("admin")

@router.get("", response_model=list[ClassOut])
def get_classes(db: Session = Depends(get_db)):
    return list_classes(db)

@router.post("", response_model=ClassOut, status_code=201)
def add_class(payload: ClassCreate, db: Session = Depends(get_db), user=Depends(admin_only)):
    try:
        return create_class(db, payload.name.strip())
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Class name already exists")

@router.get("/{class_id}/students", response_model=list[StudentOut])
def get_students(class_id: UUID, db: Session = Depends(get_db)):
    if not get_class(db, class_id):
        raise HTTPException(status_code=404, detail="Class not found")
    return list_students(db, class_id)

@router.post("/{class_id}/students", response_model=StudentOut, status_code=201)
def add_student(class_id: UUID, payload: StudentCreate, db: Session = Depends(get_db), user=Depends(admin_only)):
    c = get_class(db, class_id)
    if not c:
        raise HTTPException(status_code=404, detail="Class not found")
    return create_student(db, c, payload.name.strip())
