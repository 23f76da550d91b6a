"""
Router des qualifications d'un étudiant (diplômes, certificats, licences).
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from passport.database import get_db
from passport.models.user import User
from passport.schemas.qualification import QualificationCreate, QualificationResponse, QualificationUpdate
from passport.security import student_reader, student_writer
from passport.services import qualification_service

router = APIRouter(prefix="/api/students/{student_id}/qualifications", tags=["Qualifications"])


@router.get("", response_model=List[QualificationResponse], summary="Lister les qualifications")
def list_qualifications(
    student_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(student_reader),
):
    """Triées de la plus récemment obtenue à la plus ancienne."""
    return qualification_service.list_qualifications(db, student_id)


@router.post("", response_model=QualificationResponse, status_code=201, summary="Ajouter une qualification")
def create_qualification(
    student_id: uuid.UUID,
    data: QualificationCreate,
    db: Session = Depends(get_db),
    _: User = Depends(student_writer),
):
    return qualification_service.create_qualification(db, student_id, data)


@router.get("/{qualification_id}", response_model=QualificationResponse, summary="Détail d'une qualification")
def get_qualification(
    student_id: uuid.UUID,
    qualification_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(student_reader),
):
    qualification = qualification_service.get_qualification(db, student_id, qualification_id)
    if qualification is None:
        raise HTTPException(status_code=404, detail="Qualification introuvable.")
    return qualification


@router.patch("/{qualification_id}", response_model=QualificationResponse, summary="Modifier une qualification")
def update_qualification(
    student_id: uuid.UUID,
    qualification_id: uuid.UUID,
    data: QualificationUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(student_writer),
):
    try:
        qualification = qualification_service.update_qualification(
            db, student_id, qualification_id, data, reset_verification=user.role == "student"
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if qualification is None:
        raise HTTPException(status_code=404, detail="Qualification introuvable.")
    return qualification


@router.delete("/{qualification_id}", status_code=204, summary="Supprimer une qualification")
def delete_qualification(
    student_id: uuid.UUID,
    qualification_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(student_writer),
):
    if not qualification_service.delete_qualification(db, student_id, qualification_id):
        raise HTTPException(status_code=404, detail="Qualification introuvable.")
