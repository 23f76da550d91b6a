"""
Router des activités d'un étudiant.
Lecture : l'étudiant, son mentor assigné, les admins. Écriture : l'étudiant et les admins.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from passport.database import get_db
from passport.models.user import User
from passport.schemas.activity import ActivityCreate, ActivityResponse, ActivityUpdate
from passport.security import student_reader, student_writer
from passport.services import activity_service

router = APIRouter(prefix="/api/students/{student_id}/activities", tags=["Activités"])


@router.get("", response_model=List[ActivityResponse], summary="Lister les activités")
def list_activities(
    student_id: uuid.UUID,
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    _: User = Depends(student_reader),
):
    return activity_service.list_activities(db, student_id, status)


@router.post("", response_model=ActivityResponse, status_code=201, summary="Ajouter une activité")
def create_activity(
    student_id: uuid.UUID,
    data: ActivityCreate,
    db: Session = Depends(get_db),
    _: User = Depends(student_writer),
):
    """L'activité est créée en attente de vérification par le mentor assigné."""
    return activity_service.create_activity(db, student_id, data)


@router.get("/{activity_id}", response_model=ActivityResponse, summary="Détail d'une activité")
def get_activity(
    student_id: uuid.UUID,
    activity_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(student_reader),
):
    activity = activity_service.get_activity(db, student_id, activity_id)
    if activity is None:
        raise HTTPException(status_code=404, detail="Activité introuvable.")
    return activity


@router.patch("/{activity_id}", response_model=ActivityResponse, summary="Modifier une activité")
def update_activity(
    student_id: uuid.UUID,
    activity_id: uuid.UUID,
    data: ActivityUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(student_writer),
):
    """Modifiée par l'étudiant, l'activité repasse en attente de vérification."""
    activity = activity_service.update_activity(
        db, student_id, activity_id, data, reset_verification=user.role == "student"
    )
    if activity is None:
        raise HTTPException(status_code=404, detail="Activité introuvable.")
    return activity


@router.delete("/{activity_id}", status_code=204, summary="Supprimer une activité")
def delete_activity(
    student_id: uuid.UUID,
    activity_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(student_writer),
):
    if not activity_service.delete_activity(db, student_id, activity_id):
        raise HTTPException(status_code=404, detail="Activité introuvable.")
