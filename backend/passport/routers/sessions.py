"""
Router des séances d'enseignement d'un étudiant.
Un admin peut planifier une séance pour un étudiant (assigned_by renseigné).
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from passport.database import get_db
from passport.models.user import User
from passport.schemas.teaching_session import SessionCreate, SessionResponse, SessionUpdate
from passport.security import student_reader, student_writer
from passport.services import session_service

router = APIRouter(prefix="/api/students/{student_id}/sessions", tags=["Séances"])


@router.get("", response_model=List[SessionResponse], summary="Lister les séances")
def list_sessions(
    student_id: uuid.UUID,
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    _: User = Depends(student_reader),
):
    """Filtre optionnel par statut : planned, completed, cancelled."""
    return session_service.list_sessions(db, student_id, status)


@router.post("", response_model=SessionResponse, status_code=201, summary="Ajouter une séance")
def create_session(
    student_id: uuid.UUID,
    data: SessionCreate,
    db: Session = Depends(get_db),
    user: User = Depends(student_writer),
):
    assigned_by = user.id if user.role == "admin" else None
    return session_service.create_session(db, student_id, data, assigned_by=assigned_by)


@router.get("/{session_id}", response_model=SessionResponse, summary="Détail d'une séance")
def get_session(
    student_id: uuid.UUID,
    session_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(student_reader),
):
    teaching_session = session_service.get_session(db, student_id, session_id)
    if teaching_session is None:
        raise HTTPException(status_code=404, detail="Séance introuvable.")
    return teaching_session


@router.patch("/{session_id}", response_model=SessionResponse, summary="Modifier une séance")
def update_session(
    student_id: uuid.UUID,
    session_id: uuid.UUID,
    data: SessionUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(student_writer),
):
    teaching_session = session_service.update_session(
        db, student_id, session_id, data, reset_verification=user.role == "student"
    )
    if teaching_session is None:
        raise HTTPException(status_code=404, detail="Séance introuvable.")
    return teaching_session


@router.delete("/{session_id}", status_code=204, summary="Supprimer une séance")
def delete_session(
    student_id: uuid.UUID,
    session_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(student_writer),
):
    if not session_service.delete_session(db, student_id, session_id):
        raise HTTPException(status_code=404, detail="Séance introuvable.")
