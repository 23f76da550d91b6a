"""
Router des assignations mentor ↔ étudiant.
Gestion réservée aux admins ; vues « mes étudiants » / « mon mentor » pour les intéressés.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from passport.database import get_db
from passport.models.user import User
from passport.schemas.mentorship import AssignedUser, AssignmentCreate, AssignmentResponse, MentorWithStudents
from passport.security import require_roles
from passport.services import mentorship_service

router = APIRouter(prefix="/api", tags=["Mentorat"])


@router.get(
    "/admin/mentorship",
    response_model=List[AssignmentResponse],
    dependencies=[Depends(require_roles("admin"))],
    summary="Lister les assignations",
)
def list_assignments(db: Session = Depends(get_db)):
    """Toutes les assignations, de la plus récente à la plus ancienne."""
    return mentorship_service.list_assignments(db)


@router.get(
    "/admin/mentorship/by-mentor",
    response_model=List[MentorWithStudents],
    dependencies=[Depends(require_roles("admin"))],
    summary="Assignations regroupées par mentor",
)
def assignments_by_mentor(db: Session = Depends(get_db)):
    return mentorship_service.assignments_by_mentor(db)


@router.post(
    "/admin/mentorship",
    response_model=AssignmentResponse,
    status_code=201,
    dependencies=[Depends(require_roles("admin"))],
    summary="Assigner un étudiant à un mentor",
)
def assign_student(data: AssignmentCreate, response: Response, db: Session = Depends(get_db)):
    """
    Crée l'assignation (201), ou met à jour les notes si elle existe déjà (200).
    Un étudiant déjà suivi par un autre mentor lui est retiré.
    """
    try:
        result = mentorship_service.assign_student(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not result.created:
        response.status_code = 200
    return result.assignment


@router.delete(
    "/admin/mentorship/{student_id}",
    status_code=204,
    dependencies=[Depends(require_roles("admin"))],
    summary="Retirer l'assignation d'un étudiant",
)
def unassign_student(student_id: uuid.UUID, db: Session = Depends(get_db)):
    if not mentorship_service.unassign_student(db, student_id):
        raise HTTPException(status_code=404, detail="Aucune assignation pour cet étudiant.")


@router.get("/mentor/students", response_model=List[AssignedUser], summary="Mes étudiants")
def my_students(user: User = Depends(require_roles("mentor")), db: Session = Depends(get_db)):
    return mentorship_service.get_mentor_students(db, user.id)


@router.get("/student/mentors", response_model=List[AssignedUser], summary="Mon mentor")
def my_mentors(user: User = Depends(require_roles("student")), db: Session = Depends(get_db)):
    return mentorship_service.get_student_mentors(db, user.id)
