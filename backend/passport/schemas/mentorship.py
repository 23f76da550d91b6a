"""
Schémas Pydantic pour les assignations mentor ↔ étudiant.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator


class AssignmentCreate(BaseModel):
    """Corps de requête pour assigner un étudiant à un mentor."""
    mentor_id: uuid.UUID
    student_id: uuid.UUID
    notes: Optional[str] = None

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else None


class AssignmentResponse(BaseModel):
    """Assignation enrichie des noms et emails du mentor et de l'étudiant."""
    id: int
    mentor_id: uuid.UUID
    mentor_name: Optional[str] = None
    mentor_email: Optional[str] = None
    student_id: uuid.UUID
    student_name: Optional[str] = None
    student_email: Optional[str] = None
    assigned_date: Optional[datetime] = None
    notes: Optional[str] = None


class AssignmentResult(BaseModel):
    """Résultat d'une assignation : `created` distingue création (201) et mise à jour (200)."""
    created: bool
    assignment: AssignmentResponse


class AssignedUser(BaseModel):
    """Étudiant ou mentor lié par une assignation."""
    id: uuid.UUID
    name: str
    email: str
    assigned_date: Optional[datetime] = None
    notes: Optional[str] = None


class MentorWithStudents(BaseModel):
    """Regroupement des assignations par mentor (vue admin)."""
    id: uuid.UUID
    name: str
    email: str
    students: List[AssignedUser]
