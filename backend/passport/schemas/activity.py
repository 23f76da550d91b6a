"""
Schémas Pydantic pour les activités des étudiants.
"""

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

VALID_ACTIVITY_TYPES = {"workshop", "project", "internship", "certification", "seminar", "placement", "other"}


def _check_type(v: str) -> str:
    v = v.strip().lower()
    if v not in VALID_ACTIVITY_TYPES:
        raise ValueError(f"Type d'activité invalide. Valeurs acceptées : {sorted(VALID_ACTIVITY_TYPES)}")
    return v


class ActivityCreate(BaseModel):
    title: str
    activity_type: str
    date_completed: date
    description: Optional[str] = None
    duration_minutes: Optional[int] = None
    location: Optional[str] = None
    reflection: Optional[str] = None
    learning_outcomes: Optional[str] = None
    evidence_url: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le titre ne peut pas être vide.")
        return v.strip()

    @field_validator("activity_type")
    @classmethod
    def valid_type(cls, v: str) -> str:
        return _check_type(v)

    @field_validator("duration_minutes")
    @classmethod
    def positive_duration(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError("La durée doit être positive.")
        return v


class ActivityUpdate(BaseModel):
    title: Optional[str] = None
    activity_type: Optional[str] = None
    date_completed: Optional[date] = None
    description: Optional[str] = None
    duration_minutes: Optional[int] = None
    location: Optional[str] = None
    reflection: Optional[str] = None
    learning_outcomes: Optional[str] = None
    evidence_url: Optional[str] = None

    @field_validator("title", "activity_type", "date_completed", mode="before")
    @classmethod
    def not_null(cls, v):
        # Champ obligatoire en base : omis = inchangé, null = refusé
        if v is None:
            raise ValueError("Ce champ ne peut pas être nul.")
        return v

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le titre ne peut pas être vide.")
        return v.strip() if v else v

    @field_validator("activity_type")
    @classmethod
    def valid_type(cls, v: Optional[str]) -> Optional[str]:
        return _check_type(v) if v is not None else v

    @field_validator("duration_minutes")
    @classmethod
    def positive_duration(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError("La durée doit être positive.")
        return v


class ActivityResponse(BaseModel):
    id: uuid.UUID
    student_id: uuid.UUID
    mentor_id: Optional[uuid.UUID] = None
    title: str
    activity_type: str
    date_completed: date
    description: Optional[str] = None
    duration_minutes: Optional[int] = None
    location: Optional[str] = None
    reflection: Optional[str] = None
    learning_outcomes: Optional[str] = None
    evidence_url: Optional[str] = None
    status: str
    feedback: Optional[str] = None
    verified_by: Optional[uuid.UUID] = None
    verified_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
