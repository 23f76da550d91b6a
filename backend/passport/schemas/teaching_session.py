"""
Schémas Pydantic pour les séances d'enseignement.
"""

import uuid
import datetime as dt
from typing import Optional

from pydantic import BaseModel, field_validator

VALID_SESSION_TYPES = {"classroom", "online", "one-on-one", "group", "other"}
VALID_SESSION_STATUSES = {"planned", "completed", "cancelled"}
AGE_GROUPS = ("Early Years (0-5)", "Primary (7-11)", "Secondary (11-16)", "Post-16")


def _check_type(v: str) -> str:
    v = v.strip().lower()
    if v not in VALID_SESSION_TYPES:
        raise ValueError(f"Type de séance invalide. Valeurs acceptées : {sorted(VALID_SESSION_TYPES)}")
    return v


def _check_status(v: str) -> str:
    v = v.strip().lower()
    if v not in VALID_SESSION_STATUSES:
        raise ValueError(f"Statut invalide. Valeurs acceptées : {sorted(VALID_SESSION_STATUSES)}")
    return v


def _check_age_group(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in AGE_GROUPS:
        raise ValueError(f"Tranche d'âge invalide. Valeurs acceptées : {list(AGE_GROUPS)}")
    return v


class SessionCreate(BaseModel):
    title: str
    date: dt.date
    duration_minutes: int
    session_type: str
    description: Optional[str] = None
    location: Optional[str] = None
    learner_age_group: Optional[str] = None
    subject: Optional[str] = None
    objectives: Optional[str] = None
    reflection: Optional[str] = None
    status: str = "planned"

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le titre ne peut pas être vide.")
        return v.strip()

    @field_validator("duration_minutes")
    @classmethod
    def positive_duration(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("La durée doit être positive.")
        return v

    @field_validator("session_type")
    @classmethod
    def valid_type(cls, v: str) -> str:
        return _check_type(v)

    @field_validator("status")
    @classmethod
    def valid_status(cls, v: str) -> str:
        return _check_status(v)

    @field_validator("learner_age_group")
    @classmethod
    def valid_age_group(cls, v: Optional[str]) -> Optional[str]:
        return _check_age_group(v)


class SessionUpdate(BaseModel):
    title: Optional[str] = None
    date: Optional[dt.date] = None
    duration_minutes: Optional[int] = None
    session_type: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    learner_age_group: Optional[str] = None
    subject: Optional[str] = None
    objectives: Optional[str] = None
    reflection: Optional[str] = None
    status: Optional[str] = None

    @field_validator("title", "date", "duration_minutes", "session_type", "status", mode="before")
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

    @field_validator("duration_minutes")
    @classmethod
    def positive_duration(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError("La durée doit être positive.")
        return v

    @field_validator("session_type")
    @classmethod
    def valid_type(cls, v: Optional[str]) -> Optional[str]:
        return _check_type(v) if v is not None else v

    @field_validator("status")
    @classmethod
    def valid_status(cls, v: Optional[str]) -> Optional[str]:
        return _check_status(v) if v is not None else v

    @field_validator("learner_age_group")
    @classmethod
    def valid_age_group(cls, v: Optional[str]) -> Optional[str]:
        return _check_age_group(v)


class SessionResponse(BaseModel):
    id: uuid.UUID
    student_id: uuid.UUID
    title: str
    date: dt.date
    duration_minutes: int
    session_type: str
    description: Optional[str] = None
    location: Optional[str] = None
    learner_age_group: Optional[str] = None
    subject: Optional[str] = None
    objectives: Optional[str] = None
    reflection: Optional[str] = None
    status: str
    verification_status: str
    feedback: Optional[str] = None
    verified_by: Optional[uuid.UUID] = None
    verified_at: Optional[dt.datetime] = None
    assigned_by: Optional[uuid.UUID] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    model_config = {"from_attributes": True}
