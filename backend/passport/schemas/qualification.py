"""
Schémas Pydantic pour les qualifications des étudiants.
"""

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

VALID_QUALIFICATION_TYPES = {"degree", "certificate", "license", "course", "other"}


def _check_type(v: str) -> str:
    v = v.strip().lower()
    if v not in VALID_QUALIFICATION_TYPES:
        raise ValueError(f"Type de qualification invalide. Valeurs acceptées : {sorted(VALID_QUALIFICATION_TYPES)}")
    return v


class QualificationCreate(BaseModel):
    title: str
    issuing_organization: str
    date_obtained: date
    qualification_type: str
    description: Optional[str] = None
    expiry_date: Optional[date] = None
    certificate_url: Optional[str] = None

    @field_validator("title", "issuing_organization")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()

    @field_validator("qualification_type")
    @classmethod
    def valid_type(cls, v: str) -> str:
        return _check_type(v)

    @model_validator(mode="after")
    def expiry_after_obtained(self):
        if self.expiry_date is not None and self.expiry_date < self.date_obtained:
            raise ValueError("La date d'expiration doit être postérieure à la date d'obtention.")
        return self


class QualificationUpdate(BaseModel):
    title: Optional[str] = None
    issuing_organization: Optional[str] = None
    date_obtained: Optional[date] = None
    qualification_type: Optional[str] = None
    description: Optional[str] = None
    expiry_date: Optional[date] = None
    certificate_url: Optional[str] = None

    @field_validator("title", "issuing_organization", "date_obtained", "qualification_type", mode="before")
    @classmethod
    def not_null(cls, v):
        # Champ obligatoire en base : omis = inchangé, null = refusé
        if v is None:
            raise ValueError("Ce champ ne peut pas être nul.")
        return v

    @field_validator("title", "issuing_organization")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip() if v else v

    @field_validator("qualification_type")
    @classmethod
    def valid_type(cls, v: Optional[str]) -> Optional[str]:
        return _check_type(v) if v is not None else v


class QualificationResponse(BaseModel):
    id: uuid.UUID
    student_id: uuid.UUID
    title: str
    issuing_organization: str
    date_obtained: date
    qualification_type: str
    description: Optional[str] = None
    expiry_date: Optional[date] = None
    certificate_url: Optional[str] = None
    verification_status: str
    feedback: Optional[str] = None
    verified_by: Optional[uuid.UUID] = None
    verified_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
