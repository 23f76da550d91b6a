"""
Schémas Pydantic pour la vérification des activités, qualifications et séances.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

VERIFICATION_TYPES = {"activities", "qualifications", "sessions"}
VERIFICATION_STATUSES = {"pending", "verified", "rejected"}


class VerificationUpdate(BaseModel):
    """Décision d'un mentor ou d'un admin sur un élément soumis."""
    status: str
    feedback: Optional[str] = None

    @field_validator("status")
    @classmethod
    def valid_status(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in VERIFICATION_STATUSES:
            raise ValueError(f"Statut invalide. Valeurs acceptées : {sorted(VERIFICATION_STATUSES)}")
        return v

    @field_validator("feedback")
    @classmethod
    def strip_feedback(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v and v.strip() else None

    @model_validator(mode="after")
    def feedback_required_on_reject(self):
        if self.status == "rejected" and not self.feedback:
            raise ValueError("Un commentaire est obligatoire pour rejeter un élément.")
        return self


class VerificationItem(BaseModel):
    """Vue homogène d'un élément vérifiable, quel que soit son type."""
    id: uuid.UUID
    item_type: str  # activities, qualifications, sessions
    title: str
    student_id: uuid.UUID
    student_name: Optional[str] = None
    student_email: Optional[str] = None
    status: str
    feedback: Optional[str] = None
    verified_by: Optional[uuid.UUID] = None
    verified_by_name: Optional[str] = None
    verified_at: Optional[datetime] = None
    submitted_at: Optional[datetime] = None
