"""
Schémas Pydantic pour les utilisateurs et l'import en masse (admin).
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, field_validator

VALID_ROLES = {"admin", "mentor", "student"}
VALID_STATUSES = {"active", "inactive", "pending", "suspended"}
MIN_PASSWORD_LENGTH = 6


def _check_password(v: str) -> str:
    if len(v) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Le mot de passe doit contenir au moins {MIN_PASSWORD_LENGTH} caractères.")
    return v


class UserCreate(BaseModel):
    """Création d'un compte par un administrateur (POST /admin/users)."""
    name: str
    email: EmailStr
    password: str
    role: str
    status: str = "active"

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom ne peut pas être vide.")
        return v.strip()

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        return _check_password(v)

    @field_validator("role")
    @classmethod
    def valid_role(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in VALID_ROLES:
            raise ValueError(f"Rôle invalide. Valeurs acceptées : {sorted(VALID_ROLES)}")
        return v

    @field_validator("status")
    @classmethod
    def valid_status(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in VALID_STATUSES:
            raise ValueError(f"Statut invalide. Valeurs acceptées : {sorted(VALID_STATUSES)}")
        return v


class UserUpdate(BaseModel):
    """Mise à jour partielle d'un compte (PATCH /admin/users/{id})."""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None
    profile_image: Optional[str] = None

    @field_validator("name", "email", "role", "status", mode="before")
    @classmethod
    def not_null(cls, v):
        # Champ obligatoire en base : omis = inchangé, null = refusé
        if v is None:
            raise ValueError("Ce champ ne peut pas être nul.")
        return v

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le nom ne peut pas être vide.")
        return v.strip() if v else v

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v

    @field_validator("password")
    @classmethod
    def password_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_password(v) if v is not None else v

    @field_validator("role")
    @classmethod
    def valid_role(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip().lower()
        if v not in VALID_ROLES:
            raise ValueError(f"Rôle invalide. Valeurs acceptées : {sorted(VALID_ROLES)}")
        return v

    @field_validator("status")
    @classmethod
    def valid_status(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip().lower()
        if v not in VALID_STATUSES:
            raise ValueError(f"Statut invalide. Valeurs acceptées : {sorted(VALID_STATUSES)}")
        return v


class UserResponse(BaseModel):
    """Représentation publique d'un utilisateur (jamais de mot de passe)."""
    id: uuid.UUID
    email: str
    name: str
    role: str
    status: str
    profile_image: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserImportItem(BaseModel):
    """Ligne brute d'un import : validée ligne par ligne par le service, pas ici."""
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None
    password: Optional[str] = None


class UserImportRequest(BaseModel):
    users: List[UserImportItem]

    @field_validator("users")
    @classmethod
    def not_empty(cls, v: List[UserImportItem]) -> List[UserImportItem]:
        if not v:
            raise ValueError("Aucun utilisateur à importer.")
        return v


class UserImportDetail(BaseModel):
    """Résultat d'une ligne de l'import."""
    row: int
    email: str
    status: str  # success, duplicate, error
    message: Optional[str] = None


class UserImportReport(BaseModel):
    """Rapport retourné après un import."""
    total_rows: int
    inserted: int
    duplicates: int
    errors: int
    details: List[UserImportDetail]
