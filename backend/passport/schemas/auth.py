"""
Schémas Pydantic pour l'inscription, la connexion et le renouvellement du jeton.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator

from passport.schemas.user import MIN_PASSWORD_LENGTH, UserResponse

# L'auto-inscription ne permet pas de créer un compte administrateur
SELF_REGISTER_ROLES = {"student", "mentor"}


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    name: str
    role: str = "student"

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, v: str) -> str:
        return v.lower()

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom ne peut pas être vide.")
        return v.strip()

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Le mot de passe doit contenir au moins {MIN_PASSWORD_LENGTH} caractères.")
        return v

    @field_validator("role")
    @classmethod
    def valid_role(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in SELF_REGISTER_ROLES:
            raise ValueError(f"Rôle invalide. Valeurs acceptées : {sorted(SELF_REGISTER_ROLES)}")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, v: str) -> str:
        return v.lower()


class TokenResponse(BaseModel):
    """Réponse de connexion / refresh : utilisateur + JWT signé."""
    user: UserResponse
    token: str
    token_type: str = "bearer"


class VerifyResponse(TokenResponse):
    authenticated: bool = True


class LogoutResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
