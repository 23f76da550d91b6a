"""
Router d'authentification : inscription, connexion, vérification, refresh, déconnexion.
Le JWT est renvoyé dans le corps et posé dans le cookie httpOnly `authToken`.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from passport.config import settings
from passport.database import get_db
from passport.models.user import User
from passport.schemas.auth import LoginRequest, LogoutResponse, RegisterRequest, TokenResponse, VerifyResponse
from passport.schemas.user import UserResponse
from passport.security import LOGIN_ALLOWED_STATUSES, create_access_token, get_current_user
from passport.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentification"])


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="strict",
        secure=settings.is_production,
        path="/",
    )


@router.post("/register", response_model=UserResponse, status_code=201, summary="Créer un compte")
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Auto-inscription d'un étudiant ou d'un mentor.
    Un email déjà utilisé (insensible à la casse) est refusé (400), sans création de compte.
    """
    try:
        return user_service.register_user(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/login", response_model=TokenResponse, summary="Se connecter")
def login(data: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """
    Vérifie les identifiants et retourne un JWT valable 24 h.
    Le jeton est aussi posé dans le cookie `authToken` (httpOnly, SameSite=strict).
    """
    user = user_service.authenticate(db, data.email, data.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Email ou mot de passe invalide.")
    if user.status not in LOGIN_ALLOWED_STATUSES:
        logger.warning("Connexion refusée pour le compte %s (statut %s)", user.id, user.status)
        raise HTTPException(status_code=403, detail="Ce compte est désactivé.")

    user_service.record_login(db, user)
    token = create_access_token(user)
    _set_auth_cookie(response, token)

    logger.info("Connexion : %s (%s)", user.email, user.role)
    return TokenResponse(user=UserResponse.model_validate(user), token=token)


@router.get("/verify", response_model=VerifyResponse, summary="Vérifier la session")
def verify(user: User = Depends(get_current_user)):
    """Confirme que le jeton est valide et retourne l'utilisateur avec un jeton frais."""
    return VerifyResponse(user=UserResponse.model_validate(user), token=create_access_token(user))


@router.post("/refresh", response_model=TokenResponse, summary="Renouveler le jeton")
def refresh(response: Response, user: User = Depends(get_current_user)):
    token = create_access_token(user)
    _set_auth_cookie(response, token)
    return TokenResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/logout", response_model=LogoutResponse, summary="Se déconnecter")
def logout(response: Response):
    """Efface les cookies de session. Ne nécessite pas d'être authentifié."""
    response.delete_cookie(settings.AUTH_COOKIE_NAME, path="/")
    response.delete_cookie(settings.USER_COOKIE_NAME, path="/")
    return LogoutResponse(success=True, message="Déconnexion réussie.")
