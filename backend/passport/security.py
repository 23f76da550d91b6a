"""
Authentification et autorisation : contrat unique partagé par tous les routers.

Règles :
- Jeton : en-tête `Authorization: Bearer <jwt>` en priorité, puis cookie `authToken`
- Le JWT est toujours vérifié (signature HS256 + expiration), jamais simplement décodé
- L'utilisateur est rechargé depuis la BDD : il doit exister, être actif,
  et son rôle en base doit correspondre au claim `role` du jeton
- Échec d'identification → 401 "Unauthorized" ; rôle ou propriété refusés → 403 "Forbidden"
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from passport.config import settings
from passport.database import get_db
from passport.models.user import User
from passport.services import mentorship_service

logger = logging.getLogger(__name__)

# PBKDF2 : pas de dépendance au backend bcrypt natif
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)

UNAUTHORIZED = "Unauthorized"
FORBIDDEN = "Forbidden"

# Les comptes importés (pending) peuvent se connecter ; inactive/suspended non
LOGIN_ALLOWED_STATUSES = {"active", "pending"}

# Valeurs envoyées par certains clients quand le jeton est absent
_EMPTY_TOKENS = {"", "undefined", "null"}


# --- Mots de passe ---

def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Compare un mot de passe au hash stocké. Un hash illisible ne correspond jamais."""
    if not password_hash:
        return False
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        logger.warning("Hash de mot de passe illisible : connexion refusée.")
        return False


# --- JWT ---

def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Signe un JWT contenant l'identifiant, l'email et le rôle de l'utilisateur."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        "exp": expire,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """
    Vérifie la signature et l'expiration du jeton.
    Retourne le payload, ou None si le jeton est invalide, expiré ou incomplet.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.info("Jeton rejeté : %s", e)
        return None

    if not payload.get("sub") or not payload.get("role"):
        logger.info("Jeton rejeté : claims sub/role manquants")
        return None
    return payload


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
) -> Optional[str]:
    """Retourne le jeton de l'en-tête Bearer, à défaut celui du cookie, sinon None."""
    if credentials is not None and credentials.credentials.strip() not in _EMPTY_TOKENS:
        return credentials.credentials.strip()

    cookie_token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if cookie_token is not None and cookie_token.strip() not in _EMPTY_TOKENS:
        return cookie_token.strip()
    return None


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=UNAUTHORIZED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _forbidden() -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN)


# --- Dépendances FastAPI ---

def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Identifie l'appelant ou lève 401."""
    token = extract_token(request, credentials)
    if token is None:
        raise _unauthorized()

    payload = decode_access_token(token)
    if payload is None:
        raise _unauthorized()

    try:
        user_id = uuid.UUID(str(payload["sub"]))
    except ValueError:
        raise _unauthorized()

    user = db.get(User, user_id)
    if user is None:
        logger.warning("Jeton valide pour un utilisateur inexistant : %s", user_id)
        raise _unauthorized()

    # Un changement de rôle ou une désactivation invalide les jetons déjà émis
    if user.role != payload["role"] or user.status not in LOGIN_ALLOWED_STATUSES:
        logger.warning("Jeton refusé pour %s (rôle/statut modifié)", user_id)
        raise _unauthorized()

    return user


def require_roles(*roles: str) -> Callable[..., User]:
    """Fabrique une dépendance qui n'accepte que les rôles listés."""
    allowed = set(roles)

    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            logger.warning("Accès refusé : rôle %s hors de %s", user.role, sorted(allowed))
            raise _forbidden()
        return user

    return dependency


def _ensure_student_exists(db: Session, student_id: uuid.UUID) -> None:
    """L'admin n'a pas de contrôle de propriété : la cible doit être un étudiant existant."""
    target = db.get(User, student_id)
    if target is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Étudiant introuvable.")
    if target.role != "student":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="L'utilisateur indiqué n'est pas un étudiant.",
        )


def ensure_student_access(db: Session, user: User, student_id: uuid.UUID) -> None:
    """
    Lecture des données d'un étudiant :
    admin → toujours (si l'étudiant existe) ; étudiant → ses propres données ;
    mentor → ses étudiants assignés.
    """
    if user.role == "admin":
        _ensure_student_exists(db, student_id)
        return
    if user.role == "student" and user.id == student_id:
        return
    if user.role == "mentor" and mentorship_service.is_assigned(db, user.id, student_id):
        return
    raise _forbidden()


def ensure_student_write(db: Session, user: User, student_id: uuid.UUID) -> None:
    """Écriture des données d'un étudiant : l'étudiant lui-même ou un admin."""
    if user.role == "admin":
        _ensure_student_exists(db, student_id)
        return
    if user.role == "student" and user.id == student_id:
        return
    raise _forbidden()


def student_reader(
    student_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> User:
    """Dépendance pour les routes /students/{student_id}/... en lecture."""
    ensure_student_access(db, user, student_id)
    return user


def student_writer(
    student_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> User:
    """Dépendance pour les routes /students/{student_id}/... en écriture."""
    ensure_student_write(db, user, student_id)
    return user
