"""
Service métier pour les comptes utilisateurs : inscription, connexion, gestion admin.
"""

import uuid
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from passport.models.user import User
from passport.schemas.auth import RegisterRequest
from passport.schemas.user import UserCreate, UserUpdate
from passport.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Recherche insensible à la casse (les emails sont stockés en minuscules)."""
    return db.execute(
        select(User).where(User.email == email.strip().lower())
    ).scalar()


def register_user(db: Session, data: RegisterRequest) -> User:
    """
    Auto-inscription d'un étudiant ou d'un mentor.
    Lève une ValueError si l'email est déjà utilisé : aucune ligne n'est créée.
    """
    if get_user_by_email(db, data.email) is not None:
        raise ValueError("Un compte existe déjà avec cet email.")

    user = User(
        email=data.email,
        password_hash=hash_password(data.password),
        name=data.name,
        role=data.role,
        status="active",
    )
    _commit_new_user(db, user)
    logger.info("Inscription : %s (%s)", user.email, user.role)
    return user


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    """Retourne l'utilisateur si email et mot de passe correspondent, sinon None."""
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Échec de connexion pour %s", email)
        return None
    return user


def record_login(db: Session, user: User) -> None:
    user.last_login = datetime.now()
    db.commit()
    db.refresh(user)


def list_users(db: Session, role: Optional[str] = None) -> list[User]:
    """Tous les utilisateurs, du plus récent au plus ancien, filtrables par rôle."""
    query = select(User).order_by(User.created_at.desc())
    if role:
        query = query.where(User.role == role)
    return list(db.execute(query).scalars().all())


def get_user(db: Session, user_id: uuid.UUID) -> Optional[User]:
    return db.get(User, user_id)


def create_user(db: Session, data: UserCreate) -> User:
    """Création d'un compte par un admin. Lève une ValueError si l'email existe déjà."""
    if get_user_by_email(db, data.email) is not None:
        raise ValueError(f"Un compte existe déjà avec l'email '{data.email}'.")

    user = User(
        email=data.email,
        password_hash=hash_password(data.password),
        name=data.name,
        role=data.role,
        status=data.status,
    )
    _commit_new_user(db, user)
    logger.info("Compte créé par un admin : %s (%s)", user.email, user.role)
    return user


def update_user(db: Session, user_id: uuid.UUID, data: UserUpdate) -> Optional[User]:
    """
    Met à jour les champs fournis. Le mot de passe éventuel est re-hashé.
    Retourne None si l'utilisateur n'existe pas.
    """
    user = db.get(User, user_id)
    if user is None:
        return None

    update_data = data.model_dump(exclude_unset=True, exclude={"password"})
    for field, value in update_data.items():
        setattr(user, field, value)
    if data.password:
        user.password_hash = hash_password(data.password)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Un compte existe déjà avec cet email.")
    db.refresh(user)
    logger.info("Compte %s mis à jour : %s", user_id, sorted(data.model_dump(exclude_unset=True)))
    return user


def delete_user(db: Session, user_id: uuid.UUID, acting_user_id: uuid.UUID) -> bool:
    """
    Supprime un compte et, en cascade, ses données.
    Un admin ne peut pas supprimer son propre compte.
    """
    if user_id == acting_user_id:
        raise ValueError("Impossible de supprimer votre propre compte.")

    user = db.get(User, user_id)
    if user is None:
        return False

    db.delete(user)
    db.commit()
    logger.info("Compte supprimé : %s", user_id)
    return True


def _commit_new_user(db: Session, user: User) -> None:
    """Insère l'utilisateur ; la contrainte unique sur l'email couvre les inscriptions concurrentes."""
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Un compte existe déjà avec cet email.")
    db.refresh(user)
