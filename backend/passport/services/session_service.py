"""
Service métier pour les séances d'enseignement des étudiants.
"""

import uuid
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from passport.models.teaching_session import TeachingSession
from passport.schemas.teaching_session import SessionCreate, SessionUpdate

logger = logging.getLogger(__name__)


def list_sessions(db: Session, student_id: uuid.UUID, status: Optional[str] = None) -> list[TeachingSession]:
    """Séances d'un étudiant, de la plus récente à la plus ancienne, filtrables par statut."""
    query = (
        select(TeachingSession)
        .where(TeachingSession.student_id == student_id)
        .order_by(TeachingSession.date.desc())
    )
    if status:
        query = query.where(TeachingSession.status == status)
    return list(db.execute(query).scalars().all())


def get_session(db: Session, student_id: uuid.UUID, session_id: uuid.UUID) -> Optional[TeachingSession]:
    teaching_session = db.get(TeachingSession, session_id)
    if teaching_session is None or teaching_session.student_id != student_id:
        return None
    return teaching_session


def create_session(
    db: Session,
    student_id: uuid.UUID,
    data: SessionCreate,
    assigned_by: Optional[uuid.UUID] = None,
) -> TeachingSession:
    """Enregistre une séance. `assigned_by` est renseigné quand un admin la crée pour l'étudiant."""
    teaching_session = TeachingSession(
        student_id=student_id,
        verification_status="pending",
        assigned_by=assigned_by,
        **data.model_dump(),
    )
    db.add(teaching_session)
    db.commit()
    db.refresh(teaching_session)

    logger.info("Séance créée : %s (étudiant %s)", teaching_session.id, student_id)
    return teaching_session


def update_session(
    db: Session,
    student_id: uuid.UUID,
    session_id: uuid.UUID,
    data: SessionUpdate,
    reset_verification: bool = True,
) -> Optional[TeachingSession]:
    teaching_session = get_session(db, student_id, session_id)
    if teaching_session is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(teaching_session, field, value)

    if reset_verification and update_data:
        teaching_session.verification_status = "pending"
        teaching_session.verified_by = None
        teaching_session.verified_at = None

    db.commit()
    db.refresh(teaching_session)
    return teaching_session


def delete_session(db: Session, student_id: uuid.UUID, session_id: uuid.UUID) -> bool:
    teaching_session = get_session(db, student_id, session_id)
    if teaching_session is None:
        return False
    db.delete(teaching_session)
    db.commit()
    logger.info("Séance supprimée : %s (étudiant %s)", session_id, student_id)
    return True
