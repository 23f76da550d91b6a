"""
Service de vérification des éléments soumis par les étudiants
(activités, qualifications, séances) par les mentors et les admins.
"""

import uuid
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, aliased

from passport.models.activity import Activity
from passport.models.mentorship import MentorStudentAssignment
from passport.models.qualification import Qualification
from passport.models.teaching_session import TeachingSession
from passport.models.user import User
from passport.schemas.verification import VERIFICATION_TYPES, VerificationItem, VerificationUpdate
from passport.services import mentorship_service

logger = logging.getLogger(__name__)

# type → (modèle, nom de la colonne de statut)
_SOURCES = {
    "activities": (Activity, "status"),
    "qualifications": (Qualification, "verification_status"),
    "sessions": (TeachingSession, "verification_status"),
}


def _source(item_type: str):
    if item_type not in VERIFICATION_TYPES:
        raise ValueError(f"Type invalide. Valeurs acceptées : {sorted(VERIFICATION_TYPES)}")
    return _SOURCES[item_type]


def _to_item(item_type: str, record, status_column: str, student: User, verifier: Optional[User]) -> VerificationItem:
    return VerificationItem(
        id=record.id,
        item_type=item_type,
        title=record.title,
        student_id=record.student_id,
        student_name=student.name,
        student_email=student.email,
        status=getattr(record, status_column),
        feedback=record.feedback,
        verified_by=record.verified_by,
        verified_by_name=verifier.name if verifier is not None else None,
        verified_at=record.verified_at,
        submitted_at=record.created_at,
    )


def _query(item_type: str):
    model, status_column = _source(item_type)
    student = aliased(User)
    verifier = aliased(User)
    query = (
        select(model, student, verifier)
        .join(student, student.id == model.student_id)
        .outerjoin(verifier, verifier.id == model.verified_by)
    )
    return query, model, status_column


def list_items(
    db: Session,
    user: User,
    status: Optional[str] = "pending",
    item_type: Optional[str] = None,
) -> list[VerificationItem]:
    """
    Éléments dans le statut demandé, les plus anciens d'abord.
    Un mentor ne voit que les éléments de ses étudiants assignés.
    """
    types = [item_type] if item_type else sorted(VERIFICATION_TYPES)

    items: list[VerificationItem] = []
    for t in types:
        query, model, status_column = _query(t)
        if status:
            query = query.where(getattr(model, status_column) == status)
        if user.role == "mentor":
            query = query.where(
                model.student_id.in_(
                    select(MentorStudentAssignment.student_id)
                    .where(MentorStudentAssignment.mentor_id == user.id)
                )
            )
        rows = db.execute(query.order_by(model.created_at.asc())).all()
        items.extend(_to_item(t, record, status_column, s, v) for record, s, v in rows)

    items.sort(key=lambda i: i.submitted_at or datetime.min)
    return items


def _load(db: Session, user: User, item_type: str, item_id: uuid.UUID):
    query, model, status_column = _query(item_type)
    row = db.execute(query.where(model.id == item_id)).first()
    if row is None:
        return None, status_column

    record = row[0]
    if user.role == "mentor" and not mentorship_service.is_assigned(db, user.id, record.student_id):
        raise PermissionError("Cet étudiant ne vous est pas assigné.")
    return row, status_column


def get_item(db: Session, user: User, item_type: str, item_id: uuid.UUID) -> Optional[VerificationItem]:
    """Lève ValueError (type inconnu) ou PermissionError (mentor non assigné)."""
    row, status_column = _load(db, user, item_type, item_id)
    if row is None:
        return None
    record, student, verifier = row
    return _to_item(item_type, record, status_column, student, verifier)


def update_item(
    db: Session,
    user: User,
    item_type: str,
    item_id: uuid.UUID,
    data: VerificationUpdate,
) -> Optional[VerificationItem]:
    """
    Enregistre la décision du vérificateur.
    Repasser en pending efface le vérificateur et la date.
    """
    row, status_column = _load(db, user, item_type, item_id)
    if row is None:
        return None
    record, student, _ = row

    setattr(record, status_column, data.status)
    record.feedback = data.feedback
    if data.status == "pending":
        record.verified_by = None
        record.verified_at = None
        verifier = None
    else:
        record.verified_by = user.id
        record.verified_at = datetime.now()
        verifier = user

    db.commit()
    db.refresh(record)

    logger.info(
        "Vérification %s/%s → %s par %s (%s)",
        item_type, item_id, data.status, user.id, user.role,
    )
    return _to_item(item_type, record, status_column, student, verifier)
