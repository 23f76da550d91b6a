"""
Service métier pour les qualifications des étudiants.
"""

import uuid
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from passport.models.qualification import Qualification
from passport.schemas.qualification import QualificationCreate, QualificationUpdate

logger = logging.getLogger(__name__)


def list_qualifications(db: Session, student_id: uuid.UUID) -> list[Qualification]:
    """Qualifications d'un étudiant, de la plus récemment obtenue à la plus ancienne."""
    return list(db.execute(
        select(Qualification)
        .where(Qualification.student_id == student_id)
        .order_by(Qualification.date_obtained.desc())
    ).scalars().all())


def get_qualification(
    db: Session, student_id: uuid.UUID, qualification_id: uuid.UUID
) -> Optional[Qualification]:
    qualification = db.get(Qualification, qualification_id)
    if qualification is None or qualification.student_id != student_id:
        return None
    return qualification


def create_qualification(db: Session, student_id: uuid.UUID, data: QualificationCreate) -> Qualification:
    qualification = Qualification(
        student_id=student_id,
        verification_status="pending",
        **data.model_dump(),
    )
    db.add(qualification)
    db.commit()
    db.refresh(qualification)

    logger.info("Qualification créée : %s (étudiant %s)", qualification.id, student_id)
    return qualification


def update_qualification(
    db: Session,
    student_id: uuid.UUID,
    qualification_id: uuid.UUID,
    data: QualificationUpdate,
    reset_verification: bool = True,
) -> Optional[Qualification]:
    """
    Met à jour les champs fournis.
    Lève une ValueError si la date d'expiration finale précède la date d'obtention.
    """
    qualification = get_qualification(db, student_id, qualification_id)
    if qualification is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    obtained = update_data.get("date_obtained", qualification.date_obtained)
    expiry = update_data.get("expiry_date", qualification.expiry_date)
    if obtained is not None and expiry is not None and expiry < obtained:
        raise ValueError("La date d'expiration doit être postérieure à la date d'obtention.")

    for field, value in update_data.items():
        setattr(qualification, field, value)

    if reset_verification and update_data:
        qualification.verification_status = "pending"
        qualification.verified_by = None
        qualification.verified_at = None

    db.commit()
    db.refresh(qualification)
    return qualification


def delete_qualification(db: Session, student_id: uuid.UUID, qualification_id: uuid.UUID) -> bool:
    qualification = get_qualification(db, student_id, qualification_id)
    if qualification is None:
        return False
    db.delete(qualification)
    db.commit()
    logger.info("Qualification supprimée : %s (étudiant %s)", qualification_id, student_id)
    return True
