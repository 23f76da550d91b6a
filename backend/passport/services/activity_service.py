"""
Service métier pour les activités des étudiants.
"""

import uuid
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from passport.models.activity import Activity
from passport.schemas.activity import ActivityCreate, ActivityUpdate
from passport.services import mentorship_service

logger = logging.getLogger(__name__)


def list_activities(db: Session, student_id: uuid.UUID, status: Optional[str] = None) -> list[Activity]:
    """Activités d'un étudiant, de la plus récente à la plus ancienne."""
    query = (
        select(Activity)
        .where(Activity.student_id == student_id)
        .order_by(Activity.date_completed.desc())
    )
    if status:
        query = query.where(Activity.status == status)
    return list(db.execute(query).scalars().all())


def get_activity(db: Session, student_id: uuid.UUID, activity_id: uuid.UUID) -> Optional[Activity]:
    """Retourne l'activité si elle appartient bien à cet étudiant, sinon None."""
    activity = db.get(Activity, activity_id)
    if activity is None or activity.student_id != student_id:
        return None
    return activity


def create_activity(db: Session, student_id: uuid.UUID, data: ActivityCreate) -> Activity:
    """
    Enregistre une activité en attente de vérification.
    Le mentor actuellement assigné à l'étudiant est associé à l'activité.
    """
    activity = Activity(
        student_id=student_id,
        mentor_id=mentorship_service.get_mentor_id_for_student(db, student_id),
        status="pending",
        **data.model_dump(),
    )
    db.add(activity)
    db.commit()
    db.refresh(activity)

    logger.info("Activité créée : %s (étudiant %s)", activity.id, student_id)
    return activity


def update_activity(
    db: Session,
    student_id: uuid.UUID,
    activity_id: uuid.UUID,
    data: ActivityUpdate,
    reset_verification: bool = True,
) -> Optional[Activity]:
    """
    Met à jour les champs fournis d'une activité.
    Une modification par l'étudiant la renvoie en attente de vérification.
    """
    activity = get_activity(db, student_id, activity_id)
    if activity is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(activity, field, value)

    if reset_verification and update_data:
        activity.status = "pending"
        activity.verified_by = None
        activity.verified_at = None

    db.commit()
    db.refresh(activity)
    return activity


def delete_activity(db: Session, student_id: uuid.UUID, activity_id: uuid.UUID) -> bool:
    activity = get_activity(db, student_id, activity_id)
    if activity is None:
        return False
    db.delete(activity)
    db.commit()
    logger.info("Activité supprimée : %s (étudiant %s)", activity_id, student_id)
    return True
