"""
Tests unitaires pour les services d'activités, de qualifications et de séances.
"""

import uuid
from datetime import date, datetime
from unittest.mock import MagicMock, patch

import pytest

from passport.models.activity import Activity
from passport.models.qualification import Qualification
from passport.models.teaching_session import TeachingSession
from passport.schemas.activity import ActivityCreate, ActivityUpdate
from passport.schemas.qualification import QualificationUpdate
from passport.schemas.teaching_session import SessionUpdate
from passport.services import activity_service, qualification_service, session_service


def db_returning(obj):
    db = MagicMock()
    db.get.return_value = obj
    return db


def verified_activity(student_id: uuid.UUID) -> Activity:
    return Activity(
        id=uuid.uuid4(), student_id=student_id, title="Atelier", activity_type="workshop",
        date_completed=date(2024, 3, 1), status="verified",
        verified_by=uuid.uuid4(), verified_at=datetime(2024, 3, 5),
    )


# --- Activités ---

def test_create_activity_associe_le_mentor():
    student_id, mentor_id = uuid.uuid4(), uuid.uuid4()
    db = MagicMock()
    data = ActivityCreate(title="Atelier", activity_type="Workshop", date_completed=date(2024, 3, 1))

    with patch(
        "passport.services.activity_service.mentorship_service.get_mentor_id_for_student",
        return_value=mentor_id,
    ):
        activity = activity_service.create_activity(db, student_id, data)

    assert activity.mentor_id == mentor_id
    assert activity.status == "pending"
    assert activity.activity_type == "workshop"
    db.add.assert_called_once_with(activity)


def test_get_activity_autre_etudiant():
    """Un élément demandé sous un autre student_id est considéré comme introuvable."""
    activity = verified_activity(uuid.uuid4())
    assert activity_service.get_activity(db_returning(activity), uuid.uuid4(), activity.id) is None


def test_update_activity_reinitialise_la_verification():
    student_id = uuid.uuid4()
    activity = verified_activity(student_id)

    activity_service.update_activity(db_returning(activity), student_id, activity.id, ActivityUpdate(title="Nouveau"))

    assert activity.title == "Nouveau"
    assert activity.status == "pending"
    assert activity.verified_by is None
    assert activity.verified_at is None


def test_update_activity_sans_reinitialisation():
    student_id = uuid.uuid4()
    activity = verified_activity(student_id)

    activity_service.update_activity(
        db_returning(activity), student_id, activity.id, ActivityUpdate(location="Liège"), reset_verification=False
    )

    assert activity.location == "Liège"
    assert activity.status == "verified"


def test_delete_activity_introuvable():
    db = db_returning(None)
    assert activity_service.delete_activity(db, uuid.uuid4(), uuid.uuid4()) is False
    db.delete.assert_not_called()


# --- Qualifications ---

def test_update_qualification_expiration_avant_obtention():
    student_id = uuid.uuid4()
    qualification = Qualification(
        id=uuid.uuid4(), student_id=student_id, title="Master", issuing_organization="ULB",
        date_obtained=date(2023, 6, 30), qualification_type="degree", verification_status="verified",
    )
    db = db_returning(qualification)

    with pytest.raises(ValueError):
        qualification_service.update_qualification(
            db, student_id, qualification.id, QualificationUpdate(expiry_date=date(2020, 1, 1))
        )
    assert qualification.expiry_date is None
    db.commit.assert_not_called()


def test_update_qualification_reinitialise():
    student_id = uuid.uuid4()
    qualification = Qualification(
        id=uuid.uuid4(), student_id=student_id, title="Master", issuing_organization="ULB",
        date_obtained=date(2023, 6, 30), qualification_type="degree", verification_status="verified",
    )

    qualification_service.update_qualification(
        db_returning(qualification), student_id, qualification.id, QualificationUpdate(title="Master MEEF")
    )
    assert qualification.verification_status == "pending"


# --- Séances ---

def test_update_session_statut_et_reinitialisation():
    student_id = uuid.uuid4()
    teaching_session = TeachingSession(
        id=uuid.uuid4(), student_id=student_id, title="Cours", date=date(2024, 5, 2),
        duration_minutes=50, session_type="classroom", status="planned", verification_status="verified",
    )

    session_service.update_session(
        db_returning(teaching_session), student_id, teaching_session.id, SessionUpdate(status="completed")
    )

    assert teaching_session.status == "completed"
    assert teaching_session.verification_status == "pending"


def test_update_session_tranche_age_invalide():
    with pytest.raises(ValueError):
        SessionUpdate(learner_age_group="Adultes")
