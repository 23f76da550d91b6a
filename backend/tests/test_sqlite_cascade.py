"""
Tests sur une vraie base SQLite en mémoire : suppression en cascade des données
d'un utilisateur (les sessions mockées ne voient pas les contraintes de la BDD).
"""

import uuid
from datetime import date, datetime

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import passport.models  # noqa: F401
from passport.database import Base, get_db
from passport.main import app
from passport.models.activity import Activity
from passport.models.cv import StudentCV
from passport.models.mentorship import MentorStudentAssignment
from passport.models.message import Message
from passport.models.qualification import Qualification
from passport.models.teaching_session import TeachingSession
from passport.models.user import User
from passport.services import user_service


@pytest.fixture
def sqlite_db():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    db = sessionmaker(bind=engine, autoflush=False)()
    yield db
    db.close()
    engine.dispose()


def add_user(db, role: str) -> User:
    user = User(
        id=uuid.uuid4(), email=f"{role}-{uuid.uuid4().hex[:6]}@test.be",
        password_hash="hash", name=role.capitalize(), role=role, status="active",
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def population(sqlite_db):
    """Un admin, un mentor et un étudiant avec une donnée de chaque type."""
    admin = add_user(sqlite_db, "admin")
    mentor = add_user(sqlite_db, "mentor")
    student = add_user(sqlite_db, "student")

    activity = Activity(
        student_id=student.id, mentor_id=mentor.id, title="Atelier", activity_type="workshop",
        date_completed=date(2024, 3, 1), status="pending",
    )
    sqlite_db.add_all([
        MentorStudentAssignment(mentor_id=mentor.id, student_id=student.id, assigned_date=datetime.now()),
        activity,
        Qualification(
            student_id=student.id, title="Master", issuing_organization="ULB",
            date_obtained=date(2023, 6, 30), qualification_type="degree",
        ),
        TeachingSession(
            student_id=student.id, title="Cours", date=date(2024, 5, 2), duration_minutes=50,
            session_type="classroom",
        ),
        StudentCV(student_id=student.id, name="CV", content={}),
        Message(sender_id=student.id, receiver_id=mentor.id, content="Bonjour", sent_at=datetime.now()),
        Message(sender_id=mentor.id, receiver_id=student.id, content="Bonjour Jean", sent_at=datetime.now()),
    ])
    sqlite_db.commit()
    return admin, mentor, student, activity


def count(db, model) -> int:
    return db.execute(select(func.count()).select_from(model)).scalar()


def test_suppression_etudiant_supprime_ses_donnees(sqlite_db, population):
    admin, _, student, _ = population

    assert user_service.delete_user(sqlite_db, student.id, admin.id) is True
    sqlite_db.expire_all()

    for model in (MentorStudentAssignment, Activity, Qualification, TeachingSession, StudentCV, Message):
        assert count(sqlite_db, model) == 0, model.__tablename__
    assert count(sqlite_db, User) == 2


def test_suppression_mentor_conserve_les_donnees_etudiant(sqlite_db, population):
    """Mentor supprimé : assignation et messages disparaissent, l'activité reste sans mentor."""
    admin, mentor, _, activity = population

    user_service.delete_user(sqlite_db, mentor.id, admin.id)
    sqlite_db.expire_all()

    assert count(sqlite_db, MentorStudentAssignment) == 0
    assert count(sqlite_db, Message) == 0
    assert count(sqlite_db, Activity) == 1
    refreshed = sqlite_db.get(Activity, activity.id)
    assert refreshed.mentor_id is None


def test_tableau_de_bord_apres_suppression(client, login_as, sqlite_db, population):
    admin, _, student, _ = population
    login_as(admin)
    app.dependency_overrides[get_db] = lambda: sqlite_db

    assert client.delete(f"/api/admin/users/{student.id}").status_code == 204
    stats = client.get("/api/admin/dashboard").json()

    assert stats["users_by_role"]["student"] == 0
    assert stats["assignments"] == 0
    assert stats["unassigned_students"] == 0
    assert stats["pending_activities"] == 0
    assert stats["unread_messages"] == 0
