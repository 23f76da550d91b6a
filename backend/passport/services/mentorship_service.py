"""
Service métier pour les assignations mentor ↔ étudiant.
"""

import uuid
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, aliased

from passport.models.mentorship import MentorStudentAssignment
from passport.models.user import User
from passport.schemas.mentorship import (
    AssignedUser,
    AssignmentCreate,
    AssignmentResponse,
    AssignmentResult,
    MentorWithStudents,
)

logger = logging.getLogger(__name__)


def is_assigned(db: Session, mentor_id: uuid.UUID, student_id: uuid.UUID) -> bool:
    """Vrai si ce mentor est assigné à cet étudiant."""
    found = db.execute(
        select(MentorStudentAssignment.id)
        .where(
            MentorStudentAssignment.mentor_id == mentor_id,
            MentorStudentAssignment.student_id == student_id,
        )
    ).scalar()
    return found is not None


def get_mentor_id_for_student(db: Session, student_id: uuid.UUID) -> Optional[uuid.UUID]:
    """Retourne l'ID du mentor assigné à l'étudiant, ou None."""
    return db.execute(
        select(MentorStudentAssignment.mentor_id)
        .where(MentorStudentAssignment.student_id == student_id)
    ).scalar()


def list_assignments(db: Session) -> list[AssignmentResponse]:
    """Toutes les assignations avec noms et emails, de la plus récente à la plus ancienne."""
    mentor = aliased(User)
    student = aliased(User)
    rows = db.execute(
        select(MentorStudentAssignment, mentor, student)
        .join(mentor, mentor.id == MentorStudentAssignment.mentor_id)
        .join(student, student.id == MentorStudentAssignment.student_id)
        .order_by(MentorStudentAssignment.assigned_date.desc())
    ).all()

    return [_to_response(a, m, s) for a, m, s in rows]


def assignments_by_mentor(db: Session) -> list[MentorWithStudents]:
    """Regroupe les assignations par mentor (tri par nom de mentor puis d'étudiant)."""
    mentor = aliased(User)
    student = aliased(User)
    rows = db.execute(
        select(MentorStudentAssignment, mentor, student)
        .join(mentor, mentor.id == MentorStudentAssignment.mentor_id)
        .join(student, student.id == MentorStudentAssignment.student_id)
        .order_by(mentor.name, student.name)
    ).all()

    grouped: dict[uuid.UUID, MentorWithStudents] = {}
    for assignment, m, s in rows:
        if m.id not in grouped:
            grouped[m.id] = MentorWithStudents(id=m.id, name=m.name, email=m.email, students=[])
        grouped[m.id].students.append(
            AssignedUser(
                id=s.id,
                name=s.name,
                email=s.email,
                assigned_date=assignment.assigned_date,
                notes=assignment.notes,
            )
        )
    return list(grouped.values())


def assign_student(db: Session, data: AssignmentCreate) -> AssignmentResult:
    """
    Assigne un étudiant à un mentor.

    Validations :
    1. mentor_id désigne un utilisateur de rôle mentor
    2. student_id désigne un utilisateur de rôle student

    Un étudiant n'a qu'un mentor :
    - même mentor déjà assigné → mise à jour des notes et de la date
    - autre mentor → l'ancienne assignation est remplacée
    """
    mentor = db.get(User, data.mentor_id)
    if mentor is None or mentor.role != "mentor":
        raise ValueError("Le mentor indiqué n'existe pas ou n'a pas le rôle mentor.")

    student = db.get(User, data.student_id)
    if student is None or student.role != "student":
        raise ValueError("L'étudiant indiqué n'existe pas ou n'a pas le rôle étudiant.")

    existing = db.execute(
        select(MentorStudentAssignment)
        .where(MentorStudentAssignment.student_id == data.student_id)
    ).scalar()

    if existing is not None and existing.mentor_id == data.mentor_id:
        existing.notes = data.notes
        existing.assigned_date = datetime.now()
        db.commit()
        db.refresh(existing)
        logger.info("Assignation mise à jour : mentor %s → étudiant %s", mentor.id, student.id)
        return AssignmentResult(created=False, assignment=_to_response(existing, mentor, student))

    if existing is not None:
        logger.info(
            "Étudiant %s réassigné : mentor %s remplacé par %s",
            student.id, existing.mentor_id, mentor.id,
        )
        db.delete(existing)
        # La contrainte unique sur student_id impose le DELETE avant l'INSERT
        db.flush()

    assignment = MentorStudentAssignment(
        mentor_id=data.mentor_id,
        student_id=data.student_id,
        notes=data.notes,
        assigned_date=datetime.now(),
    )
    db.add(assignment)
    db.commit()
    db.refresh(assignment)

    logger.info("Étudiant %s assigné au mentor %s", student.id, mentor.id)
    return AssignmentResult(created=True, assignment=_to_response(assignment, mentor, student))


def unassign_student(db: Session, student_id: uuid.UUID) -> bool:
    """Retire l'assignation de l'étudiant. Retourne False si aucune n'existait."""
    existing = db.execute(
        select(MentorStudentAssignment)
        .where(MentorStudentAssignment.student_id == student_id)
    ).scalar()
    if existing is None:
        return False

    db.delete(existing)
    db.commit()
    logger.info("Étudiant %s désassigné du mentor %s", student_id, existing.mentor_id)
    return True


def get_mentor_students(db: Session, mentor_id: uuid.UUID) -> list[AssignedUser]:
    """Étudiants assignés à un mentor, triés par nom."""
    rows = db.execute(
        select(User, MentorStudentAssignment)
        .join(MentorStudentAssignment, MentorStudentAssignment.student_id == User.id)
        .where(MentorStudentAssignment.mentor_id == mentor_id)
        .order_by(User.name)
    ).all()
    return [_to_assigned_user(u, a) for u, a in rows]


def get_student_mentors(db: Session, student_id: uuid.UUID) -> list[AssignedUser]:
    """Mentor(s) d'un étudiant (au plus un dans le modèle actuel)."""
    rows = db.execute(
        select(User, MentorStudentAssignment)
        .join(MentorStudentAssignment, MentorStudentAssignment.mentor_id == User.id)
        .where(MentorStudentAssignment.student_id == student_id)
    ).all()
    return [_to_assigned_user(u, a) for u, a in rows]


def _to_assigned_user(user: User, assignment: MentorStudentAssignment) -> AssignedUser:
    return AssignedUser(
        id=user.id,
        name=user.name,
        email=user.email,
        assigned_date=assignment.assigned_date,
        notes=assignment.notes,
    )


def _to_response(assignment: MentorStudentAssignment, mentor: User, student: User) -> AssignmentResponse:
    """Construit le schéma de réponse avec les informations des deux utilisateurs."""
    return AssignmentResponse(
        id=assignment.id,
        mentor_id=mentor.id,
        mentor_name=mentor.name,
        mentor_email=mentor.email,
        student_id=student.id,
        student_name=student.name,
        student_email=student.email,
        assigned_date=assignment.assigned_date,
        notes=assignment.notes,
    )
