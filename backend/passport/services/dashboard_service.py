"""
Statistiques du tableau de bord administrateur.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from passport.models.activity import Activity
from passport.models.message import Message
from passport.models.mentorship import MentorStudentAssignment
from passport.models.qualification import Qualification
from passport.models.teaching_session import TeachingSession
from passport.models.user import ROLES, User
from passport.schemas.dashboard import DashboardStats


def _count(db: Session, query) -> int:
    return db.execute(query).scalar() or 0


def get_stats(db: Session) -> DashboardStats:
    by_role = dict(db.execute(
        select(User.role, func.count(User.id)).group_by(User.role)
    ).all())
    users_by_role = {role: by_role.get(role, 0) for role in ROLES}

    assignments = _count(db, select(func.count(MentorStudentAssignment.id)))

    return DashboardStats(
        users_total=sum(by_role.values()),
        users_by_role=users_by_role,
        assignments=assignments,
        unassigned_students=max(users_by_role["student"] - assignments, 0),
        pending_activities=_count(
            db, select(func.count(Activity.id)).where(Activity.status == "pending")
        ),
        pending_qualifications=_count(
            db, select(func.count(Qualification.id)).where(Qualification.verification_status == "pending")
        ),
        pending_sessions=_count(
            db, select(func.count(TeachingSession.id)).where(TeachingSession.verification_status == "pending")
        ),
        unread_messages=_count(
            db, select(func.count(Message.id)).where(Message.is_read.is_(False))
        ),
    )
