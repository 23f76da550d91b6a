"""
Modèle SQLAlchemy pour l'assignation mentor ↔ étudiant.
Un étudiant a au plus un mentor : une nouvelle assignation remplace l'ancienne.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, Uuid, func

from passport.database import Base


class MentorStudentAssignment(Base):
    """Liaison mentor ↔ étudiant, autorise le mentor à consulter et vérifier les données."""
    __tablename__ = "mentor_student_assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    mentor_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    assigned_date = Column(DateTime, server_default=func.now())
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
