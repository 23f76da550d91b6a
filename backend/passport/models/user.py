"""
Modèle SQLAlchemy pour les utilisateurs (admin, mentor, étudiant).
Le mot de passe n'est jamais stocké en clair : seul le hash PBKDF2 (passlib) est conservé.
"""

import uuid
from sqlalchemy import Column, DateTime, String, Uuid, func

from passport.database import Base

ROLES = ("admin", "mentor", "student")
USER_STATUSES = ("active", "inactive", "pending", "suspended")


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False)  # Toujours en minuscules
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)                 # admin, mentor, student
    status = Column(String(20), nullable=False, default="active")
    profile_image = Column(String(500), nullable=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
