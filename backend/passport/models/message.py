"""
Modèle SQLAlchemy pour la messagerie mentor ↔ étudiant ↔ admin.

Pas d'entité « conversation » : les conversations sont reconstruites
à la lecture en regroupant sur l'interlocuteur (cf. message_service).
"""

import uuid
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Text, Uuid, func

from passport.database import Base


class Message(Base):
    __tablename__ = "messages"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    sender_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    receiver_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False)
    sent_at = Column(DateTime, nullable=False)  # Renseigné par le service (précision < 1 s)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
