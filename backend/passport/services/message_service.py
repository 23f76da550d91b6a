"""
Service métier pour la messagerie.

Règles d'envoi :
- admin → n'importe quel utilisateur
- mentor → les admins et ses étudiants assignés (pas les autres mentors)
- étudiant → uniquement son mentor assigné
Toute vérification échouée intervient avant l'écriture : aucune ligne n'est créée.
"""

import uuid
import logging
from datetime import datetime

from sqlalchemy import case, func, select, update
from sqlalchemy.orm import Session, aliased

from passport.models.message import Message
from passport.models.user import User
from passport.schemas.message import (
    ConversationSummary,
    MessageCreate,
    MessageResponse,
    SenderUnread,
    UnreadSummary,
)
from passport.services import mentorship_service

logger = logging.getLogger(__name__)


def _check_can_message(db: Session, sender: User, receiver: User) -> None:
    """Lève une PermissionError si l'expéditeur n'est pas autorisé à écrire au destinataire."""
    if sender.role == "admin":
        return

    if sender.role == "mentor":
        if receiver.role == "admin":
            return
        if receiver.role == "student" and mentorship_service.is_assigned(db, sender.id, receiver.id):
            return
        raise PermissionError("Vous ne pouvez écrire qu'aux administrateurs et à vos étudiants assignés.")

    if sender.role == "student":
        if receiver.role == "mentor" and mentorship_service.is_assigned(db, receiver.id, sender.id):
            return
        raise PermissionError("Vous ne pouvez écrire qu'à votre mentor assigné.")

    raise PermissionError("Rôle non autorisé à envoyer des messages.")


def send_message(db: Session, sender: User, data: MessageCreate) -> Message:
    """
    Envoie un message.
    Lève LookupError (destinataire inconnu), ValueError (message à soi-même)
    ou PermissionError (relation non autorisée).
    """
    if data.receiver_id == sender.id:
        raise ValueError("Impossible de vous envoyer un message à vous-même.")

    receiver = db.get(User, data.receiver_id)
    if receiver is None:
        raise LookupError("Destinataire introuvable.")

    try:
        _check_can_message(db, sender, receiver)
    except PermissionError:
        logger.warning("Message refusé : %s (%s) → %s (%s)", sender.id, sender.role, receiver.id, receiver.role)
        raise

    message = Message(
        sender_id=sender.id,
        receiver_id=receiver.id,
        content=data.content,
        is_read=False,
        sent_at=datetime.now(),
    )
    db.add(message)
    db.commit()
    db.refresh(message)

    logger.info("Message %s envoyé : %s → %s", message.id, sender.id, receiver.id)
    return message


def list_conversations(db: Session, user_id: uuid.UUID) -> list[ConversationSummary]:
    """
    Dernier message par interlocuteur, du plus récent au plus ancien.
    ROW_NUMBER() partitionné sur l'autre participant, trié par sent_at décroissant.
    """
    other_user_id = case(
        (Message.sender_id == user_id, Message.receiver_id),
        else_=Message.sender_id,
    )
    ranked = (
        select(
            Message.id.label("message_id"),
            other_user_id.label("other_user_id"),
            func.row_number().over(
                partition_by=other_user_id,
                order_by=Message.sent_at.desc(),
            ).label("rn"),
        )
        .where((Message.sender_id == user_id) | (Message.receiver_id == user_id))
        .subquery()
    )

    unread = aliased(Message)
    unread_count = (
        select(func.count(unread.id))
        .where(
            unread.sender_id == ranked.c.other_user_id,
            unread.receiver_id == user_id,
            unread.is_read.is_(False),
        )
        .correlate(ranked)
        .scalar_subquery()
    )

    rows = db.execute(
        select(Message, User, unread_count.label("unread_count"))
        .join(ranked, ranked.c.message_id == Message.id)
        .join(User, User.id == ranked.c.other_user_id)
        .where(ranked.c.rn == 1)
        .order_by(Message.sent_at.desc())
    ).all()

    return [
        ConversationSummary(
            other_user_id=other.id,
            other_user_name=other.name,
            other_user_email=other.email,
            other_user_role=other.role,
            last_message=MessageResponse.model_validate(message),
            unread_count=count or 0,
        )
        for message, other, count in rows
    ]


def get_thread(db: Session, user_id: uuid.UUID, other_user_id: uuid.UUID) -> list[Message]:
    """
    Fil complet avec un interlocuteur, dans l'ordre chronologique.
    Les messages reçus de cet interlocuteur sont d'abord marqués comme lus.
    """
    result = db.execute(
        update(Message)
        .where(
            Message.sender_id == other_user_id,
            Message.receiver_id == user_id,
            Message.is_read.is_(False),
        )
        .values(is_read=True)
    )
    db.commit()
    if result.rowcount:
        logger.info("%d message(s) de %s marqué(s) comme lu(s) par %s", result.rowcount, other_user_id, user_id)

    return list(db.execute(
        select(Message)
        .where(
            ((Message.sender_id == user_id) & (Message.receiver_id == other_user_id))
            | ((Message.sender_id == other_user_id) & (Message.receiver_id == user_id))
        )
        .order_by(Message.sent_at.asc())
    ).scalars().all())


def unread_summary(db: Session, user_id: uuid.UUID) -> UnreadSummary:
    """Messages non lus reçus, regroupés par expéditeur (le plus récent d'abord)."""
    rows = db.execute(
        select(
            User.id,
            User.name,
            User.email,
            User.role,
            func.count(Message.id),
            func.max(Message.sent_at),
        )
        .join(User, User.id == Message.sender_id)
        .where(Message.receiver_id == user_id, Message.is_read.is_(False))
        .group_by(User.id, User.name, User.email, User.role)
        .order_by(func.max(Message.sent_at).desc())
    ).all()

    senders = [
        SenderUnread(
            sender_id=sender_id,
            sender_name=name,
            sender_email=email,
            sender_role=role,
            unread_count=count,
            latest_message_at=latest,
        )
        for sender_id, name, email, role, count, latest in rows
    ]
    return UnreadSummary(total_unread=sum(s.unread_count for s in senders), senders=senders)
