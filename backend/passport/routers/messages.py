"""
Router de la messagerie entre admins, mentors et étudiants.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from passport.database import get_db
from passport.models.user import User
from passport.schemas.message import ConversationSummary, MessageCreate, MessageResponse, UnreadSummary
from passport.security import get_current_user
from passport.services import message_service

router = APIRouter(prefix="/api/messages", tags=["Messagerie"])


@router.get("/conversations", response_model=List[ConversationSummary], summary="Mes conversations")
def list_conversations(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Dernier message échangé avec chaque interlocuteur et nombre de non-lus."""
    return message_service.list_conversations(db, user.id)


@router.get("/unread", response_model=UnreadSummary, summary="Messages non lus")
def unread(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return message_service.unread_summary(db, user.id)


@router.get("/{other_user_id}", response_model=List[MessageResponse], summary="Fil de discussion")
def get_thread(
    other_user_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Messages échangés avec un utilisateur, dans l'ordre chronologique. Marque les reçus comme lus."""
    return message_service.get_thread(db, user.id, other_user_id)


@router.post("", response_model=MessageResponse, status_code=201, summary="Envoyer un message")
def send_message(
    data: MessageCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Règles :
    - admin → tout utilisateur
    - mentor → admins et étudiants assignés
    - étudiant → son mentor assigné uniquement
    Sans assignation, l'envoi est refusé (403) et rien n'est enregistré.
    """
    try:
        return message_service.send_message(db, user, data)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
