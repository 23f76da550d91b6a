"""
Router de vérification des activités, qualifications et séances.
Réservé aux mentors (étudiants assignés uniquement) et aux admins.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from passport.database import get_db
from passport.models.user import User
from passport.schemas.verification import VerificationItem, VerificationUpdate
from passport.security import require_roles
from passport.services import verification_service

router = APIRouter(prefix="/api/verifications", tags=["Vérifications"])

verifier = require_roles("mentor", "admin")


@router.get("", response_model=List[VerificationItem], summary="Éléments à vérifier")
def list_items(
    status: Optional[str] = "pending",
    item_type: Optional[str] = Query(None, alias="type"),
    user: User = Depends(verifier),
    db: Session = Depends(get_db),
):
    """Par défaut, les éléments en attente, les plus anciens d'abord."""
    try:
        return verification_service.list_items(db, user, status=status, item_type=item_type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{item_type}/{item_id}", response_model=VerificationItem, summary="Détail d'un élément")
def get_item(
    item_type: str,
    item_id: uuid.UUID,
    user: User = Depends(verifier),
    db: Session = Depends(get_db),
):
    try:
        item = verification_service.get_item(db, user, item_type, item_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    if item is None:
        raise HTTPException(status_code=404, detail="Élément introuvable.")
    return item


@router.patch("/{item_type}/{item_id}", response_model=VerificationItem, summary="Vérifier ou rejeter un élément")
def update_item(
    item_type: str,
    item_id: uuid.UUID,
    data: VerificationUpdate,
    user: User = Depends(verifier),
    db: Session = Depends(get_db),
):
    """Un rejet exige un commentaire (422 sinon)."""
    try:
        item = verification_service.update_item(db, user, item_type, item_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    if item is None:
        raise HTTPException(status_code=404, detail="Élément introuvable.")
    return item
