"""
Router d'administration des comptes utilisateurs.
CRUD, import en masse et tableau de bord. Réservé aux admins.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from passport.config import settings
from passport.database import get_db
from passport.models.user import User
from passport.schemas.dashboard import DashboardStats
from passport.schemas.user import UserCreate, UserImportReport, UserImportRequest, UserResponse, UserUpdate
from passport.security import require_roles
from passport.services import dashboard_service, user_import, user_service

router = APIRouter(
    prefix="/api/admin",
    tags=["Administration"],
    dependencies=[Depends(require_roles("admin"))],
)


@router.get("/users", response_model=List[UserResponse], summary="Lister les utilisateurs")
def list_users(role: Optional[str] = None, db: Session = Depends(get_db)):
    """Retourne tous les comptes, du plus récent au plus ancien. Filtre optionnel par rôle."""
    return user_service.list_users(db, role)


@router.post("/users", response_model=UserResponse, status_code=201, summary="Créer un utilisateur")
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    try:
        return user_service.create_user(db, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/users/import", response_model=UserImportReport, summary="Importer des utilisateurs")
def import_users(data: UserImportRequest, db: Session = Depends(get_db)):
    """
    Import en masse depuis une liste JSON.

    - Champs requis : name, email, role
    - Statut absent → pending ; mot de passe absent → mot de passe par défaut
    - Les doublons (BDD ou intra-import) sont comptés et ignorés
    """
    return user_import.import_users(db, data.users, settings.DEFAULT_IMPORT_PASSWORD)


@router.get("/users/{user_id}", response_model=UserResponse, summary="Détail d'un utilisateur")
def get_user(user_id: uuid.UUID, db: Session = Depends(get_db)):
    user = user_service.get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="Utilisateur introuvable.")
    return user


@router.patch("/users/{user_id}", response_model=UserResponse, summary="Modifier un utilisateur")
def update_user(user_id: uuid.UUID, data: UserUpdate, db: Session = Depends(get_db)):
    """Seuls les champs fournis sont modifiés. Un nouveau mot de passe est re-hashé."""
    try:
        user = user_service.update_user(db, user_id, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if user is None:
        raise HTTPException(status_code=404, detail="Utilisateur introuvable.")
    return user


@router.delete("/users/{user_id}", status_code=204, summary="Supprimer un utilisateur")
def delete_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(require_roles("admin")),
):
    """Supprime le compte et ses données. Un admin ne peut pas supprimer son propre compte."""
    try:
        deleted = user_service.delete_user(db, user_id, admin.id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Utilisateur introuvable.")


@router.get("/dashboard", response_model=DashboardStats, summary="Tableau de bord")
def dashboard(db: Session = Depends(get_db)):
    return dashboard_service.get_stats(db)
