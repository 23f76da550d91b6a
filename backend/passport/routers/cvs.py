"""
Router des CV d'un étudiant : brouillons, finalisation, téléchargement HTML.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from passport.database import get_db
from passport.models.user import User
from passport.schemas.cv import CVCreate, CVFinalizeResponse, CVResponse, CVSummary, CVUpdate
from passport.security import student_reader, student_writer
from passport.services import cv_service

router = APIRouter(prefix="/api/students/{student_id}/cvs", tags=["CV"])


def _get_or_404(db: Session, student_id: uuid.UUID, cv_id: uuid.UUID):
    cv = cv_service.get_cv(db, student_id, cv_id)
    if cv is None:
        raise HTTPException(status_code=404, detail="CV introuvable.")
    return cv


@router.get("", response_model=List[CVSummary], summary="Lister les CV")
def list_cvs(student_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(student_reader)):
    return cv_service.list_cvs(db, student_id)


@router.post("", response_model=CVResponse, status_code=201, summary="Créer un CV")
def create_cv(
    student_id: uuid.UUID,
    data: CVCreate,
    db: Session = Depends(get_db),
    _: User = Depends(student_writer),
):
    """Crée un brouillon ; le score ATS et le rendu HTML sont calculés à partir du contenu."""
    return cv_service.create_cv(db, student_id, data)


@router.get("/{cv_id}", response_model=CVResponse, summary="Détail d'un CV")
def get_cv(
    student_id: uuid.UUID,
    cv_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(student_reader),
):
    return _get_or_404(db, student_id, cv_id)


@router.patch("/{cv_id}", response_model=CVResponse, summary="Modifier un CV")
def update_cv(
    student_id: uuid.UUID,
    cv_id: uuid.UUID,
    data: CVUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(student_writer),
):
    cv = cv_service.update_cv(db, student_id, cv_id, data)
    if cv is None:
        raise HTTPException(status_code=404, detail="CV introuvable.")
    return cv


@router.post("/{cv_id}/finalize", response_model=CVFinalizeResponse, summary="Finaliser un CV")
def finalize_cv(
    student_id: uuid.UUID,
    cv_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(student_writer),
):
    cv = cv_service.finalize_cv(db, student_id, cv_id)
    if cv is None:
        raise HTTPException(status_code=404, detail="CV introuvable.")
    return CVFinalizeResponse(id=cv.id, is_draft=cv.is_draft, ats_score=cv.ats_score)


@router.get("/{cv_id}/download", response_class=HTMLResponse, summary="Télécharger un CV")
def download_cv(
    student_id: uuid.UUID,
    cv_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(student_reader),
):
    """Retourne le CV en pièce jointe HTML."""
    cv = _get_or_404(db, student_id, cv_id)
    filename = f"cv-{cv.id}.html"
    return HTMLResponse(
        content=cv_service.get_cv_html(cv),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.delete("/{cv_id}", status_code=204, summary="Supprimer un CV")
def delete_cv(
    student_id: uuid.UUID,
    cv_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(student_writer),
):
    if not cv_service.delete_cv(db, student_id, cv_id):
        raise HTTPException(status_code=404, detail="CV introuvable.")
