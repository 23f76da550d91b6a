"""
Tests unitaires pour le service CV : score ATS, rendu HTML, création et mise à jour.
"""

import uuid
from unittest.mock import MagicMock

from passport.models.cv import StudentCV
from passport.schemas.cv import CVContent, CVCreate, CVUpdate
from passport.services import cv_service

FULL_CONTENT = {
    "personal": {
        "name": "Jean Dupont",
        "email": "jean@test.be",
        "phone": "0470 00 00 00",
        "location": "Bruxelles",
        "summary": "Enseignant en formation",
    },
    "education": [{"degree": "Master", "institution": "ULB", "endDate": "2024"}],
    "experience": [{"title": "Stagiaire", "company": "Athénée", "endDate": "2023"}],
    "skills": ["Pédagogie", "Gestion de classe", "Numérique", "Évaluation", "Communication"],
}


# --- Score ATS ---

def test_score_contenu_vide():
    assert cv_service.compute_ats_score({}) == 0


def test_score_contenu_complet():
    """Tous les champs remplis et 5 compétences → 90."""
    assert cv_service.compute_ats_score(FULL_CONTENT) == 90


def test_score_deterministe():
    assert cv_service.compute_ats_score(FULL_CONTENT) == cv_service.compute_ats_score(FULL_CONTENT)


def test_score_plafonne_a_100():
    content = {"skills": [f"skill-{i}" for i in range(20)]}
    assert cv_service.compute_ats_score(content) == 100


def test_score_minimum_si_essentiels_presents():
    """Essentiels présents mais beaucoup de champs vides → au moins 75."""
    content = {
        "personal": {"name": "Jean", "email": "jean@test.be", "summary": "Résumé",
                     "phone": "", "location": "", "title": "", "website": "", "linkedin": ""},
        "education": [{"degree": "Master", "institution": "", "startDate": "", "endDate": "", "description": ""}],
        "experience": [{"title": "Stage", "company": "", "startDate": "", "endDate": "", "description": ""}],
        "skills": [],
    }
    assert cv_service.compute_ats_score(content) == 75


def test_score_sans_essentiels():
    content = {"personal": {"name": "Jean", "email": ""}, "skills": []}
    # 1 champ rempli sur 2 + 5 compétences attendues → 1 × 90 // 7
    assert cv_service.compute_ats_score(content) == 12


# --- Rendu HTML ---

def test_render_html_echappe_le_contenu():
    html = cv_service.render_html({"personal": {"name": "<script>alert(1)</script>"}})
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_render_html_sections():
    html = cv_service.render_html(FULL_CONTENT)
    assert "Jean Dupont" in html
    assert "Education" in html
    assert "Experience" in html
    assert "Gestion de classe" in html


# --- Création / mise à jour ---

def test_create_cv_brouillon_avec_score():
    db = MagicMock()
    student_id = uuid.uuid4()

    cv = cv_service.create_cv(db, student_id, CVCreate(name="CV 2024", content=CVContent(**FULL_CONTENT)))

    db.add.assert_called_once_with(cv)
    assert cv.is_draft is True
    assert cv.ats_score == 90
    assert "Jean Dupont" in cv.html_content
    assert cv.last_generated_at is not None


def test_create_cv_ignore_le_html_fourni():
    """Le HTML envoyé par le client est ignoré : seul le rendu échappé est stocké."""
    data = CVCreate(
        name="CV", content=CVContent(personal={"name": "<b>Jean</b>"}), html_content="<script>alert(1)</script>",
    )
    cv = cv_service.create_cv(MagicMock(), uuid.uuid4(), data)

    assert "<script>" not in cv.html_content
    assert "&lt;b&gt;Jean&lt;/b&gt;" in cv.html_content


def test_create_cv_sans_contenu():
    cv = cv_service.create_cv(MagicMock(), uuid.uuid4(), CVCreate(name="Vide"))
    assert cv.content["skills"] == []
    assert cv.ats_score == 0


def test_update_cv_recalcule_le_score():
    student_id = uuid.uuid4()
    existing = StudentCV(id=uuid.uuid4(), student_id=student_id, name="CV", content={}, ats_score=0)
    db = MagicMock()
    db.get.return_value = existing

    cv = cv_service.update_cv(db, student_id, existing.id, CVUpdate(content=CVContent(**FULL_CONTENT)))

    assert cv.ats_score == 90
    assert "Jean Dupont" in cv.html_content


def test_update_cv_autre_etudiant():
    existing = StudentCV(id=uuid.uuid4(), student_id=uuid.uuid4(), name="CV", content={})
    db = MagicMock()
    db.get.return_value = existing

    assert cv_service.update_cv(db, uuid.uuid4(), existing.id, CVUpdate(name="Piraté")) is None
    assert existing.name == "CV"
    db.commit.assert_not_called()


def test_finalize_cv():
    student_id = uuid.uuid4()
    existing = StudentCV(id=uuid.uuid4(), student_id=student_id, name="CV", content={}, is_draft=True)
    db = MagicMock()
    db.get.return_value = existing

    cv = cv_service.finalize_cv(db, student_id, existing.id)
    assert cv.is_draft is False


def test_get_cv_html_document_complet():
    """Le document est régénéré depuis le contenu : un HTML stocké n'est jamais servi."""
    cv = StudentCV(
        id=uuid.uuid4(), student_id=uuid.uuid4(), name="CV <2024>",
        content={"personal": {"name": "Jean"}}, html_content="<script>alert(1)</script>",
    )
    document = cv_service.get_cv_html(cv)
    assert document.startswith("<!DOCTYPE html>")
    assert ">Jean</h1>" in document
    assert "<script>" not in document
    assert "CV &lt;2024&gt;" in document
