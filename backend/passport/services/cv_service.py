"""
Service métier pour les CV des étudiants : brouillons, score ATS, rendu HTML.

Score ATS (déterministe) :
  - couverture = champs renseignés / champs attendus (personal, education,
    experience) ; les compétences comptent pour len(skills) sur 5 attendues
  - score = floor(couverture × 90), plafonné à 100 ; 70 si aucun champ attendu
  - minimum 75 si l'essentiel est présent (nom, email, résumé,
    au moins une formation et une expérience)
"""

import html
import uuid
import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from passport.models.cv import StudentCV
from passport.schemas.cv import CVContent, CVCreate, CVUpdate

logger = logging.getLogger(__name__)

EXPECTED_SKILLS = 5
ESSENTIALS_MIN_SCORE = 75
EMPTY_CONTENT_SCORE = 70


def _count_fields(entry: dict) -> tuple[int, int]:
    return sum(1 for v in entry.values() if v), len(entry)


def compute_ats_score(content: dict[str, Any]) -> int:
    filled = 0
    total = 0

    personal = content.get("personal") or {}
    f, t = _count_fields(personal)
    filled, total = filled + f, total + t

    for section in ("education", "experience"):
        for entry in content.get(section) or []:
            if isinstance(entry, dict):
                f, t = _count_fields(entry)
                filled, total = filled + f, total + t

    filled += len(content.get("skills") or [])
    total += EXPECTED_SKILLS

    score = min(filled * 90 // total, 100) if total > 0 else EMPTY_CONTENT_SCORE

    if (
        personal.get("name")
        and personal.get("email")
        and personal.get("summary")
        and content.get("education")
        and content.get("experience")
    ):
        score = max(score, ESSENTIALS_MIN_SCORE)
    return score


def render_html(content: dict[str, Any]) -> str:
    """Génère un CV HTML autonome à partir du contenu structuré (valeurs échappées)."""
    def esc(value: Any, default: str = "") -> str:
        return html.escape(str(value)) if value else default

    personal = content.get("personal") or {}
    contact = " | ".join(
        esc(personal.get(k)) for k in ("email", "phone", "location") if personal.get(k)
    )

    parts = [
        '<div style="font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px;">',
        '  <header style="text-align: center; margin-bottom: 20px;">',
        f'    <h1 style="margin-bottom: 5px;">{esc(personal.get("name"), "Nom")}</h1>',
        f'    <p style="margin: 0; color: #666;">{esc(personal.get("title"))}</p>',
        f'    <p style="margin: 5px 0; color: #666;">{contact}</p>',
        "  </header>",
    ]

    if personal.get("summary"):
        parts += [
            '  <section style="margin-bottom: 20px;">',
            "    <h2>Summary</h2>",
            f"    <p>{esc(personal.get('summary'))}</p>",
            "  </section>",
        ]

    education = [e for e in content.get("education") or [] if isinstance(e, dict)]
    if education:
        parts += ['  <section style="margin-bottom: 20px;">', "    <h2>Education</h2>"]
        for edu in education:
            parts.append(
                f"    <div><strong>{esc(edu.get('degree'))}</strong> "
                f"{esc(edu.get('institution'))} "
                f"<span style=\"color: #666;\">{esc(edu.get('startDate'))} {esc(edu.get('endDate'))}</span>"
                f"<p>{esc(edu.get('description'))}</p></div>"
            )
        parts.append("  </section>")

    experience = [e for e in content.get("experience") or [] if isinstance(e, dict)]
    if experience:
        parts += ['  <section style="margin-bottom: 20px;">', "    <h2>Experience</h2>"]
        for exp in experience:
            parts.append(
                f"    <div><strong>{esc(exp.get('title'))}</strong> "
                f"{esc(exp.get('company'))} "
                f"<span style=\"color: #666;\">{esc(exp.get('startDate'))} {esc(exp.get('endDate'))}</span>"
                f"<p>{esc(exp.get('description'))}</p></div>"
            )
        parts.append("  </section>")

    skills = content.get("skills") or []
    if skills:
        parts += ['  <section style="margin-bottom: 20px;">', "    <h2>Skills</h2>", "    <div>"]
        for skill in skills:
            parts.append(
                '      <span style="background-color: #f0f0f0; padding: 5px 10px; '
                f'border-radius: 15px;">{esc(skill)}</span>'
            )
        parts += ["    </div>", "  </section>"]

    parts.append("</div>")
    return "\n".join(parts)


def list_cvs(db: Session, student_id: uuid.UUID) -> list[StudentCV]:
    return list(db.execute(
        select(StudentCV)
        .where(StudentCV.student_id == student_id)
        .order_by(StudentCV.updated_at.desc())
    ).scalars().all())


def get_cv(db: Session, student_id: uuid.UUID, cv_id: uuid.UUID) -> Optional[StudentCV]:
    cv = db.get(StudentCV, cv_id)
    if cv is None or cv.student_id != student_id:
        return None
    return cv


def create_cv(db: Session, student_id: uuid.UUID, data: CVCreate) -> StudentCV:
    """
    Crée un brouillon de CV.
    Sans contenu fourni, un contenu vide est utilisé. Le HTML est toujours
    généré côté serveur depuis le contenu, avec échappement.
    """
    content = (data.content or CVContent()).model_dump()
    cv = StudentCV(
        student_id=student_id,
        name=data.name,
        content=content,
        html_content=render_html(content),
        ats_score=compute_ats_score(content),
        is_draft=True,
        last_generated_at=datetime.now(),
    )
    db.add(cv)
    db.commit()
    db.refresh(cv)

    logger.info("CV créé : %s (étudiant %s, score ATS %d)", cv.id, student_id, cv.ats_score)
    return cv


def update_cv(db: Session, student_id: uuid.UUID, cv_id: uuid.UUID, data: CVUpdate) -> Optional[StudentCV]:
    """Un nouveau contenu recalcule le score ATS et régénère le rendu HTML."""
    cv = get_cv(db, student_id, cv_id)
    if cv is None:
        return None

    if data.name is not None:
        cv.name = data.name

    if data.content is not None:
        content = data.content.model_dump()
        cv.content = content
        cv.ats_score = compute_ats_score(content)
        cv.html_content = render_html(content)
        cv.last_generated_at = datetime.now()

    db.commit()
    db.refresh(cv)
    return cv


def finalize_cv(db: Session, student_id: uuid.UUID, cv_id: uuid.UUID) -> Optional[StudentCV]:
    cv = get_cv(db, student_id, cv_id)
    if cv is None:
        return None
    cv.is_draft = False
    db.commit()
    db.refresh(cv)
    logger.info("CV finalisé : %s (étudiant %s)", cv_id, student_id)
    return cv


def get_cv_html(cv: StudentCV) -> str:
    """HTML téléchargeable, toujours régénéré depuis le contenu structuré."""
    body = render_html(cv.content or {})
    return (
        "<!DOCTYPE html>\n<html><head><meta charset=\"utf-8\">"
        f"<title>{html.escape(cv.name)}</title></head><body>\n{body}\n</body></html>"
    )


def delete_cv(db: Session, student_id: uuid.UUID, cv_id: uuid.UUID) -> bool:
    cv = get_cv(db, student_id, cv_id)
    if cv is None:
        return False
    db.delete(cv)
    db.commit()
    logger.info("CV supprimé : %s (étudiant %s)", cv_id, student_id)
    return True
