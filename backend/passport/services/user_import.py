"""
Service d'import en masse des utilisateurs (admin).
Gère la validation ligne par ligne, la détection de doublons et l'insertion bulk.
"""

import re
import uuid
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from passport.models.user import User
from passport.schemas.user import (
    VALID_ROLES,
    UserImportDetail,
    UserImportItem,
    UserImportReport,
)
from passport.security import hash_password

logger = logging.getLogger(__name__)

EMAIL_REGEX = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")
IMPORT_STATUSES = {"active", "pending", "inactive"}
DEFAULT_IMPORT_STATUS = "pending"


def import_users(
    db: Session, items: list[UserImportItem], default_password: str
) -> UserImportReport:
    """
    Valide chaque ligne puis insère en bulk les comptes valides.

    Règles :
    - Champs requis : name, email, role (admin, mentor, student)
    - Statut : active, pending ou inactive ; pending si absent, erreur si inconnu
    - Mot de passe absent → `default_password`
    - Doublon intra-import : même email (insensible à la casse) → seule la 1re ligne est gardée
    - Doublon BDD : email déjà présent → ligne ignorée
    """
    details: list[UserImportDetail] = []
    valid: list[tuple[int, UserImportItem]] = []
    seen_in_batch: set[str] = set()
    duplicates = 0

    for row_num, item in enumerate(items, start=1):
        name = (item.name or "").strip()
        email = (item.email or "").strip().lower()
        role = (item.role or "").strip().lower()
        status = (item.status or "").strip().lower() or DEFAULT_IMPORT_STATUS

        if not name or not email or not role:
            details.append(UserImportDetail(
                row=row_num, email=email or "inconnu", status="error",
                message="Champs requis manquants (name, email, role)",
            ))
            continue

        if not EMAIL_REGEX.match(email):
            details.append(UserImportDetail(
                row=row_num, email=email, status="error",
                message=f"Format email invalide : {email}",
            ))
            continue

        if role not in VALID_ROLES:
            details.append(UserImportDetail(
                row=row_num, email=email, status="error",
                message="Rôle invalide : admin, mentor ou student attendu",
            ))
            continue

        if status not in IMPORT_STATUSES:
            details.append(UserImportDetail(
                row=row_num, email=email, status="error",
                message="Statut invalide : active, pending ou inactive attendu",
            ))
            continue

        if email in seen_in_batch:
            duplicates += 1
            details.append(UserImportDetail(
                row=row_num, email=email, status="duplicate",
                message="Email en double dans l'import",
            ))
            continue
        seen_in_batch.add(email)

        valid.append((row_num, item.model_copy(
            update={"name": name, "email": email, "role": role, "status": status}
        )))

    # Détection doublons contre la BDD (batch query)
    existing_emails: set[str] = set()
    if valid:
        existing_emails = set(db.execute(
            select(func.lower(User.email))
            .where(func.lower(User.email).in_([i.email for _, i in valid]))
        ).scalars().all())

    to_insert = []
    for row_num, item in valid:
        if item.email in existing_emails:
            duplicates += 1
            details.append(UserImportDetail(
                row=row_num, email=item.email, status="duplicate",
                message="Un compte existe déjà avec cet email",
            ))
            continue

        to_insert.append({
            "id": uuid.uuid4(),
            "name": item.name,
            "email": item.email,
            "role": item.role,
            "status": item.status,
            "password_hash": hash_password(item.password or default_password),
        })
        details.append(UserImportDetail(row=row_num, email=item.email, status="success"))

    if to_insert:
        db.bulk_insert_mappings(User, to_insert)
        db.commit()

    details.sort(key=lambda d: d.row)
    errors = sum(1 for d in details if d.status == "error")

    logger.info(
        "Import utilisateurs : %d lignes, %d insérés, %d doublons, %d erreurs",
        len(items), len(to_insert), duplicates, errors,
    )
    return UserImportReport(
        total_rows=len(items),
        inserted=len(to_insert),
        duplicates=duplicates,
        errors=errors,
        details=details,
    )
