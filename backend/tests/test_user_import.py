"""
Tests unitaires pour l'import en masse des utilisateurs.
"""

from unittest.mock import MagicMock

from passport.schemas.user import UserImportItem
from passport.security import verify_password
from passport.services.user_import import import_users

DEFAULT_PASSWORD = "changeme"


def make_db_mock(existing_emails=None):
    """Crée un mock de session SQLAlchemy sans BDD réelle."""
    db = MagicMock()
    db.execute.return_value.scalars.return_value.all.return_value = existing_emails or []
    return db


def items(*rows):
    return [UserImportItem(**row) for row in rows]


def inserted_rows(db):
    """Lignes passées à bulk_insert_mappings."""
    return db.bulk_insert_mappings.call_args[0][1]


# --- Cas nominaux ---

def test_import_basique():
    db = make_db_mock()

    report = import_users(db, items(
        {"name": "Jean", "email": "jean@test.be", "role": "student"},
        {"name": "Marie", "email": "marie@test.be", "role": "mentor", "status": "active"},
    ), DEFAULT_PASSWORD)

    assert report.total_rows == 2
    assert report.inserted == 2
    assert report.duplicates == 0
    assert report.errors == 0
    db.bulk_insert_mappings.assert_called_once()
    db.commit.assert_called_once()


def test_statut_par_defaut_pending():
    db = make_db_mock()
    import_users(db, items({"name": "Jean", "email": "jean@test.be", "role": "student"}), DEFAULT_PASSWORD)

    assert inserted_rows(db)[0]["status"] == "pending"


def test_mot_de_passe_par_defaut_hashe():
    db = make_db_mock()
    import_users(db, items({"name": "Jean", "email": "jean@test.be", "role": "student"}), DEFAULT_PASSWORD)

    row = inserted_rows(db)[0]
    assert row["password_hash"] != DEFAULT_PASSWORD
    assert verify_password(DEFAULT_PASSWORD, row["password_hash"])
    assert row["id"] is not None


def test_email_et_role_normalises():
    db = make_db_mock()
    import_users(db, items({"name": " Jean ", "email": " Jean@Test.BE ", "role": "Student"}), DEFAULT_PASSWORD)

    row = inserted_rows(db)[0]
    assert row["email"] == "jean@test.be"
    assert row["role"] == "student"
    assert row["name"] == "Jean"


# --- Erreurs de validation ---

def test_champs_requis_manquants():
    db = make_db_mock()
    report = import_users(db, items({"name": "Jean", "role": "student"}), DEFAULT_PASSWORD)

    assert report.errors == 1
    assert report.inserted == 0
    assert report.details[0].email == "inconnu"
    db.bulk_insert_mappings.assert_not_called()


def test_email_invalide():
    report = import_users(make_db_mock(), items(
        {"name": "Jean", "email": "pas-un-email", "role": "student"},
    ), DEFAULT_PASSWORD)

    assert report.errors == 1
    assert "email" in report.details[0].message.lower()


def test_role_invalide():
    report = import_users(make_db_mock(), items(
        {"name": "Jean", "email": "jean@test.be", "role": "superviseur"},
    ), DEFAULT_PASSWORD)

    assert report.errors == 1
    assert report.inserted == 0


def test_statut_invalide_refuse():
    """Un statut inconnu est une erreur de ligne, pas un pending silencieux."""
    db = make_db_mock()
    report = import_users(db, items(
        {"name": "Jean", "email": "jean@test.be", "role": "student", "status": "suspended"},
        {"name": "Marie", "email": "marie@test.be", "role": "mentor", "status": " Active "},
    ), DEFAULT_PASSWORD)

    assert report.errors == 1
    assert report.inserted == 1
    assert report.details[0].status == "error"
    assert "statut" in report.details[0].message.lower()
    assert [r["email"] for r in inserted_rows(db)] == ["marie@test.be"]
    assert inserted_rows(db)[0]["status"] == "active"


# --- Doublons ---

def test_doublon_intra_import_insensible_casse():
    db = make_db_mock()
    report = import_users(db, items(
        {"name": "Jean", "email": "jean@test.be", "role": "student"},
        {"name": "Jean bis", "email": "JEAN@test.be", "role": "student"},
    ), DEFAULT_PASSWORD)

    assert report.inserted == 1
    assert report.duplicates == 1
    assert [d.status for d in report.details] == ["success", "duplicate"]


def test_doublon_en_base():
    db = make_db_mock(existing_emails=["jean@test.be"])
    report = import_users(db, items(
        {"name": "Jean", "email": "jean@test.be", "role": "student"},
        {"name": "Marie", "email": "marie@test.be", "role": "mentor"},
    ), DEFAULT_PASSWORD)

    assert report.inserted == 1
    assert report.duplicates == 1
    assert [r["email"] for r in inserted_rows(db)] == ["marie@test.be"]


def test_details_tries_par_ligne():
    """Les erreurs de validation et les doublons BDD restent dans l'ordre du fichier."""
    db = make_db_mock(existing_emails=["a@test.be"])
    report = import_users(db, items(
        {"name": "A", "email": "a@test.be", "role": "student"},
        {"name": "B", "email": "b@test.be"},
        {"name": "C", "email": "c@test.be", "role": "student"},
    ), DEFAULT_PASSWORD)

    assert [d.row for d in report.details] == [1, 2, 3]
    assert [d.status for d in report.details] == ["duplicate", "error", "success"]
