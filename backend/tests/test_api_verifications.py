"""
Tests d'intégration API pour la vérification des éléments soumis.
"""

import uuid
from datetime import datetime
from unittest.mock import patch

from passport.schemas.verification import VerificationItem


def make_item(**kwargs) -> VerificationItem:
    return VerificationItem(
        id=kwargs.get("id", uuid.uuid4()),
        item_type=kwargs.get("item_type", "activities"),
        title="Atelier",
        student_id=kwargs.get("student_id", uuid.uuid4()),
        student_name="Jean",
        student_email="jean@test.be",
        status=kwargs.get("status", "pending"),
        feedback=kwargs.get("feedback"),
        submitted_at=datetime.now(),
    )


def test_verifications_etudiant_refuse(client, login_as, make_user):
    login_as(make_user("student"))
    assert client.get("/api/verifications").status_code == 403


def test_list_verifications_mentor(client, login_as, make_user):
    mentor = login_as(make_user("mentor"))
    with patch("passport.routers.verifications.verification_service.list_items") as mock:
        mock.return_value = [make_item(), make_item(item_type="sessions")]
        response = client.get("/api/verifications")

    assert response.status_code == 200
    assert len(response.json()) == 2
    assert mock.call_args[0][1] is mentor
    assert mock.call_args.kwargs["status"] == "pending"


def test_list_verifications_type_invalide(client, login_as, make_user):
    login_as(make_user("admin"))
    with patch("passport.routers.verifications.verification_service.list_items") as mock:
        mock.side_effect = ValueError("Type invalide.")
        response = client.get("/api/verifications?type=cvs")
    assert response.status_code == 400


def test_get_item_mentor_non_assigne(client, login_as, make_user):
    login_as(make_user("mentor"))
    with patch("passport.routers.verifications.verification_service.get_item") as mock:
        mock.side_effect = PermissionError("Cet étudiant ne vous est pas assigné.")
        response = client.get(f"/api/verifications/activities/{uuid.uuid4()}")
    assert response.status_code == 403


def test_get_item_introuvable(client, login_as, make_user):
    login_as(make_user("admin"))
    with patch("passport.routers.verifications.verification_service.get_item", return_value=None):
        response = client.get(f"/api/verifications/qualifications/{uuid.uuid4()}")
    assert response.status_code == 404


def test_verifier_un_element(client, login_as, make_user):
    login_as(make_user("mentor"))
    item = make_item(status="verified")
    with patch("passport.routers.verifications.verification_service.update_item", return_value=item):
        response = client.patch(f"/api/verifications/activities/{item.id}", json={"status": "verified"})

    assert response.status_code == 200
    assert response.json()["status"] == "verified"


def test_rejet_sans_commentaire(client, login_as, make_user):
    """Un rejet sans commentaire est refusé avant d'atteindre le service."""
    login_as(make_user("mentor"))
    with patch("passport.routers.verifications.verification_service.update_item") as mock:
        response = client.patch(f"/api/verifications/sessions/{uuid.uuid4()}", json={"status": "rejected"})

    assert response.status_code == 422
    mock.assert_not_called()


def test_statut_invalide(client, login_as, make_user):
    login_as(make_user("admin"))
    response = client.patch(f"/api/verifications/activities/{uuid.uuid4()}", json={"status": "approved"})
    assert response.status_code == 422
