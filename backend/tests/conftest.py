"""
Configuration partagée pour tous les tests.
Override la dépendance get_db pour éviter toute connexion réelle à la BDD,
et permet de simuler l'utilisateur connecté sans passer par un JWT.
"""

import uuid
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from passport.database import get_db
from passport.main import app
from passport.models.user import User
from passport.security import get_current_user


def build_user(role: str = "student", **kwargs) -> User:
    """Utilisateur non persisté, utilisable comme retour de service ou utilisateur connecté."""
    user_id = kwargs.get("id", uuid.uuid4())
    return User(
        id=user_id,
        email=kwargs.get("email", f"{role}-{user_id.hex[:6]}@test.be"),
        name=kwargs.get("name", f"Test {role.capitalize()}"),
        role=role,
        status=kwargs.get("status", "active"),
        password_hash=kwargs.get("password_hash", "hash"),
        created_at=kwargs.get("created_at", datetime.now()),
    )


@pytest.fixture
def make_user():
    return build_user


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def client(mock_db):
    """Client HTTP de test avec la BDD mockée (pas de create_all au démarrage)."""
    app.dependency_overrides[get_db] = lambda: mock_db
    with patch("passport.main.init_db"):
        with TestClient(app) as c:
            yield c
    app.dependency_overrides.clear()


@pytest.fixture
def login_as():
    """Remplace l'utilisateur connecté : login_as(user) → toutes les routes le voient."""
    def _login(user: User) -> User:
        app.dependency_overrides[get_current_user] = lambda: user
        return user
    return _login
