"""
Configuration de la connexion à la base de données (SQLite ou MySQL).
Une session SQLAlchemy par requête, fermée après la réponse.
"""

import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker

from passport.config import settings

# SQLite refuse par défaut le partage de connexion entre threads (threadpool FastAPI)
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """
    SQLite n'applique les clés étrangères (ON DELETE CASCADE / SET NULL)
    que si chaque connexion l'active explicitement.
    """
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_db():
    """Dépendance FastAPI — fournit une session BDD et la ferme après usage."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Crée les tables manquantes (appelé au démarrage de l'API)."""
    import passport.models  # noqa: F401 — enregistre les modèles dans Base.metadata

    Base.metadata.create_all(bind=engine)
