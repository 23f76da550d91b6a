"""
Point d'entrée principal de l'API Practitioner Passport.
Démarrage : uvicorn passport.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from passport.config import settings
from passport.database import init_db
from passport.routers import (
    activities,
    auth,
    cvs,
    mentorship,
    messages,
    qualifications,
    sessions,
    users,
    verifications,
)

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie de l'application : niveau de log et création des tables manquantes."""
    logging.getLogger("passport").setLevel(settings.LOG_LEVEL.upper())
    init_db()
    logger.info("API démarrée (environnement %s)", settings.ENV)
    yield


app = FastAPI(
    title="Practitioner Passport API",
    description="Suivi des activités, qualifications et séances des étudiants, avec mentorat",
    version=API_VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# Le cookie authToken impose allow_credentials, donc une liste d'origines explicite (regex)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(mentorship.router)
app.include_router(activities.router)
app.include_router(qualifications.router)
app.include_router(sessions.router)
app.include_router(cvs.router)
app.include_router(verifications.router)
app.include_router(messages.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées pour garantir que la réponse 500
    passe bien par CORSMiddleware (qui injecte les headers CORS).
    """
    logger.error("Exception non gérée sur %s %s : %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Une erreur interne est survenue."},
    )


@app.get("/api/health", tags=["Santé"])
def health_check():
    """Vérifie que l'API est opérationnelle."""
    return {"status": "ok", "service": "Practitioner Passport API", "version": API_VERSION}
