"""
Schémas Pydantic pour les CV des étudiants.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class CVContent(BaseModel):
    """Contenu structuré d'un CV. Les clés inconnues sont conservées."""
    personal: Dict[str, Any] = Field(default_factory=dict)
    education: List[Dict[str, Any]] = Field(default_factory=list)
    experience: List[Dict[str, Any]] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)

    model_config = {"extra": "allow"}


class CVCreate(BaseModel):
    name: str
    content: Optional[CVContent] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom du CV est obligatoire.")
        return v.strip()


class CVUpdate(BaseModel):
    name: Optional[str] = None
    content: Optional[CVContent] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le nom du CV est obligatoire.")
        return v.strip() if v else v


class CVSummary(BaseModel):
    """Entrée de liste : sans le contenu complet."""
    id: uuid.UUID
    name: str
    ats_score: int
    is_draft: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CVResponse(CVSummary):
    student_id: uuid.UUID
    content: Dict[str, Any]
    html_content: Optional[str] = None
    last_generated_at: Optional[datetime] = None


class CVFinalizeResponse(BaseModel):
    id: uuid.UUID
    is_draft: bool
    ats_score: int
