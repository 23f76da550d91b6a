"""
Schéma Pydantic du tableau de bord administrateur.
"""

from typing import Dict

from pydantic import BaseModel


class DashboardStats(BaseModel):
    users_total: int
    users_by_role: Dict[str, int]
    assignments: int
    unassigned_students: int
    pending_activities: int
    pending_qualifications: int
    pending_sessions: int
    unread_messages: int
