from pydantic import BaseModel


class AnalyticsResponse(BaseModel):
    """Global counts for the admin dashboard."""

    total_users: int
    total_teams: int
    total_projects: int
    total_tasks: int
    tasks_by_status: dict[str, int]
    users_by_role: dict[str, int]


class MessageResponse(BaseModel):
    message: str
