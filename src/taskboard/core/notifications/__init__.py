"""Notification utilities - email."""

from src.taskboard.core.notifications.email import (
    send_email,
    send_status_update_email,
    send_task_assignment_email,
)

__all__ = [
    "send_email",
    "send_status_update_email",
    "send_task_assignment_email",
]
