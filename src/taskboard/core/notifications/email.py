"""Email client using Resend API."""

import html
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError

import resend

from src.taskboard.core.config import get_settings
from src.taskboard.core.logging import get_logger

logger = get_logger(__name__)

# Thread pool for email sending with timeout support
_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="email_sender")

_BODY_STYLE = (
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
    "line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_BUTTON_STYLE = (
    "background-color: #2563eb; color: white; padding: 12px 24px; "
    "text-decoration: none; border-radius: 6px; display: inline-block; font-weight: 500;"
)

STATUS_LABELS = {
    "todo": "To Do",
    "in_progress": "In Progress",
    "completed": "Completed",
}


def send_email(to: str, subject: str, html_body: str) -> bool:
    """Send a single email.

    Args:
        to: Recipient email address
        subject: Subject line
        html_body: Rendered HTML content

    Returns:
        True if the email was sent (or logged in dev mode), False on error
    """
    settings = get_settings()

    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY not set - email not sent", to=to, subject=subject)
        return True

    resend.api_key = settings.resend_api_key

    def _send() -> None:
        resend.Emails.send(
            {
                "from": settings.email_from,
                "to": [to],
                "subject": subject,
                "html": html_body,
            }
        )

    try:
        # Use thread pool with timeout to prevent hanging on slow API responses
        future = _email_executor.submit(_send)
        future.result(timeout=settings.email_send_timeout_seconds)
        logger.info("Email sent", to=to, subject=subject)
        return True
    except FuturesTimeoutError:
        logger.error("Email send timed out", to=to, timeout=settings.email_send_timeout_seconds)
        return False
    except Exception as e:
        logger.error("Failed to send email", to=to, subject=subject, error=str(e))
        return False


def send_task_assignment_email(to: str, task_title: str, project_name: str) -> bool:
    """Tell a user they have been assigned a new task."""
    return send_email(
        to,
        "New Task Assigned",
        _get_assignment_email_html(task_title, project_name),
    )


def send_status_update_email(to: str, task_title: str, new_status: str) -> bool:
    """Tell an assignee that one of their tasks changed status."""
    return send_email(
        to,
        "Task Status Updated",
        _get_status_update_email_html(task_title, new_status),
    )


def _get_assignment_email_html(task_title: str, project_name: str) -> str:
    settings = get_settings()
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="{_BODY_STYLE}">
    <h3>You've been assigned a new task!</h3>
    <p><strong>Task:</strong> {html.escape(task_title)}</p>
    <p><strong>Project:</strong> {html.escape(project_name)}</p>
    <p style="margin: 32px 0;">
        <a href="{settings.app_url}/dashboard" style="{_BUTTON_STYLE}">Open Dashboard</a>
    </p>
</body>
</html>"""


def _get_status_update_email_html(task_title: str, new_status: str) -> str:
    label = STATUS_LABELS.get(new_status, new_status)
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="{_BODY_STYLE}">
    <h3>Task status has been updated</h3>
    <p><strong>Task:</strong> {html.escape(task_title)}</p>
    <p><strong>New Status:</strong> {html.escape(label)}</p>
</body>
</html>"""
