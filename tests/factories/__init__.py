"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, TeamFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.user import DEFAULT_TEST_PASSWORD, UserFactory
from tests.factories.work import ProjectFactory, TaskFactory, TeamFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # User
    "DEFAULT_TEST_PASSWORD",
    "UserFactory",
    # Work items
    "ProjectFactory",
    "TaskFactory",
    "TeamFactory",
]
