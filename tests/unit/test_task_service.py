"""Unit tests for TaskService lifecycle orchestration."""

import asyncio
import threading
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from sqlalchemy.exc import OperationalError

from src.taskboard.core.exceptions import NotFoundError, StorageError, ValidationError
from src.taskboard.core.realtime import TASK_CREATED, TASK_UPDATED, FanoutHub, project_channel
from src.taskboard.models import ActivityAction, ActivityEntityType, TaskPriority, TaskStatus
from src.taskboard.schemas.task import TaskCreate
from src.taskboard.services.task_service import TaskService, permit_any_transition
from tests.factories import ProjectFactory, TaskFactory, TeamFactory, UserFactory

pytestmark = pytest.mark.unit

EMAIL_PATH = "src.taskboard.services.task_service.send_task_assignment_email"
STATUS_EMAIL_PATH = "src.taskboard.services.task_service.send_status_update_email"


def build_service(
    project=None,
    users=(),
    task=None,
    assignees=(),
    hub: FanoutHub | None = None,
    transition_policy=permit_any_transition,
):
    """TaskService over mocked repositories and session."""
    task_repo = MagicMock()
    task_repo.add = MagicMock()
    task_repo.add_assignee = MagicMock()
    task_repo.get_by_id = AsyncMock(return_value=task)
    task_repo.list_assignees = AsyncMock(return_value=list(assignees))

    project_repo = MagicMock()
    project_repo.get_by_id = AsyncMock(return_value=project)

    user_repo = MagicMock()
    user_repo.get_many = AsyncMock(return_value=list(users))

    activity_service = MagicMock()
    activity_service.log_action = AsyncMock()

    session = AsyncMock()

    service = TaskService(
        task_repo,
        project_repo,
        user_repo,
        activity_service,
        session,
        hub or FanoutHub(),
        transition_policy=transition_policy,
    )
    return service


def make_project():
    team = TeamFactory.build(created_by_id=uuid4())
    return ProjectFactory.build(team_id=team.id, name="Launch")


class TestCreate:
    async def test_create_persists_todo_task_with_resolved_assignees(self):
        project = make_project()
        alice = UserFactory.build(name="Alice")
        service = build_service(project=project, users=[alice])
        actor = UserFactory.manager()

        with patch(EMAIL_PATH, return_value=True):
            result = await service.create(
                TaskCreate(title="Write docs", project_id=project.id, assigned_user_ids=[alice.id]),
                actor,
            )

        assert result.status == TaskStatus.TODO
        assert result.priority == TaskPriority.MEDIUM
        assert [u.id for u in result.assigned_users] == [alice.id]
        service.task_repo.add.assert_called_once()
        service.task_repo.add_assignee.assert_called_once_with(result.id, alice.id)
        service.session.commit.assert_awaited_once()

    async def test_requested_status_is_ignored(self):
        project = make_project()
        service = build_service(project=project)

        result = await service.create(
            TaskCreate(title="Ship", project_id=project.id, status=TaskStatus.COMPLETED),
            UserFactory.build(),
        )

        assert result.status == TaskStatus.TODO
        stored = service.task_repo.add.call_args[0][0]
        assert stored.status == TaskStatus.TODO.value

    async def test_unknown_and_duplicate_assignees_are_dropped(self, capturing_logger):
        project = make_project()
        alice = UserFactory.build(name="Alice")
        ghost_id = uuid4()
        service = build_service(project=project, users=[alice])

        with patch(EMAIL_PATH, return_value=True) as send:
            result = await service.create(
                TaskCreate(
                    title="Review",
                    project_id=project.id,
                    assigned_user_ids=[alice.id, ghost_id, alice.id],
                ),
                UserFactory.build(),
            )

        assert [u.id for u in result.assigned_users] == [alice.id]
        assert service.task_repo.add_assignee.call_count == 1
        assert send.call_count == 1
        warnings = [c for c in capturing_logger.calls if c.method_name == "warning"]
        assert any(c.kwargs.get("user_id") == str(ghost_id) for c in warnings)

    async def test_missing_project_raises_without_side_effects(self, connection):
        hub = FanoutHub()
        missing_id = uuid4()
        hub.subscribe(project_channel(missing_id), connection)
        service = build_service(project=None, hub=hub)

        with pytest.raises(NotFoundError):
            await service.create(TaskCreate(title="x", project_id=missing_id), UserFactory.build())

        service.session.commit.assert_not_awaited()
        service.activity_service.log_action.assert_not_awaited()
        assert connection.messages == []

    async def test_side_effects_run_in_order(self, connection):
        project = make_project()
        alice = UserFactory.build(name="Alice", email="alice@example.com")
        hub = FanoutHub()
        hub.subscribe(project_channel(project.id), connection)
        service = build_service(project=project, users=[alice], hub=hub)
        actor = UserFactory.manager()

        with patch(EMAIL_PATH, return_value=True) as send:
            result = await service.create(
                TaskCreate(title="Plan", project_id=project.id, assigned_user_ids=[alice.id]),
                actor,
            )

        service.activity_service.log_action.assert_awaited_once_with(
            action=ActivityAction.TASK_CREATED,
            entity_type=ActivityEntityType.TASK,
            entity_id=result.id,
            user_id=actor.id,
            project_id=project.id,
            details={"taskTitle": "Plan", "projectId": str(project.id)},
        )
        send.assert_called_once_with("alice@example.com", "Plan", "Launch")
        assert connection.messages == [
            {"event": TASK_CREATED, "data": {"task": result.model_dump(mode="json")}}
        ]

    async def test_email_failure_does_not_block_activity_or_publish(self, connection):
        project = make_project()
        alice = UserFactory.build()
        hub = FanoutHub()
        hub.subscribe(project_channel(project.id), connection)
        service = build_service(project=project, users=[alice], hub=hub)

        with patch(EMAIL_PATH, side_effect=RuntimeError("provider down")):
            result = await service.create(
                TaskCreate(title="Plan", project_id=project.id, assigned_user_ids=[alice.id]),
                UserFactory.build(),
            )

        assert result.title == "Plan"
        service.activity_service.log_action.assert_awaited_once()
        assert len(connection.messages) == 1

    async def test_rejected_email_is_logged(self, capturing_logger):
        project = make_project()
        alice = UserFactory.build()
        service = build_service(project=project, users=[alice])

        with patch(EMAIL_PATH, return_value=False):
            await service.create(
                TaskCreate(title="Plan", project_id=project.id, assigned_user_ids=[alice.id]),
                UserFactory.build(),
            )

        events = [c.kwargs["event"] for c in capturing_logger.calls if c.method_name == "warning"]
        assert "Task email not delivered" in events

    async def test_assignee_emails_are_sent_concurrently(self, capturing_logger):
        project = make_project()
        alice = UserFactory.build(email="alice@example.com")
        bob = UserFactory.build(email="bob@example.com")
        service = build_service(project=project, users=[alice, bob])
        # Each send waits for the other; sequential sending would break the barrier
        both_sending = threading.Barrier(2, timeout=5)

        def send(to: str, *args) -> bool:
            both_sending.wait()
            return True

        with patch(EMAIL_PATH, side_effect=send) as mocked:
            await service.create(
                TaskCreate(
                    title="Plan", project_id=project.id, assigned_user_ids=[alice.id, bob.id]
                ),
                UserFactory.build(),
            )

        assert {c.args[0] for c in mocked.call_args_list} == {"alice@example.com", "bob@example.com"}
        events = [c.kwargs["event"] for c in capturing_logger.calls if c.method_name == "warning"]
        assert "Task email not delivered" not in events

    async def test_publish_failure_does_not_change_response(self):
        project = make_project()
        hub = MagicMock()
        hub.publish = AsyncMock(side_effect=RuntimeError("hub gone"))
        service = build_service(project=project, hub=hub)

        result = await service.create(TaskCreate(title="Plan", project_id=project.id), UserFactory.build())

        assert result.title == "Plan"
        hub.publish.assert_awaited_once()

    async def test_commit_failure_raises_storage_error(self):
        project = make_project()
        service = build_service(project=project)
        service.session.commit.side_effect = OperationalError("INSERT", {}, Exception("disk full"))

        with pytest.raises(StorageError):
            await service.create(TaskCreate(title="Plan", project_id=project.id), UserFactory.build())

        service.session.rollback.assert_awaited_once()
        service.activity_service.log_action.assert_not_awaited()


class TestUpdateStatus:
    async def test_updates_status_and_publishes_actor_name(self, connection):
        project = make_project()
        task = TaskFactory.build(project_id=project.id, title="Fix bug")
        hub = FanoutHub()
        hub.subscribe(project_channel(project.id), connection)
        service = build_service(task=task, hub=hub)
        actor = UserFactory.build(name="Grace")

        result = await service.update_status(task.id, TaskStatus.IN_PROGRESS, actor)

        assert result.status == TaskStatus.IN_PROGRESS
        assert connection.messages == [
            {
                "event": TASK_UPDATED,
                "data": {"taskId": str(task.id), "status": "in_progress", "updatedBy": "Grace"},
            }
        ]
        details = service.activity_service.log_action.call_args.kwargs["details"]
        assert details == {"oldStatus": "todo", "newStatus": "in_progress", "taskTitle": "Fix bug"}

    async def test_missing_task_raises_without_side_effects(self, connection):
        hub = FanoutHub()
        service = build_service(task=None, hub=hub)

        with pytest.raises(NotFoundError):
            await service.update_status(uuid4(), TaskStatus.COMPLETED, UserFactory.build())

        service.session.commit.assert_not_awaited()
        service.activity_service.log_action.assert_not_awaited()

    async def test_assignees_emailed_about_new_status(self):
        task = TaskFactory.build(project_id=uuid4(), title="Deploy")
        bob = UserFactory.build(email="bob@example.com")
        service = build_service(task=task, assignees=[bob])

        with patch(STATUS_EMAIL_PATH, return_value=True) as send:
            await service.update_status(task.id, TaskStatus.COMPLETED, UserFactory.build())

        send.assert_called_once_with("bob@example.com", "Deploy", "completed")

    async def test_refusing_policy_blocks_the_change(self):
        task = TaskFactory.build(project_id=uuid4(), status=TaskStatus.COMPLETED.value)

        def no_reopen(old: TaskStatus, new: TaskStatus) -> None:
            if old == TaskStatus.COMPLETED and new != TaskStatus.COMPLETED:
                raise ValidationError("Completed tasks cannot be reopened")

        service = build_service(task=task, transition_policy=no_reopen)

        with pytest.raises(ValidationError):
            await service.update_status(task.id, TaskStatus.TODO, UserFactory.build())

        service.session.commit.assert_not_awaited()
        assert task.status == TaskStatus.COMPLETED.value


@settings(deadline=None)
@given(requested=st.one_of(st.none(), st.sampled_from(TaskStatus)))
def test_new_tasks_always_start_in_todo(requested):
    project = make_project()
    service = build_service(project=project)

    result = asyncio.run(
        service.create(
            TaskCreate(title="Any", project_id=project.id, status=requested),
            UserFactory.build(),
        )
    )

    assert result.status == TaskStatus.TODO


@settings(deadline=None)
@given(old=st.sampled_from(TaskStatus), new=st.sampled_from(TaskStatus))
def test_every_transition_is_permitted(old, new):
    task = TaskFactory.build(project_id=uuid4(), status=old.value)
    service = build_service(task=task)

    result = asyncio.run(service.update_status(task.id, new, UserFactory.build()))

    assert result.status == new
    service.session.commit.assert_awaited_once()
