"""Portfolio Manager Tests.

Tests for owner changes, loading, error boundaries and confirmed deletion.
"""

import asyncio
from datetime import UTC, datetime

import pytest

from portfolio.core.errors import LoadError, NotFoundError, ValidationError
from portfolio.core.models.profile import OwnerProfile
from portfolio.core.models.project import PortfolioProject
from portfolio.domain.form import Closed, Creating, Editing
from portfolio.domain.manager import ManagerStatus, PortfolioManager
from portfolio.domain.store import ProjectStore
from portfolio.infrastructure.repository import InMemoryProjectRepository, sample_projects

NOW = datetime(2024, 3, 1, tzinfo=UTC)
ALICE = OwnerProfile(id="alice")
BOB = OwnerProfile(id="bob")


class GatedRepository:
    """Repository whose fetches only complete once released."""

    def __init__(self) -> None:
        self.gates: dict[str, asyncio.Event] = {}
        self.started: list[str] = []

    def release(self, owner_id: str) -> None:
        self.gates.setdefault(owner_id, asyncio.Event()).set()

    async def fetch_projects(self, owner_id: str) -> list[PortfolioProject]:
        self.started.append(owner_id)
        await self.gates.setdefault(owner_id, asyncio.Event()).wait()
        return sample_projects(owner_id, NOW)


class FailingRepository:
    async def fetch_projects(self, owner_id: str) -> list[PortfolioProject]:
        raise TimeoutError("backend timed out")


class ConfirmSpy:
    def __init__(self, answer: bool) -> None:
        self.answer = answer
        self.asked: list[str] = []

    def __call__(self, project: PortfolioProject) -> bool:
        self.asked.append(project.id)
        return self.answer


def make_manager(repository=None, answer: bool = True) -> PortfolioManager:
    if repository is None:
        repository = InMemoryProjectRepository(sample_projects("alice", NOW))
    return PortfolioManager(
        repository,
        ConfirmSpy(answer),
        store=ProjectStore(clock=lambda: NOW),
    )


@pytest.mark.asyncio
async def test_mount_loads_projects():
    manager = make_manager()

    await manager.mount(ALICE)

    assert manager.status is ManagerStatus.READY
    assert [p.id for p in manager.projects] == ["1", "2"]
    assert [p.id for p in manager.views.featured] == ["1"]
    assert manager.views.cards[1].overflow_label == "+3"


@pytest.mark.asyncio
async def test_loading_status_while_pending():
    repository = GatedRepository()
    manager = make_manager(repository)

    task = manager.change_owner(ALICE)
    await asyncio.sleep(0)

    assert manager.status is ManagerStatus.LOADING
    assert manager.projects == []
    assert not manager.open_create()

    repository.release("alice")
    await task

    assert manager.status is ManagerStatus.READY
    assert len(manager.projects) == 2


@pytest.mark.asyncio
async def test_no_profile_suspends_operations():
    manager = make_manager()

    await manager.mount(None)

    assert manager.status is ManagerStatus.NO_PROFILE
    assert not manager.open_create()
    assert not manager.change_field("title", "x")
    assert manager.submit_form() is None
    assert not manager.delete_project("1")
    assert manager.form.state == Closed()


@pytest.mark.asyncio
async def test_profile_not_ready_counts_as_missing():
    manager = make_manager()

    await manager.mount(OwnerProfile(id="alice", ready=False))

    assert manager.status is ManagerStatus.NO_PROFILE
    assert manager.projects == []


@pytest.mark.asyncio
async def test_load_error_recovers_with_empty_list():
    manager = make_manager(FailingRepository())

    await manager.mount(ALICE)

    assert manager.status is ManagerStatus.READY
    assert manager.projects == []
    assert isinstance(manager.load_error, LoadError)
    assert manager.open_create()


class MalformedRepository:
    def __init__(self, payload) -> None:
        self.payload = payload

    async def fetch_projects(self, owner_id: str):
        return self.payload


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [None, [{"id": "1", "title": "Site"}], "projects"])
async def test_malformed_payload_recovers_with_empty_list(payload):
    manager = make_manager(MalformedRepository(payload))

    await manager.mount(ALICE)

    assert manager.status is ManagerStatus.READY
    assert manager.is_loading is False
    assert manager.projects == []
    assert isinstance(manager.load_error, LoadError)
    assert isinstance(manager.load_error.__cause__, TypeError)
    assert manager.open_create()


@pytest.mark.asyncio
async def test_owner_change_cancels_pending_load():
    repository = GatedRepository()
    manager = make_manager(repository)

    first = manager.change_owner(ALICE)
    await asyncio.sleep(0)
    second = manager.change_owner(BOB)
    await asyncio.sleep(0)

    assert first.cancelled()
    repository.release("bob")
    await second

    assert {p.owner_id for p in manager.projects} == {"bob"}
    assert manager.form.owner_id == "bob"


@pytest.mark.asyncio
async def test_stale_load_never_writes():
    repository = GatedRepository()
    manager = make_manager(repository)

    manager.change_owner(ALICE)
    await asyncio.sleep(0)
    await manager.mount(None)
    repository.release("alice")
    await asyncio.sleep(0)

    assert manager.status is ManagerStatus.NO_PROFILE
    assert manager.projects == []


@pytest.mark.asyncio
async def test_same_owner_does_not_reload():
    repository = InMemoryProjectRepository(sample_projects("alice", NOW))
    manager = make_manager(repository)
    await manager.mount(ALICE)

    await manager.mount(OwnerProfile(id="alice"))

    assert repository.fetch_count == 1


@pytest.mark.asyncio
async def test_close_cancels_pending_load():
    repository = GatedRepository()
    manager = make_manager(repository)
    task = manager.change_owner(ALICE)
    await asyncio.sleep(0)

    await manager.close()

    assert task.cancelled()
    assert not manager.is_loading


@pytest.mark.asyncio
async def test_create_flow_through_manager():
    manager = make_manager()
    await manager.mount(ALICE)

    assert manager.open_create()
    manager.change_field("title", "Site")
    manager.change_field("description", "My site")
    manager.change_field("technologies", "React, TypeScript")
    project = manager.submit_form()

    assert project is not None
    assert manager.projects[-1] == project
    assert project.owner_id == "alice"
    assert project.completed_at == NOW
    assert manager.form.state == Closed()
    assert project in [card.project for card in manager.views.cards]


@pytest.mark.asyncio
async def test_invalid_submit_keeps_form_open():
    manager = make_manager()
    await manager.mount(ALICE)
    manager.open_create()
    manager.change_field("description", "No title")

    assert manager.submit_form() is None

    assert manager.form.state == Creating()
    assert isinstance(manager.form_error, ValidationError)
    assert len(manager.projects) == 2

    manager.cancel_form()
    assert manager.form_error is None


@pytest.mark.asyncio
async def test_edit_flow_sets_featured():
    manager = make_manager()
    await manager.mount(ALICE)
    before = manager.store.get("2")

    assert manager.open_edit("2")
    manager.change_field("featured", True)
    updated = manager.submit_form()

    assert updated.featured is True
    assert updated.model_dump(exclude={"featured"}) == before.model_dump(exclude={"featured"})
    assert [p.id for p in manager.views.featured] == ["1", "2"]
    assert manager.form.state == Closed()


@pytest.mark.asyncio
async def test_edit_of_deleted_project_is_recoverable():
    manager = make_manager()
    await manager.mount(ALICE)
    manager.open_edit("2")
    manager.delete_project("2")

    assert manager.submit_form() is None

    assert manager.form.state == Editing(target_id="2")
    assert isinstance(manager.form_error, NotFoundError)


@pytest.mark.asyncio
async def test_open_edit_unknown_project():
    manager = make_manager()
    await manager.mount(ALICE)

    assert not manager.open_edit("missing")

    assert isinstance(manager.form_error, NotFoundError)
    assert manager.form.state == Closed()


@pytest.mark.asyncio
async def test_delete_requires_confirmation():
    manager = make_manager(answer=False)
    await manager.mount(ALICE)

    assert not manager.delete_project("1")

    assert manager.confirm.asked == ["1"]
    assert [p.id for p in manager.projects] == ["1", "2"]


@pytest.mark.asyncio
async def test_delete_confirmed():
    manager = make_manager(answer=True)
    await manager.mount(ALICE)

    assert manager.delete_project("1")

    assert [p.id for p in manager.projects] == ["2"]
    assert manager.views.featured == []


@pytest.mark.asyncio
async def test_delete_absent_skips_prompt():
    manager = make_manager(answer=True)
    await manager.mount(ALICE)
    before = manager.projects

    assert not manager.delete_project("missing")

    assert manager.confirm.asked == []
    assert manager.projects == before
