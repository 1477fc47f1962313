"""
Repository provider for dependency injection.

Routes depend on the factory functions below rather than on concrete
classes, so tests can swap repositories through app.dependency_overrides.

Usage:
    from repositories.provider import get_group_repository

    async def some_endpoint(
        group_repo: GroupRepositoryProtocol = Depends(get_group_repository),
    ):
        group = await group_repo.get_by_id(group_id)
"""

import logging
from typing import Protocol, runtime_checkable

from core.config import settings

logger = logging.getLogger(__name__)


def is_cosmos_enabled() -> bool:
    """Check if Cosmos DB is configured (RBAC endpoint or emulator connection string)."""
    return bool(settings.AZURE_COSMOS_ENDPOINT or settings.AZURE_COSMOS_CONNECTION_STRING)


def _require_cosmos() -> None:
    if not is_cosmos_enabled():
        raise RuntimeError("Configure AZURE_COSMOS_ENDPOINT or AZURE_COSMOS_CONNECTION_STRING to use the row store.")


# =============================================================================
# Repository Protocols (Interfaces)
# =============================================================================


@runtime_checkable
class ProfileRepositoryProtocol(Protocol):
    async def get_by_id(self, user_id: str): ...
    async def get_by_email(self, email: str): ...
    async def get_many(self, user_ids): ...
    async def ensure(self, user_id: str, email: str | None = None, display_name: str | None = None): ...


@runtime_checkable
class GroupRepositoryProtocol(Protocol):
    async def get_by_id(self, group_id: str): ...
    async def create(self, name: str, created_by: str, description: str | None = None, **kwargs): ...
    async def list_for_user(self, user_id: str): ...
    async def get_membership(self, group_id: str, user_id: str): ...
    async def list_members(self, group_id: str): ...
    async def add_member(self, group_id: str, user_id: str, **kwargs): ...
    async def ensure_admin(self, group_id: str, user_id: str): ...
    async def count_for_user(self, user_id: str) -> int: ...


@runtime_checkable
class NoteRepositoryProtocol(Protocol):
    async def find_by_id(self, note_id: str): ...
    async def list_by_group(self, group_id: str, tag=None): ...
    async def list_for_groups(self, group_ids, pinned: bool, limit: int): ...
    async def search(self, group_ids, text=None, tags=None, limit: int = 20): ...
    async def create(self, group_id: str, created_by: str, content: str, **kwargs): ...
    async def count_by_author(self, user_id: str) -> int: ...
    async def set_pinned(self, note, is_pinned: bool): ...
    async def delete(self, note_id: str, group_id: str) -> bool: ...


@runtime_checkable
class PollRepositoryProtocol(Protocol):
    async def find_by_id(self, poll_id: str): ...
    async def list_by_group(self, group_id: str): ...
    async def create(self, group_id: str, created_by: str, question: str, options, **kwargs): ...


@runtime_checkable
class VoteRepositoryProtocol(Protocol):
    async def list_by_poll(self, poll_id: str): ...
    async def create(self, vote): ...


@runtime_checkable
class PersonalNoteRepositoryProtocol(Protocol):
    async def get_by_id(self, note_id: str, user_id: str): ...
    async def list_for_user(self, user_id: str): ...
    async def create(self, user_id: str, title: str, content: str, **kwargs): ...
    async def update(self, note, **updates): ...
    async def delete(self, note_id: str, user_id: str) -> bool: ...


@runtime_checkable
class TimetableRepositoryProtocol(Protocol):
    async def get_by_id(self, event_id: str, user_id: str): ...
    async def list_for_user(self, user_id: str): ...
    async def list_alerting_for_day(self, day_of_week: int): ...
    async def create(self, event): ...
    async def update(self, event, **updates): ...
    async def delete(self, event_id: str, user_id: str) -> bool: ...


# =============================================================================
# Repository Factory Functions
# =============================================================================


async def get_profile_repository():
    _require_cosmos()
    from repositories.cosmos_profile_repository import CosmosProfileRepository

    return CosmosProfileRepository()


async def get_group_repository():
    _require_cosmos()
    from repositories.cosmos_group_repository import CosmosGroupRepository

    return CosmosGroupRepository()


async def get_note_repository():
    _require_cosmos()
    from repositories.cosmos_note_repository import CosmosNoteRepository

    return CosmosNoteRepository()


async def get_poll_repository():
    _require_cosmos()
    from repositories.cosmos_poll_repository import CosmosPollRepository

    return CosmosPollRepository()


async def get_vote_repository():
    _require_cosmos()
    from repositories.cosmos_vote_repository import CosmosVoteRepository

    return CosmosVoteRepository()


async def get_personal_note_repository():
    _require_cosmos()
    from repositories.cosmos_personal_note_repository import CosmosPersonalNoteRepository

    return CosmosPersonalNoteRepository()


async def get_timetable_repository():
    _require_cosmos()
    from repositories.cosmos_timetable_repository import CosmosTimetableRepository

    return CosmosTimetableRepository()
