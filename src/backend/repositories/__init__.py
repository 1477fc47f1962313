"""Repository modules for Cosmos DB access."""

from repositories.cosmos_group_repository import CosmosGroupRepository
from repositories.cosmos_note_repository import CosmosNoteRepository
from repositories.cosmos_personal_note_repository import CosmosPersonalNoteRepository
from repositories.cosmos_poll_repository import CosmosPollRepository
from repositories.cosmos_profile_repository import CosmosProfileRepository
from repositories.cosmos_timetable_repository import CosmosTimetableRepository
from repositories.cosmos_vote_repository import CosmosVoteRepository

__all__ = [
    "CosmosGroupRepository",
    "CosmosNoteRepository",
    "CosmosPersonalNoteRepository",
    "CosmosPollRepository",
    "CosmosProfileRepository",
    "CosmosTimetableRepository",
    "CosmosVoteRepository",
]
