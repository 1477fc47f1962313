"""
Cosmos DB Profile repository.

Profiles are keyed by the identity provider's user id. Emails are stored
lower-cased so lookups by email are exact matches.
"""

import logging
from typing import Iterable, Optional

from azure.cosmos.exceptions import CosmosResourceExistsError

from db.cosmos_session import (
    PROFILES_CONTAINER,
    create_item,
    query_items,
    read_item,
)
from models.cosmos_documents import ProfileDocument

logger = logging.getLogger(__name__)


class CosmosProfileRepository:
    """Repository for profile operations using Cosmos DB."""

    async def get_by_id(self, user_id: str) -> Optional[ProfileDocument]:
        """Get a profile by user id (point read)."""
        data = await read_item(PROFILES_CONTAINER, user_id, partition_key=user_id)
        if data is None:
            return None
        return ProfileDocument(**data)

    async def get_by_email(self, email: str) -> Optional[ProfileDocument]:
        """Find a profile by email, ignoring case and surrounding whitespace."""
        email_normalized = email.strip().lower()
        if not email_normalized:
            return None

        results = await query_items(
            PROFILES_CONTAINER,
            "SELECT * FROM c WHERE c.email = @email",
            parameters=[{"name": "@email", "value": email_normalized}],
            max_items=1,
        )
        if not results:
            return None
        return ProfileDocument(**results[0])

    async def get_many(self, user_ids: Iterable[str]) -> dict[str, ProfileDocument]:
        """Fetch several profiles at once, keyed by user id. Unknown ids are skipped."""
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return {}

        results = await query_items(
            PROFILES_CONTAINER,
            "SELECT * FROM c WHERE ARRAY_CONTAINS(@ids, c.id)",
            parameters=[{"name": "@ids", "value": ids}],
        )
        return {item["id"]: ProfileDocument(**item) for item in results}

    async def ensure(
        self,
        user_id: str,
        email: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> ProfileDocument:
        """
        Return the viewer's profile, creating it from token claims on first sight.

        A concurrent first request may create the same profile; the loser
        re-reads the winner's document.
        """
        existing = await self.get_by_id(user_id)
        if existing is not None:
            return existing

        profile = ProfileDocument(
            id=user_id,
            email=email.strip().lower() if email else None,
            display_name=display_name,
        )
        try:
            await create_item(PROFILES_CONTAINER, profile.model_dump(mode="json"))
        except CosmosResourceExistsError:
            existing = await self.get_by_id(user_id)
            if existing is not None:
                return existing
            raise
        logger.info(f"Created profile for user {user_id}")
        return profile

