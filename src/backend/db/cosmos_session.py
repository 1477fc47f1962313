"""
Azure Cosmos DB access for StudySync.

One async client per process, created on first use. Against the local
emulator the client is built from a connection string and the database and
containers are provisioned at startup; in Azure the client authenticates with
DefaultAzureCredential and the containers are expected to exist.

Repositories never touch the SDK directly: they go through the item helpers
at the bottom of this module, which turn "not found" into None/False and let
"already exists" conflicts propagate.
"""

import logging
from typing import Any

from azure.cosmos import PartitionKey
from azure.cosmos.aio import ContainerProxy, CosmosClient, DatabaseProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError
from azure.identity.aio import DefaultAzureCredential

from core.config import settings

logger = logging.getLogger(__name__)

PROFILES_CONTAINER = "profiles"
GROUPS_CONTAINER = "groups"
GROUP_MEMBERS_CONTAINER = "group-members"
STICKY_NOTES_CONTAINER = "sticky-notes"
POLLS_CONTAINER = "polls"
VOTES_CONTAINER = "poll-votes"
PERSONAL_NOTES_CONTAINER = "personal-notes"
TIMETABLE_CONTAINER = "timetable-events"

# Partition key path of every container
CONTAINER_PARTITION_KEYS: dict[str, str] = {
    PROFILES_CONTAINER: "/id",
    GROUPS_CONTAINER: "/id",
    GROUP_MEMBERS_CONTAINER: "/group_id",
    STICKY_NOTES_CONTAINER: "/group_id",
    POLLS_CONTAINER: "/group_id",
    VOTES_CONTAINER: "/poll_id",
    PERSONAL_NOTES_CONTAINER: "/user_id",
    TIMETABLE_CONTAINER: "/user_id",
}

_cosmos_client: CosmosClient | None = None
_database: DatabaseProxy | None = None
_credential: DefaultAzureCredential | None = None


def _parse_connection_string(connection_string: str) -> tuple[str, str]:
    """Split "AccountEndpoint=...;AccountKey=...;" into (endpoint, key)."""
    parts = dict(part.split("=", 1) for part in connection_string.split(";") if "=" in part)
    endpoint = parts.get("AccountEndpoint", "")
    key = parts.get("AccountKey", "")
    if not endpoint or not key:
        raise ValueError("AZURE_COSMOS_CONNECTION_STRING must contain AccountEndpoint and AccountKey")
    return endpoint, key


def _build_client() -> tuple[CosmosClient, DefaultAzureCredential | None]:
    if settings.AZURE_COSMOS_CONNECTION_STRING:
        endpoint, key = _parse_connection_string(settings.AZURE_COSMOS_CONNECTION_STRING)
        logger.info(f"Cosmos DB client for {endpoint} (key auth)")
        # The emulator's certificate is self-signed
        client = CosmosClient(
            url=endpoint,
            credential=key,
            connection_verify=not settings.AZURE_COSMOS_DISABLE_SSL,
        )
        return client, None

    if not settings.AZURE_COSMOS_ENDPOINT:
        raise ValueError("Set AZURE_COSMOS_ENDPOINT or AZURE_COSMOS_CONNECTION_STRING")

    credential = DefaultAzureCredential()
    logger.info(f"Cosmos DB client for {settings.AZURE_COSMOS_ENDPOINT} (Azure AD auth)")
    return CosmosClient(url=settings.AZURE_COSMOS_ENDPOINT, credential=credential), credential


async def get_cosmos_client() -> CosmosClient:
    """Return the process-wide client, creating it on first call."""
    global _cosmos_client, _credential

    if _cosmos_client is None:
        _cosmos_client, _credential = _build_client()
    return _cosmos_client


async def get_database() -> DatabaseProxy:
    global _database

    if _database is None:
        client = await get_cosmos_client()
        _database = client.get_database_client(settings.AZURE_COSMOS_DATABASE)
    return _database


async def get_container(container_name: str) -> ContainerProxy:
    return (await get_database()).get_container_client(container_name)


async def ensure_containers() -> None:
    """
    Create the database and every container if they are missing.

    Used against the local emulator; Azure deployments provision these
    through infrastructure templates.
    """
    global _database

    client = await get_cosmos_client()
    _database = await client.create_database_if_not_exists(id=settings.AZURE_COSMOS_DATABASE)
    for name, partition_key in CONTAINER_PARTITION_KEYS.items():
        await _database.create_container_if_not_exists(id=name, partition_key=PartitionKey(path=partition_key))
        logger.debug(f"Container {name} ready (partition {partition_key})")
    logger.info(f"Provisioned {len(CONTAINER_PARTITION_KEYS)} containers in {settings.AZURE_COSMOS_DATABASE}")


async def close_cosmos() -> None:
    """Close the client and credential. Called on application shutdown."""
    global _cosmos_client, _database, _credential

    client, credential = _cosmos_client, _credential
    _cosmos_client = _database = _credential = None

    if client is not None:
        await client.close()
        logger.info("Cosmos DB client closed")
    if credential is not None:
        await credential.close()


# ============================================================================
# Item helpers
# ============================================================================


async def create_item(container_name: str, item: dict[str, Any]) -> dict[str, Any]:
    """
    Insert a new item.

    Raises CosmosResourceExistsError if the id is already taken in the item's
    partition; vote and membership uniqueness depend on it.
    """
    container = await get_container(container_name)
    return await container.create_item(body=item)


async def read_item(container_name: str, item_id: str, partition_key: str) -> dict[str, Any] | None:
    """Point read by id and partition key. None if there is no such item."""
    container = await get_container(container_name)
    try:
        return await container.read_item(item=item_id, partition_key=partition_key)
    except CosmosResourceNotFoundError:
        return None


async def upsert_item(container_name: str, item: dict[str, Any]) -> dict[str, Any]:
    container = await get_container(container_name)
    return await container.upsert_item(body=item)


async def delete_item(container_name: str, item_id: str, partition_key: str) -> bool:
    """Delete by id and partition key. False if the item was already gone."""
    container = await get_container(container_name)
    try:
        await container.delete_item(item=item_id, partition_key=partition_key)
    except CosmosResourceNotFoundError:
        return False
    return True


async def query_items(
    container_name: str,
    query: str,
    parameters: list[dict[str, Any]] | None = None,
    partition_key: str | None = None,
    max_items: int | None = None,
) -> list[dict[str, Any]]:
    """
    Run a parameterized Cosmos DB SQL query and collect the results.

    Without a partition_key the query fans out across partitions. max_items
    caps both the page size and the number of results returned.
    """
    container = await get_container(container_name)

    options: dict[str, Any] = {}
    if parameters:
        options["parameters"] = parameters
    if partition_key:
        options["partition_key"] = partition_key
    if max_items:
        options["max_item_count"] = max_items

    results: list[dict[str, Any]] = []
    async for row in container.query_items(query=query, **options):
        results.append(row)
        if max_items and len(results) == max_items:
            break
    return results


async def query_count(
    container_name: str,
    query: str,
    parameters: list[dict[str, Any]] | None = None,
    partition_key: str | None = None,
) -> int:
    """Evaluate a SELECT VALUE COUNT(1) query."""
    rows = await query_items(container_name, query, parameters=parameters, partition_key=partition_key)
    return int(rows[0]) if rows and isinstance(rows[0], (int, float)) else 0
