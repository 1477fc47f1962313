"""Database module."""

from db.cosmos_session import close_cosmos, get_container, get_cosmos_client

__all__ = ["close_cosmos", "get_container", "get_cosmos_client"]
