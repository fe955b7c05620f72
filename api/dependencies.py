"""
Shared dependencies for the Kinship API.

This module provides:
- PocketBase client management (global instance authenticated as admin)
- Repository getters, patched in tests
"""

from __future__ import annotations

import asyncio
import logging

from pocketbase import PocketBase

from kinship.data import ConnectionRepository, MissionRepository, ProfileRepository

from .settings import get_settings

logger = logging.getLogger(__name__)

# ========================================
# PocketBase Client
# ========================================

# The PocketBase API is stateless; the shared client only ever holds the
# admin auth token, so one instance serves every request.
_settings = get_settings()
pb_url = _settings.pocketbase_url
pb = PocketBase(pb_url)


class AuthState:
    """Shared state object for the PocketBase client."""

    pb_client: PocketBase | None = None


auth_state = AuthState()


async def authenticate_pb() -> None:
    """Authenticate with PocketBase as admin."""
    settings = get_settings()
    try:
        await asyncio.to_thread(
            pb.collection("_superusers").auth_with_password,
            settings.pocketbase_admin_email,
            settings.pocketbase_admin_password,
        )
        auth_state.pb_client = pb
        logger.info("Successfully authenticated with PocketBase")
    except Exception as e:
        logger.error(f"Failed to authenticate with PocketBase: {e}")
        raise


async def get_pb_client() -> PocketBase:
    """FastAPI dependency to get authenticated PocketBase client."""
    return pb


# ========================================
# Repositories
# ========================================


def get_connection_repository() -> ConnectionRepository:
    settings = get_settings()
    return ConnectionRepository(
        pb,
        chunk_size=settings.neighborhood_chunk_size,
        timeout=settings.graph_fetch_timeout_seconds,
    )


def get_mission_repository() -> MissionRepository:
    return MissionRepository(pb, timeout=get_settings().graph_fetch_timeout_seconds)


def get_profile_repository() -> ProfileRepository:
    settings = get_settings()
    return ProfileRepository(
        pb,
        chunk_size=settings.neighborhood_chunk_size,
        timeout=settings.graph_fetch_timeout_seconds,
    )


__all__ = [
    "pb",
    "pb_url",
    "auth_state",
    "authenticate_pb",
    "get_pb_client",
    "get_connection_repository",
    "get_mission_repository",
    "get_profile_repository",
]
