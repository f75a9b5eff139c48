"""Gridly integration adapter for localization record synchronization."""

from gridly_sync.adapters.gridly.client import GridlyClient
from gridly_sync.adapters.gridly.sync.service import GridlySyncService

__all__ = ["GridlyClient", "GridlySyncService"]
