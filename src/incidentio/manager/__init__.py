"""incidentio manager — host-facing resource lifecycle contract."""

from incidentio.manager.base import ResourceManager
from incidentio.manager.resources import AccessorResourceManager, managers_for

__all__ = [
    "AccessorResourceManager",
    "ResourceManager",
    "managers_for",
]
