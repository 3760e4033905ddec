"""
bn-data-editor: Content-pack editor core for Cataclysm: Bright Nights

Loads base game and mod JSON data into an editable workspace and writes
changed entities back in place, following the game's formatting conventions.
"""

__version__ = "0.1.0"
__author__ = "bn-data-editor Contributors"

# Core service imports
from .game_data import Workspace, PackLoader, ContentPack
from .tilesets import TilesetService
from .settings import AppSettings
from .utils.logging_config import setup_logging

# Main data models
from .game_data.models import (
    EntityMeta, EntityRecord, EntityData, PackLoadResult,
    UpdateResult, SaveResult, SearchResult, WorkspaceState
)

__all__ = [
    # Services
    'Workspace',
    'PackLoader',
    'ContentPack',
    'TilesetService',
    'AppSettings',

    # Logging
    'setup_logging',

    # Data models
    'EntityMeta',
    'EntityRecord',
    'EntityData',
    'PackLoadResult',
    'UpdateResult',
    'SaveResult',
    'SearchResult',
    'WorkspaceState',
]
