"""Action definitions, auto-action categories and per-scope action catalogs."""

from .catalog import ActionCatalog
from .definition import KNOWN_COMMANDS, ActionCommand, ActionDefinition
from .registry import AUTO_ACTION_PREFIX, AutoActionRegistry, AutoActionType

__all__ = [
    "AUTO_ACTION_PREFIX",
    "KNOWN_COMMANDS",
    "ActionCatalog",
    "ActionCommand",
    "ActionDefinition",
    "AutoActionRegistry",
    "AutoActionType",
]
