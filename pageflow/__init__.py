"""State and action resolution for declarative page-flow modules.

This package turns XML module definitions into resolved, immutable states and
answers request-time questions about them: which action a name refers to,
which auto actions run for a category, and whether an action control may be
shown as runnable.

Exports
-------
- ``load_module`` / ``parse_module``: build a :class:`Module` from XML.
- ``load_modules``: build every module listed in an engine config.
- ``Module`` and ``State``: the resolved runtime objects.
- ``app`` / ``main``: the ``pageflow`` CLI.

Examples
--------
>>> from pageflow import parse_module
>>> module = parse_module(
...     '<module name="m"><action-list><action name="home"/></action-list>'
...     '<state-list><state name="s"/></state-list></module>'
... )
>>> module.get_state("s").get_action_by_name("home").state_name is None
True
"""

from __future__ import annotations

from .cli import app, main
from .errors import (
    ActionNotFoundError,
    ActionValidationError,
    ModuleConfigError,
    ModuleInternalError,
    PageflowError,
    StateNotFoundError,
)
from .module import Module, load_module, load_modules, parse_module
from .state import State

__all__ = [
    "ActionNotFoundError",
    "ActionValidationError",
    "Module",
    "ModuleConfigError",
    "ModuleInternalError",
    "PageflowError",
    "State",
    "StateNotFoundError",
    "app",
    "load_module",
    "load_modules",
    "main",
    "parse_module",
]
