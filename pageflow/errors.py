"""Exception hierarchy shared by the pageflow engine.

Two kinds of failure are kept apart. :class:`ModuleConfigError` means the
declarative module definition is malformed or ambiguous and is raised while a
module or state is being built. :class:`ModuleInternalError` means a
request-time invariant was broken by the caller, for example asking for an
action that does not exist.
"""

from __future__ import annotations


class PageflowError(Exception):
    """Base class for every error raised by pageflow."""


class ModuleConfigError(PageflowError, ValueError):
    """Raised when a module definition is invalid or incomplete."""


class ModuleInternalError(PageflowError, RuntimeError):
    """Raised when a caller breaks a request-time invariant."""


class ActionValidationError(ModuleConfigError):
    """Raised when an action fails structural validation."""

    def __init__(self, message: str, *, action_name: str, state_name: str | None) -> None:
        super().__init__(message)
        self.action_name = action_name
        self.state_name = state_name


class StateNotFoundError(ModuleInternalError):
    """Raised when a module is asked for a state it does not declare."""

    def __init__(self, state_name: str, module_name: str) -> None:
        msg = f"State '{state_name}' not found in module '{module_name}'"
        super().__init__(msg)
        self.state_name = state_name
        self.module_name = module_name


class ActionNotFoundError(ModuleInternalError):
    """Raised when an action name cannot be resolved."""

    def __init__(self, message: str, *, action_name: str, state_name: str) -> None:
        super().__init__(message)
        self.action_name = action_name
        self.state_name = state_name


__all__ = [
    "ActionNotFoundError",
    "ActionValidationError",
    "ModuleConfigError",
    "ModuleInternalError",
    "PageflowError",
    "StateNotFoundError",
]
