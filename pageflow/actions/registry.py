"""Auto-action categories and the ordered registry that holds them.

Auto actions are not invoked by name. They are registered under a category
(for example ``auto-state-init``) and the engine runs every action in that
category at the matching point of the page flow. A module declares defaults;
each state starts from a clone of the module registry and may replace whole
categories with its own declarations.

Example
-------
>>> from pageflow.actions.registry import AutoActionType
>>> AutoActionType.from_action_name("auto-state-init-load").name
'STATE_INIT'
>>> AutoActionType.from_action_name("save") is None
True
"""

from __future__ import annotations

import enum
import typing as typ

from ..errors import ModuleInternalError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .definition import ActionDefinition

AUTO_ACTION_PREFIX = "auto-"


class AutoActionType(enum.Enum):
    """Category an auto action is registered under, keyed by name prefix."""

    STATE_INIT = "auto-state-init"
    STATE_FINAL = "auto-state-final"
    STATE_RESUME = "auto-state-resume"
    ACTION_INIT = "auto-action-init"
    ACTION_FINAL = "auto-action-final"
    ACTION_BEFORE = "auto-action-before"
    ACTION_AFTER = "auto-action-after"
    CALLBACK_INIT = "auto-callback-init"

    @property
    def prefix(self) -> str:
        return self.value

    @classmethod
    def from_action_name(cls, action_name: str) -> AutoActionType | None:
        """Return the category an action name belongs to, if any.

        A name belongs to a category when it equals the category prefix or
        starts with the prefix followed by ``-``. The longest prefix wins.
        """
        matches = [
            member
            for member in cls
            if action_name == member.prefix or action_name.startswith(f"{member.prefix}-")
        ]
        if not matches:
            return None
        return max(matches, key=lambda member: len(member.prefix))


class AutoActionRegistry:
    """Ordered multi-valued mapping from :class:`AutoActionType` to actions.

    Categories iterate in the order they were first inserted and actions within
    a category in insertion order. Once :meth:`freeze` has been called any
    mutation raises :class:`~pageflow.errors.ModuleInternalError`.
    """

    __slots__ = ("_entries", "_frozen")

    def __init__(self) -> None:
        self._entries: dict[AutoActionType, list[ActionDefinition]] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def insert(self, category: AutoActionType, action: ActionDefinition) -> None:
        """Append ``action`` to the entries held for ``category``."""
        self._check_mutable()
        self._entries.setdefault(category, []).append(action)

    def remove_all(self, category: AutoActionType) -> tuple[ActionDefinition, ...]:
        """Drop every entry under ``category`` and return what was removed."""
        self._check_mutable()
        return tuple(self._entries.pop(category, ()))

    def replace(self, category: AutoActionType, action: ActionDefinition) -> None:
        """Replace every entry under ``category`` with ``action``.

        Equivalent to :meth:`remove_all` followed by :meth:`insert`, except the
        category keeps its position in the iteration order. A state overriding
        a module category therefore validates and reports its categories in
        the module's order, while :meth:`get` returns the same entries either
        way.
        """
        self._check_mutable()
        self._entries[category] = [action]

    def get(self, category: AutoActionType) -> tuple[ActionDefinition, ...]:
        return tuple(self._entries.get(category, ()))

    def categories(self) -> tuple[AutoActionType, ...]:
        return tuple(self._entries)

    def values(self) -> cabc.Iterator[ActionDefinition]:
        """Yield every registered action, category by category."""
        for actions in self._entries.values():
            yield from actions

    def clone(self) -> AutoActionRegistry:
        """Return a mutable copy whose changes never reach this registry."""
        copy = AutoActionRegistry()
        copy._entries = {category: list(actions) for category, actions in self._entries.items()}
        return copy

    def freeze(self) -> AutoActionRegistry:
        self._frozen = True
        return self

    def _check_mutable(self) -> None:
        if self._frozen:
            msg = "Auto-action registry is frozen and cannot be modified"
            raise ModuleInternalError(msg)

    def __len__(self) -> int:
        return sum(len(actions) for actions in self._entries.values())

    def __contains__(self, category: object) -> bool:
        return category in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AutoActionRegistry):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        summary = ", ".join(
            f"{category.prefix}={len(actions)}" for category, actions in self._entries.items()
        )
        return f"AutoActionRegistry({summary})"


__all__ = ["AUTO_ACTION_PREFIX", "AutoActionRegistry", "AutoActionType"]
