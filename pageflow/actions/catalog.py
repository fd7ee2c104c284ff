"""Per-scope action storage with delegation to an enclosing scope."""

from __future__ import annotations

import logging
import types
import typing as typ

from ..errors import ModuleConfigError, ModuleInternalError
from .registry import AutoActionRegistry

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .definition import ActionDefinition
    from .registry import AutoActionType

logger = logging.getLogger(__name__)


class ActionCatalog:
    """Named actions and auto actions declared by one module or state.

    A module catalog has no parent and accumulates auto actions per category.
    A state catalog is created with :meth:`for_child`: it starts from a clone
    of the parent's auto-action registry and each auto action the state
    declares replaces the whole category. Named lookups that miss locally are
    delegated to the parent catalog.
    """

    def __init__(
        self,
        owner: str,
        *,
        auto_actions: AutoActionRegistry | None = None,
        parent: ActionCatalog | None = None,
        replace_auto_actions: bool = False,
        reject_duplicate_names: bool = False,
    ) -> None:
        self.owner = owner
        self.parent = parent
        self._named: dict[str, ActionDefinition] = {}
        self._auto = auto_actions if auto_actions is not None else AutoActionRegistry()
        self._replace_auto_actions = replace_auto_actions
        self._reject_duplicate_names = reject_duplicate_names
        self._frozen = False

    @classmethod
    def for_child(
        cls, parent: ActionCatalog, owner: str, *, reject_duplicate_names: bool = False
    ) -> ActionCatalog:
        """Return a catalog seeded from ``parent`` for a nested scope."""
        return cls(
            owner,
            auto_actions=parent.auto_actions.clone(),
            parent=parent,
            replace_auto_actions=True,
            reject_duplicate_names=reject_duplicate_names,
        )

    @property
    def action_definition_map(self) -> typ.Mapping[str, ActionDefinition]:
        return types.MappingProxyType(self._named)

    @property
    def auto_actions(self) -> AutoActionRegistry:
        return self._auto

    def register(self, definition: ActionDefinition) -> None:
        """Add a declared action to this scope.

        Raises
        ------
        ModuleConfigError
            If the name is already declared and duplicates are rejected.
        ModuleInternalError
            If the catalog has been frozen.
        """
        if self._frozen:
            msg = f"Action catalog for {self.owner} is frozen"
            raise ModuleInternalError(msg)

        category = definition.auto_action_type
        if category is not None:
            if self._replace_auto_actions:
                self._auto.replace(category, definition)
            else:
                self._auto.insert(category, definition)
            return

        if definition.name in self._named:
            if self._reject_duplicate_names:
                msg = f"Action '{definition.name}' is declared more than once in {self.owner}"
                raise ModuleConfigError(msg)
            logger.warning(
                "duplicate_action_overwritten owner=%s action=%s", self.owner, definition.name
            )
        self._named[definition.name] = definition

    def get_local(self, action_name: str) -> ActionDefinition | None:
        return self._named.get(action_name)

    def lookup(self, action_name: str) -> ActionDefinition | None:
        """Return the named action from this scope or, failing that, the parent's."""
        definition = self._named.get(action_name)
        if definition is None and self.parent is not None:
            return self.parent.lookup(action_name)
        return definition

    def get_auto_actions(self, category: AutoActionType) -> tuple[ActionDefinition, ...]:
        return self._auto.get(category)

    def definitions(self) -> cabc.Iterator[ActionDefinition]:
        """Yield named actions, then every auto action in registry order."""
        yield from self._named.values()
        yield from self._auto.values()

    def freeze(self) -> ActionCatalog:
        self._frozen = True
        self._auto.freeze()
        return self

    def __repr__(self) -> str:
        return f"ActionCatalog({self.owner!r}, named={len(self._named)}, auto={len(self._auto)})"


__all__ = ["ActionCatalog"]
