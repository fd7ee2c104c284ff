"""Module definitions: the owner of states and module-wide actions.

A module is loaded from a single XML document. Module-level display
attributes, actions and stored XPaths are resolved first; every state in
``state-list`` is then built against them. The module is the sole owner of its
states; states keep a read-only back-reference for fallback lookups.

Example
-------
>>> from pageflow.module import parse_module
>>> module = parse_module('<module name="orders"><state-list><state name="list"/></state-list></module>')
>>> sorted(module.states)
['list']
"""

from __future__ import annotations

import logging
import types
import typing as typ

from ._constants import ACTION_LIST_PATH, DISPLAY_ATTR_PATH, STATE_LIST_PATH, XPATH_LIST_PATH
from .actions import ActionCatalog, ActionDefinition
from .errors import ModuleConfigError, StateNotFoundError
from .metadata import load_metadata, parse_metadata
from .state import State
from .xpath import StoredXPathResolver

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .actions import AutoActionRegistry
    from .config import EngineConfig
    from .metadata import MetadataNode

logger = logging.getLogger(__name__)


class Module:
    """Top-level declarative unit owning states, shared actions and attributes."""

    def __init__(
        self,
        name: str,
        *,
        module_attributes: typ.Mapping[str, str] | None = None,
        stored_xpath_resolver: StoredXPathResolver | None = None,
        reject_duplicate_actions: bool = False,
    ) -> None:
        self.name = name
        self.reject_duplicate_actions = reject_duplicate_actions
        self._module_attributes = dict(module_attributes or {})
        self._stored_xpath_resolver = stored_xpath_resolver or StoredXPathResolver()
        self._action_catalog = ActionCatalog(
            f"module '{name}'", reject_duplicate_names=reject_duplicate_actions
        )
        self._states: dict[str, State] = {}

    @classmethod
    def from_metadata(
        cls, metadata: MetadataNode, *, reject_duplicate_actions: bool = False
    ) -> Module:
        """Build a module and all of its states from the module element.

        Raises
        ------
        ModuleConfigError
            If the module has no name, two states share a name, or any state,
            action or stored XPath declaration is malformed.
        """
        name = (metadata.attr("name") or "").strip()
        if not name:
            msg = "Module definition has no name attribute"
            raise ModuleConfigError(msg)

        attributes: dict[str, str] = {}
        for node in metadata.select(DISPLAY_ATTR_PATH):
            attr_name = (node.attr("name") or "").strip()
            if not attr_name:
                msg = f"Display attribute on line {node.sourceline} of module '{name}' has no name"
                raise ModuleConfigError(msg)
            attributes[attr_name] = node.value

        module = cls(
            name,
            module_attributes=attributes,
            stored_xpath_resolver=StoredXPathResolver.create_from_nodes(
                metadata.select(XPATH_LIST_PATH)
            ),
            reject_duplicate_actions=reject_duplicate_actions,
        )
        for node in metadata.select(ACTION_LIST_PATH):
            module.add_action(ActionDefinition.create(node, module, None))
        module.action_catalog.freeze()

        for node in metadata.select(STATE_LIST_PATH):
            module.add_state(State.create(module, node))

        logger.debug(
            "module_built module=%s states=%d actions=%d auto_actions=%d",
            name,
            len(module.states),
            len(module.action_definition_map),
            len(module.auto_action_registry),
        )
        return module

    @property
    def module_attributes(self) -> typ.Mapping[str, str]:
        return types.MappingProxyType(self._module_attributes)

    @property
    def action_catalog(self) -> ActionCatalog:
        return self._action_catalog

    @property
    def action_definition_map(self) -> typ.Mapping[str, ActionDefinition]:
        return self._action_catalog.action_definition_map

    @property
    def auto_action_registry(self) -> AutoActionRegistry:
        return self._action_catalog.auto_actions

    @property
    def stored_xpath_resolver(self) -> StoredXPathResolver:
        return self._stored_xpath_resolver

    @property
    def states(self) -> typ.Mapping[str, State]:
        return types.MappingProxyType(self._states)

    def add_action(self, definition: ActionDefinition) -> None:
        """Register a module-level action; auto actions accumulate per category."""
        self._action_catalog.register(definition)

    def add_state(self, state: State) -> None:
        """Take ownership of ``state``.

        Raises
        ------
        ModuleConfigError
            If the state belongs to another module or its name is already used.
        """
        if state.module is not self:
            msg = f"State '{state.name}' was built for module '{state.module.name}', not '{self.name}'"
            raise ModuleConfigError(msg)
        if state.name in self._states:
            msg = f"State '{state.name}' is defined more than once in module '{self.name}'"
            raise ModuleConfigError(msg)
        self._states[state.name] = state

    def get_state(self, state_name: str) -> State:
        """Return the named state.

        Raises
        ------
        StateNotFoundError
            If the module declares no such state.
        """
        try:
            return self._states[state_name]
        except KeyError as exc:
            raise StateNotFoundError(state_name, self.name) from exc

    def validate(self) -> None:
        """Validate module-level actions, then each state in declaration order."""
        for definition in self._action_catalog.definitions():
            definition.validate(self)
        for state in self._states.values():
            state.validate(self)

    def __repr__(self) -> str:
        return f"Module({self.name!r}, states={sorted(self._states)})"


def parse_module(source: str | bytes, *, reject_duplicate_actions: bool = False) -> Module:
    """Parse module definition XML text into a :class:`Module`."""
    return Module.from_metadata(
        parse_metadata(source), reject_duplicate_actions=reject_duplicate_actions
    )


def load_module(path: Path, *, reject_duplicate_actions: bool = False) -> Module:
    """Load a module definition from an XML file.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ModuleConfigError
        If the document is malformed or declares an invalid module.
    """
    return Module.from_metadata(
        load_metadata(path), reject_duplicate_actions=reject_duplicate_actions
    )


def load_modules(config: EngineConfig, keys: cabc.Iterable[str] | None = None) -> dict[str, Module]:
    """Load the configured modules, optionally restricted to ``keys``.

    Every module is fully built before this returns, so cross-state action
    lookups never observe a partially loaded module.
    """
    selected = list(keys) if keys is not None else list(config.modules)
    modules: dict[str, Module] = {}
    for key in selected:
        source = config.get_module(key)
        logger.debug("module_loading key=%s path=%s", key, source.path)
        modules[key] = load_module(
            source.path, reject_duplicate_actions=source.reject_duplicate_actions
        )
    return modules


__all__ = ["Module", "load_module", "load_modules", "parse_module"]
