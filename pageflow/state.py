"""Resolved, immutable page-flow states.

A :class:`State` is built once, while its module loads, from the module and the
state's ``fm:state`` element. Construction resolves everything a request needs:
the effective display attributes, the pre-parsed buffers, the named actions,
the auto-action registry (module defaults with state overrides applied) and a
stored-XPath resolver chained to the module's. After construction nothing on a
state changes, so request handlers may share states freely.

Example
-------
>>> from pageflow import parse_module
>>> module = parse_module(
...     '<module name="m"><state-list>'
...     '<state name="home"><action-list><action name="save"/></action-list></state>'
...     '</state-list></module>'
... )
>>> module.get_state("home").get_action_by_name("save").name
'save'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import types
import typing as typ

from ._constants import (
    ACTION_LIST_PATH,
    DISPLAY_ATTR_PATH,
    IMPLICATED_DATA_DEFINITION_PATH,
    SET_PAGE_BUFFER_NAME,
    STATE_PATH_SEPARATOR,
    STATE_SET_BUFFER_PATH,
    STATE_SET_PAGE_PATH,
    XPATH_LIST_PATH,
)
from .actions import ActionCatalog, ActionDefinition
from .attributes import merge_attributes
from .buffers import BufferPresentationNode, parse_buffer
from .datadefinition import ImplicatedDataDefinition
from .doctype import HtmlDoctype
from .errors import ActionNotFoundError, ModuleConfigError, ModuleInternalError
from .metadata import Cardinality
from .xpath import StoredXPathResolver

if typ.TYPE_CHECKING:
    from .actions import AutoActionType
    from .metadata import MetadataNode
    from .module import Module

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True, eq=False)
class State:
    """One page or server-side step of a module.

    Attributes
    ----------
    module : Module
        Owning module, used for fallback lookups. Not owned by the state.
    name : str
        Programmatic name, unique within the module.
    title : str
        Human-readable title; empty when not declared.
    document_type : HtmlDoctype or None
        Doctype requested by the page buffer, or ``None`` when unspecified.
    state_attributes : Mapping[str, str]
        Module display attributes overlaid with the state's own.
    action_catalog : ActionCatalog
        The state's named actions and auto-action registry.
    parsed_buffers : Mapping[str, BufferPresentationNode]
        Buffers declared with ``set-buffer``, keyed by name.
    set_page_buffer : BufferPresentationNode or None
        The ``set-page`` buffer, if declared.
    stored_xpath_resolver : StoredXPathResolver
        State-level stored XPaths, delegating to the module's resolver.
    implicated_data_definitions : tuple[ImplicatedDataDefinition, ...]
        Declared data dependencies in declaration order.
    """

    module: Module = dc.field(repr=False)
    name: str
    title: str
    document_type: HtmlDoctype | None
    state_attributes: typ.Mapping[str, str] = dc.field(repr=False)
    action_catalog: ActionCatalog = dc.field(repr=False)
    parsed_buffers: typ.Mapping[str, BufferPresentationNode] = dc.field(repr=False)
    set_page_buffer: BufferPresentationNode | None = dc.field(repr=False)
    stored_xpath_resolver: StoredXPathResolver = dc.field(repr=False)
    implicated_data_definitions: tuple[ImplicatedDataDefinition, ...] = dc.field(
        default=(), repr=False
    )

    @classmethod
    def create(cls, module: Module, metadata: MetadataNode) -> State:
        """Build a fully resolved state from its ``fm:state`` element.

        Parameters
        ----------
        module : Module
            The module the state belongs to. Its attributes, actions and
            stored XPaths must already be loaded.
        metadata : MetadataNode
            The state element.

        Returns
        -------
        State
            The resolved state. It is not registered with ``module``; the
            module loader does that.

        Raises
        ------
        ModuleInternalError
            If ``module`` is ``None``.
        ModuleConfigError
            If the state has no name, declares more than one ``set-page``, or
            any nested declaration is malformed.
        """
        if module is None:
            msg = "State construction was passed a module reference which was None"
            raise ModuleInternalError(msg)

        state_name = (metadata.attr("name") or "").strip()
        if not state_name:
            msg = f'No name attribute found for a state in module "{module.name}".'
            raise ModuleConfigError(msg)

        set_page_buffer, document_type = _parse_set_page(metadata, state_name)
        catalog = _build_action_catalog(metadata, module, state_name)

        state = cls(
            module=module,
            name=state_name,
            title=metadata.attr("title") or "",
            document_type=document_type,
            state_attributes=types.MappingProxyType(
                merge_attributes(module.module_attributes, _display_attributes(metadata))
            ),
            action_catalog=catalog,
            parsed_buffers=types.MappingProxyType(_parse_buffers(metadata)),
            set_page_buffer=set_page_buffer,
            stored_xpath_resolver=StoredXPathResolver.create_from_nodes(
                metadata.select(XPATH_LIST_PATH), module.stored_xpath_resolver
            ),
            implicated_data_definitions=tuple(
                ImplicatedDataDefinition.from_metadata(node)
                for node in metadata.select(IMPLICATED_DATA_DEFINITION_PATH)
            ),
        )
        logger.debug(
            "state_built module=%s state=%s actions=%d auto_actions=%d buffers=%d",
            module.name,
            state_name,
            len(catalog.action_definition_map),
            len(catalog.auto_actions),
            len(state.parsed_buffers),
        )
        return state

    @property
    def action_definition_map(self) -> typ.Mapping[str, ActionDefinition]:
        """Named (non-auto) actions declared directly in this state."""
        return self.action_catalog.action_definition_map

    def get_auto_actions(self, category: AutoActionType) -> tuple[ActionDefinition, ...]:
        """Return the auto actions registered for ``category`` in registry order."""
        return self.action_catalog.get_auto_actions(category)

    def get_action_by_name(self, action_name: str | None) -> ActionDefinition:
        """Resolve an action reference made from this state.

        ``"other-state/action"`` names an action declared directly in
        ``other-state`` and never falls back to the module. A bare name is
        looked up in this state, then in the module-level action list.

        Raises
        ------
        ModuleInternalError
            If ``action_name`` is ``None`` or blank.
        StateNotFoundError
            If a qualified name refers to a state the module does not have.
        ActionNotFoundError
            If no action of that name is found.
        """
        if action_name is None or not action_name.strip():
            msg = (
                "Null/blank value passed to get_action_by_name, perhaps an element "
                "has a run attribute but no action attribute"
            )
            raise ModuleInternalError(msg)

        state_part, _, action_part = action_name.rpartition(STATE_PATH_SEPARATOR)
        if state_part:
            target = self.module.get_state(state_part)
            definition = target.action_catalog.get_local(action_part)
            if definition is None:
                msg = f"Action {action_part} could not be found in state {state_part}"
                raise ActionNotFoundError(msg, action_name=action_part, state_name=state_part)
            return definition

        definition = self.action_catalog.lookup(action_part)
        if definition is None:
            msg = (
                f"Action {action_part} could not be found in state {self.name} "
                "or module-level action-list"
            )
            raise ActionNotFoundError(msg, action_name=action_part, state_name=self.name)
        return definition

    def get_parsed_buffer(self, buffer_name: str) -> BufferPresentationNode | None:
        """Return the pre-parsed buffer called ``buffer_name``, if declared."""
        return self.parsed_buffers.get(buffer_name)

    def validate(self, module: Module) -> None:
        """Validate every action in this state, stopping at the first failure.

        Named actions are checked first, then the state's auto-action registry.
        Module-level named actions are left to :meth:`Module.validate`.

        Raises
        ------
        ActionValidationError
            For the first action with a structural defect.
        """
        for definition in self.action_catalog.definitions():
            definition.validate(module, self)


def _parse_buffers(metadata: MetadataNode) -> dict[str, BufferPresentationNode]:
    buffers: dict[str, BufferPresentationNode] = {}
    for node in metadata.select(STATE_SET_BUFFER_PATH):
        buffer = parse_buffer(node)
        buffers[buffer.name] = buffer
    return buffers


def _parse_set_page(
    metadata: MetadataNode, state_name: str
) -> tuple[BufferPresentationNode | None, HtmlDoctype | None]:
    """Return the page buffer and its doctype, or ``(None, None)`` when undeclared."""
    selection = metadata.select_one(STATE_SET_PAGE_PATH)
    match selection.cardinality:
        case Cardinality.ABSENT:
            return None, None
        case Cardinality.ONE:
            node = typ.cast("MetadataNode", selection.node)
            buffer = parse_buffer(node, name=SET_PAGE_BUFFER_NAME)
            return buffer, HtmlDoctype.get_by_name_or_none(node.attr("document-type"))
        case _:
            msg = f"A module state cannot have more than one set-page defined: '{state_name}'"
            raise ModuleConfigError(msg)


def _display_attributes(metadata: MetadataNode) -> list[tuple[str, str | None]]:
    overrides: list[tuple[str, str | None]] = []
    for node in metadata.select(DISPLAY_ATTR_PATH):
        name = (node.attr("name") or "").strip()
        if not name:
            msg = f"Display attribute on line {node.sourceline} has no name attribute"
            raise ModuleConfigError(msg)
        overrides.append((name, node.value))
    return overrides


def _build_action_catalog(
    metadata: MetadataNode, module: Module, state_name: str
) -> ActionCatalog:
    catalog = ActionCatalog.for_child(
        module.action_catalog,
        f"state '{state_name}'",
        reject_duplicate_names=module.reject_duplicate_actions,
    )
    for node in metadata.select(ACTION_LIST_PATH):
        catalog.register(ActionDefinition.create(node, module, state_name))
    return catalog.freeze()


__all__ = ["State"]
