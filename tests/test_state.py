"""Unit tests for state construction.

These tests build states from the shared ``orders`` module and from ad-hoc
``fm:state`` nodes to cover naming rules, page and named buffers, attribute
inheritance, implicated data definitions, stored XPath delegation, the
replace-on-declare auto-action override and post-construction immutability.

Usage
-----
Run ``pytest tests/test_state.py -v``.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import pytest

from pageflow import ModuleConfigError, ModuleInternalError, State, parse_module
from pageflow.actions import AutoActionType
from pageflow.doctype import HtmlDoctype

if typ.TYPE_CHECKING:
    from pageflow import Module
    from pageflow.metadata import MetadataNode

    StateNodeFactory = typ.Callable[..., MetadataNode]


def test_state_exposes_name_and_title(orders_module: Module) -> None:
    """Name and title should come from the state element."""
    state = orders_module.get_state("list")
    assert state.name == "list"
    assert state.title == "Order list"
    assert orders_module.get_state("edit").title == "", "Missing title should default to ''"


@pytest.mark.parametrize("name", [None, "", "   "])
def test_missing_or_blank_name_is_config_error(
    orders_module: Module, state_node: StateNodeFactory, name: str | None
) -> None:
    """A state without a usable name must be rejected at construction."""
    with pytest.raises(ModuleConfigError, match="No name attribute"):
        State.create(orders_module, state_node("", name=name))


def test_missing_module_is_internal_error(state_node: StateNodeFactory) -> None:
    """Passing no module is a caller bug rather than a configuration problem."""
    with pytest.raises(ModuleInternalError):
        State.create(None, state_node(""))  # type: ignore[arg-type]


def test_state_name_is_immutable(orders_module: Module) -> None:
    """States are frozen once built."""
    state = orders_module.get_state("list")
    with pytest.raises(dc.FrozenInstanceError):
        state.name = "renamed"  # type: ignore[misc]


def test_two_set_pages_is_config_error(
    orders_module: Module, state_node: StateNodeFactory
) -> None:
    """A state may declare at most one page buffer."""
    node = state_node(
        "<fm:presentation><fm:set-page/><fm:set-page/></fm:presentation>", name="double"
    )
    with pytest.raises(ModuleConfigError, match="more than one set-page") as excinfo:
        State.create(orders_module, node)
    assert "'double'" in str(excinfo.value)


def test_no_set_page_leaves_buffer_and_doctype_absent(orders_module: Module) -> None:
    """Zero set-page elements is valid and leaves both values unset."""
    state = orders_module.get_state("edit")
    assert state.set_page_buffer is None
    assert state.document_type is None


def test_set_page_is_renamed_and_doctype_resolved(orders_module: Module) -> None:
    """The page buffer takes the reserved name and resolves its doctype."""
    state = orders_module.get_state("list")
    page = state.set_page_buffer
    assert page is not None
    assert page.name == "set-page"
    assert page.child_names == ("html",)
    assert state.document_type is HtmlDoctype.HTML5
    assert state.document_type.declaration == "<!DOCTYPE html>"


@pytest.mark.parametrize("attribute", ['', ' document-type="NOT-A-DOCTYPE"'])
def test_unknown_or_missing_doctype_is_tolerated(
    orders_module: Module, state_node: StateNodeFactory, attribute: str
) -> None:
    """Unrecognised or absent document types resolve to None."""
    node = state_node(f"<fm:presentation><fm:set-page{attribute}/></fm:presentation>")
    state = State.create(orders_module, node)
    assert state.set_page_buffer is not None
    assert state.document_type is None


def test_set_buffers_are_keyed_by_name(orders_module: Module) -> None:
    """Each set-buffer should be retrievable by name."""
    state = orders_module.get_state("list")
    assert sorted(state.parsed_buffers) == ["footer", "header"]
    header = state.get_parsed_buffer("header")
    assert header is not None
    assert header.child_names == ("h1",)
    assert state.get_parsed_buffer("missing") is None


def test_duplicate_buffer_name_replaces_earlier(
    orders_module: Module, state_node: StateNodeFactory
) -> None:
    """A later set-buffer with the same name wins."""
    node = state_node(
        "<fm:presentation>"
        '<fm:set-buffer name="x"><fm:first/></fm:set-buffer>'
        '<fm:set-buffer name="x"><fm:second/></fm:set-buffer>'
        "</fm:presentation>"
    )
    buffer = State.create(orders_module, node).get_parsed_buffer("x")
    assert buffer is not None
    assert buffer.child_names == ("second",)


def test_unnamed_set_buffer_is_config_error(
    orders_module: Module, state_node: StateNodeFactory
) -> None:
    node = state_node("<fm:presentation><fm:set-buffer/></fm:presentation>")
    with pytest.raises(ModuleConfigError, match="no name"):
        State.create(orders_module, node)


def test_state_attributes_override_module_attributes(orders_module: Module) -> None:
    """State display attributes overlay the module's, later write winning."""
    state = orders_module.get_state("list")
    assert dict(state.state_attributes) == {"a": "1", "b": "9", "c": "3"}
    assert dict(orders_module.module_attributes) == {"a": "1", "b": "2"}, (
        "Module attributes must not be changed by state overrides"
    )


def test_state_without_attributes_inherits_module_set(orders_module: Module) -> None:
    assert dict(orders_module.get_state("edit").state_attributes) == {"a": "1", "b": "2"}


def test_empty_display_attribute_defaults_to_empty_string(
    orders_module: Module, state_node: StateNodeFactory
) -> None:
    node = state_node(
        "<fm:presentation><fm:display-attr-list>"
        '<fm:attr name="a"/>'
        "</fm:display-attr-list></fm:presentation>"
    )
    assert State.create(orders_module, node).state_attributes["a"] == ""


def test_implicated_data_definitions_preserve_order(orders_module: Module) -> None:
    definitions = orders_module.get_state("list").implicated_data_definitions
    assert [item.data_definition_name for item in definitions] == ["order-lines", "customers"]
    assert definitions[0].match == ":{order-root}"
    assert definitions[1].match == "."


def test_stored_xpaths_delegate_to_module(orders_module: Module) -> None:
    """Local definitions win; missing ones come from the module resolver."""
    resolver = orders_module.get_state("list").stored_xpath_resolver
    assert resolver.resolve_xpath("order-root") == "/*/LIST/ORDER"
    assert resolver.resolve_xpath("shared") == "/*/SHARED"
    assert resolver.resolve_xpath("unknown") is None
    edit_resolver = orders_module.get_state("edit").stored_xpath_resolver
    assert edit_resolver.resolve_xpath("order-root") == "/*/ORDER"


def test_named_actions_exclude_auto_actions(orders_module: Module) -> None:
    """Only non-auto actions declared in the state appear in its action map."""
    state = orders_module.get_state("list")
    assert sorted(state.action_definition_map) == ["refresh", "save"]
    assert not any(action.is_auto_action for action in state.action_definition_map.values())


def test_state_auto_action_replaces_module_category(orders_module: Module) -> None:
    """A state auto action replaces every module entry in its category."""
    state = orders_module.get_state("list")
    names = [action.name for action in state.get_auto_actions(AutoActionType.STATE_INIT)]
    assert names == ["auto-state-init-list"]
    assert state.get_auto_actions(AutoActionType.STATE_INIT)[0].state_name == "list"


def test_untouched_categories_keep_module_entries(orders_module: Module) -> None:
    """Categories a state does not declare are inherited in module order."""
    list_state = orders_module.get_state("list")
    assert [a.name for a in list_state.get_auto_actions(AutoActionType.ACTION_INIT)] == [
        "auto-action-init"
    ]
    edit_state = orders_module.get_state("edit")
    assert [a.name for a in edit_state.get_auto_actions(AutoActionType.STATE_INIT)] == [
        "auto-state-init",
        "auto-state-init-audit",
    ]
    assert edit_state.get_auto_actions(AutoActionType.CALLBACK_INIT) == ()


def test_state_override_leaves_module_registry_untouched(orders_module: Module) -> None:
    module_entries = orders_module.auto_action_registry.get(AutoActionType.STATE_INIT)
    assert [action.name for action in module_entries] == [
        "auto-state-init",
        "auto-state-init-audit",
    ]


def test_state_is_read_only_after_construction(orders_module: Module) -> None:
    """Mappings are read-only views and the registry rejects mutation."""
    state = orders_module.get_state("list")
    with pytest.raises(TypeError):
        state.state_attributes["a"] = "x"  # type: ignore[index]
    with pytest.raises(TypeError):
        state.action_definition_map["new"] = state.action_definition_map["save"]  # type: ignore[index]
    with pytest.raises(ModuleInternalError, match="frozen"):
        state.action_catalog.auto_actions.remove_all(AutoActionType.STATE_INIT)


def test_identical_metadata_builds_equal_states(
    orders_module: Module, state_node: StateNodeFactory
) -> None:
    """Construction is deterministic for identical input."""
    body = (
        "<fm:presentation><fm:display-attr-list>"
        '<fm:attr name="z">26</fm:attr>'
        "</fm:display-attr-list></fm:presentation>"
        "<fm:action-list>"
        '<fm:action name="go"><fm:go-to state="list"/></fm:action>'
        '<fm:action name="auto-state-final"/>'
        "</fm:action-list>"
    )
    first = State.create(orders_module, state_node(body, name="twin"))
    second = State.create(orders_module, state_node(body, name="twin"))
    assert dict(first.action_definition_map) == dict(second.action_definition_map)
    assert dict(first.state_attributes) == dict(second.state_attributes)
    assert first.action_catalog.auto_actions == second.action_catalog.auto_actions


def test_duplicate_state_names_are_config_error(orders_xml: str) -> None:
    duplicated = orders_xml.replace('<fm:state name="edit">', '<fm:state name="list">')
    with pytest.raises(ModuleConfigError, match="defined more than once"):
        parse_module(duplicated)
