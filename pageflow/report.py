"""Summaries of resolved states for operators and tooling.

:func:`summarise_state` flattens a :class:`~pageflow.state.State` into plain
data. :class:`StateReportRenderer` turns that summary into a text report using
the Jinja template in ``pageflow/templates`` or into indented JSON with msgspec.

>>> from pageflow import parse_module
>>> from pageflow.report import StateReportRenderer, summarise_state
>>> module = parse_module('<module name="m"><state-list><state name="s"/></state-list></module>')
>>> summary = summarise_state(module.get_state("s"))
>>> summary.name in StateReportRenderer().render_json(summary)
True
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

import msgspec.json
from jinja2 import Environment, FileSystemLoader

if typ.TYPE_CHECKING:
    from .state import State


@dc.dataclass(slots=True)
class ActionSummary:
    """One action visible from a state."""

    name: str
    scope: str
    title: str
    command_count: int


@dc.dataclass(slots=True)
class StateSummary:
    """Plain-data view of a resolved state."""

    module: str
    name: str
    title: str
    document_type: str | None
    doctype_declaration: str | None
    attributes: dict[str, str]
    actions: list[ActionSummary]
    auto_actions: dict[str, list[str]]
    buffers: list[str]
    has_set_page: bool
    stored_xpaths: dict[str, str]
    implicated_data_definitions: list[str]


def summarise_state(state: State) -> StateSummary:
    """Collect the resolved facts about ``state`` into a :class:`StateSummary`.

    Actions list the state's own named actions first, then module-level
    actions the state does not shadow.
    """
    own = state.action_definition_map
    actions = [
        ActionSummary(name, "state", definition.title, len(definition.commands))
        for name, definition in sorted(own.items())
    ]
    actions.extend(
        ActionSummary(name, "module", definition.title, len(definition.commands))
        for name, definition in sorted(state.module.action_definition_map.items())
        if name not in own
    )
    registry = state.action_catalog.auto_actions
    return StateSummary(
        module=state.module.name,
        name=state.name,
        title=state.title,
        document_type=state.document_type.name if state.document_type else None,
        doctype_declaration=state.document_type.declaration if state.document_type else None,
        attributes=dict(sorted(state.state_attributes.items())),
        actions=actions,
        auto_actions={
            category.prefix: [action.qualified_name for action in registry.get(category)]
            for category in registry.categories()
        },
        buffers=sorted(state.parsed_buffers),
        has_set_page=state.set_page_buffer is not None,
        stored_xpaths=dict(sorted(state.stored_xpath_resolver.local_definitions.items())),
        implicated_data_definitions=[
            definition.data_definition_name
            for definition in state.implicated_data_definitions
        ],
    )


class StateReportRenderer:
    """Render state summaries as text or JSON."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the renderer and its Jinja environment."""
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.template = self.env.get_template("state_summary.jinja")

    def render_text(self, summary: StateSummary) -> str:
        text = self.template.render(state=summary)
        if not text.endswith("\n"):
            text += "\n"
        return text

    def render_json(self, summary: StateSummary) -> str:
        encoded = msgspec.json.format(msgspec.json.encode(summary), indent=2)
        return encoded.decode("utf-8") + "\n"


__all__ = ["ActionSummary", "StateReportRenderer", "StateSummary", "summarise_state"]
