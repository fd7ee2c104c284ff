"""Widget-type catalogue consumed when resolving rendered fields.

Each :class:`WidgetBuilderType` names the builder that renders a control and
whether that control triggers an action. :class:`WidgetType` is what markup
refers to through the ``widget`` attribute; several widget names may share a
builder.

Example
-------
>>> from pageflow.datanode.widgets import WidgetType
>>> WidgetType.from_string("link").builder_type.is_action
True
>>> WidgetType.from_string("dropdown").builder_type.name
'SELECTOR'
"""

from __future__ import annotations

import dataclasses as dc
import enum

from ..errors import ModuleInternalError


class WidgetBuilderType(enum.Enum):
    """Builders available to the renderer, with their action flag."""

    INPUT = ("input", False)
    PASSWORD = ("password", False)
    DATE = ("date", False)
    TEXT = ("text", False)
    HTML = ("html", False)
    SELECTOR = ("selector", False)
    RADIO = ("radio", False)
    TICKBOX = ("tickbox", False)
    FILE = ("file", False)
    BUTTON = ("button", True)
    LINK = ("link", True)
    IMAGE_BUTTON = ("image-button", True)

    def __init__(self, widget_name: str, is_action: bool) -> None:
        self.widget_name = widget_name
        self.is_action = is_action


@dc.dataclass(frozen=True, slots=True)
class WidgetType:
    """A widget name as used in markup and the builder that renders it."""

    name: str
    builder_type: WidgetBuilderType

    @classmethod
    def from_builder_type(cls, builder_type: WidgetBuilderType) -> WidgetType:
        return _CATALOGUE[builder_type.widget_name]

    @classmethod
    def from_string(cls, value: str, node_name: str | None = None) -> WidgetType:
        """Return the widget type called ``value``.

        Raises
        ------
        ModuleInternalError
            If ``value`` is not a recognised widget name.
        """
        widget_type = _CATALOGUE.get(value.strip().lower())
        if widget_type is None:
            where = f" on node '{node_name}'" if node_name else ""
            msg = f"Unrecognised widget type '{value}'{where}"
            raise ModuleInternalError(msg)
        return widget_type


_ALIASES: dict[str, WidgetBuilderType] = {
    "checkbox": WidgetBuilderType.TICKBOX,
    "dropdown": WidgetBuilderType.SELECTOR,
    "static-text": WidgetBuilderType.TEXT,
    "submit": WidgetBuilderType.BUTTON,
}

_CATALOGUE: dict[str, WidgetType] = {
    builder.widget_name: WidgetType(builder.widget_name, builder) for builder in WidgetBuilderType
}
_CATALOGUE.update({alias: WidgetType(alias, builder) for alias, builder in _ALIASES.items()})


__all__ = ["WidgetBuilderType", "WidgetType"]
