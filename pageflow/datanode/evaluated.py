"""Evaluated node information for rendered fields.

An :class:`EvaluatedNodeInfo` combines a data node's schema metadata, the
evaluated presentation node that refers to it and the request context to
decide which widget renders the node and how visible it is. Concrete variants
differ in whether they can back a real input field:
:class:`EvaluatedNodeInfoItem` can, while the column-probing stub in
:mod:`pageflow.datanode.stub` refuses to.
"""

from __future__ import annotations

import abc
import dataclasses as dc
import functools
import logging
import typing as typ

from ..errors import ModuleInternalError
from .node_info import NodeAttribute
from .widgets import WidgetBuilderType, WidgetType

if typ.TYPE_CHECKING:
    from .node_info import EvaluatedPresentationNode, NodeEvaluationContext, NodeInfo
    from .node_list import EvaluatedNodeInfoList
    from .visibility import NodeVisibility

logger = logging.getLogger(__name__)

_DATA_TYPE_BUILDERS: dict[str, WidgetBuilderType] = {
    "xs:boolean": WidgetBuilderType.TICKBOX,
    "xs:date": WidgetBuilderType.DATE,
}


@dc.dataclass(frozen=True, slots=True)
class FieldMgr:
    """Binding between a rendered control and the data node it edits."""

    external_field_name: str
    external_fox_id: str
    widget_type: WidgetType
    visibility: NodeVisibility


class EvaluatedNodeInfo(abc.ABC):
    """Base capabilities shared by every evaluated node: widget and visibility."""

    def __init__(
        self,
        parent: EvaluatedNodeInfoList | None,
        evaluated_presentation_node: EvaluatedPresentationNode,
        node_evaluation_context: NodeEvaluationContext,
        node_visibility: NodeVisibility,
        node_info: NodeInfo,
    ) -> None:
        self.parent = parent
        self.evaluated_presentation_node = evaluated_presentation_node
        self.node_evaluation_context = node_evaluation_context
        self.node_info = node_info
        self._visibility = node_visibility

    @property
    def visibility(self) -> NodeVisibility:
        return self._visibility

    def _set_visibility(self, visibility: NodeVisibility) -> None:
        self._visibility = visibility

    def get_string_attribute(self, attribute: NodeAttribute) -> str | None:
        """Return an attribute value, preferring the presentation node over the schema."""
        value = self.evaluated_presentation_node.attributes.get(attribute.value)
        if value is None:
            value = self.node_info.attributes.get(attribute.value)
        return value

    @property
    def action_name(self) -> str | None:
        return self.get_string_attribute(NodeAttribute.ACTION)

    @functools.cached_property
    def widget_type(self) -> WidgetType:
        return self._resolve_widget_type()

    @property
    def widget_builder_type(self) -> WidgetBuilderType:
        return self.widget_type.builder_type

    def _resolve_widget_type(self) -> WidgetType:
        widget = self.get_string_attribute(NodeAttribute.WIDGET)
        if widget is not None:
            return WidgetType.from_string(widget, self.node_info.name)
        if self.action_name:
            return WidgetType.from_builder_type(WidgetBuilderType.BUTTON)
        builder = _DATA_TYPE_BUILDERS.get(self.node_info.data_type, WidgetBuilderType.INPUT)
        return WidgetType.from_builder_type(builder)

    def is_runnable(self) -> bool:
        """Return whether the node's action exists and may run in this context."""
        action_name = self.action_name
        if action_name is None or not action_name.strip():
            return False
        run = self.get_string_attribute(NodeAttribute.RUN)
        if run is not None and run.strip().lower() == "false":
            return False
        context = self.node_evaluation_context
        try:
            context.state.get_action_by_name(action_name)
        except ModuleInternalError as exc:
            logger.debug(
                "action_not_runnable node=%s action=%s reason=%s",
                self.node_info.name,
                action_name,
                exc,
            )
            return False
        return context.is_action_executable(action_name)

    def is_plus_widget(self) -> bool:
        """Return whether the viewer holds elevated ("plus") privilege."""
        return self.node_evaluation_context.plus_privilege

    @abc.abstractmethod
    def get_field_mgr(self) -> FieldMgr:
        """Return the field manager binding this node to its data."""

    @abc.abstractmethod
    def get_external_field_name(self) -> str:
        """Return the field name used in submitted form data."""

    @abc.abstractmethod
    def get_external_fox_id(self) -> str:
        """Return the id rendered for the control."""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.node_info.name!r}, "
            f"visibility={self._visibility.name})"
        )


class EvaluatedNodeInfoItem(EvaluatedNodeInfo):
    """Evaluated node for an item that backs a real input field."""

    def get_external_field_name(self) -> str:
        return self.node_info.path

    def get_external_fox_id(self) -> str:
        prefix = self.parent.fox_id_prefix if self.parent is not None else ""
        return f"{prefix}{self.node_info.name}"

    def get_field_mgr(self) -> FieldMgr:
        return FieldMgr(
            external_field_name=self.get_external_field_name(),
            external_fox_id=self.get_external_fox_id(),
            widget_type=self.widget_type,
            visibility=self.visibility,
        )


__all__ = ["EvaluatedNodeInfo", "EvaluatedNodeInfoItem", "FieldMgr"]
