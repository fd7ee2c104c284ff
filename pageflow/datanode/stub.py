"""Stub evaluated node used when finding possible columns for list set-outs."""

from __future__ import annotations

import typing as typ

from ..errors import ModuleInternalError
from .evaluated import EvaluatedNodeInfo
from .node_info import NodeAttribute
from .visibility import NodeVisibility
from .widgets import WidgetBuilderType, WidgetType

if typ.TYPE_CHECKING:
    from .evaluated import FieldMgr
    from .node_info import EvaluatedPresentationNode, NodeEvaluationContext, NodeInfo
    from .node_list import EvaluatedNodeInfoList


class EvaluatedNodeInfoStub(EvaluatedNodeInfo):
    """Column probe for list rendering; never backs an actual input field.

    An action control that cannot run is knocked down to
    :attr:`NodeVisibility.DENIED` unless the viewer holds plus privilege.
    """

    def __init__(
        self,
        parent: EvaluatedNodeInfoList | None,
        evaluated_presentation_node: EvaluatedPresentationNode,
        node_evaluation_context: NodeEvaluationContext,
        node_visibility: NodeVisibility,
        node_info: NodeInfo,
    ) -> None:
        super().__init__(
            parent,
            evaluated_presentation_node,
            node_evaluation_context,
            node_visibility,
            node_info,
        )
        action_name = self.action_name
        if (
            self.widget_builder_type.is_action
            and action_name is not None
            and action_name.strip()
            and not self.is_runnable()
            and not self.is_plus_widget()
        ):
            self._set_visibility(NodeVisibility.DENIED)

    def _resolve_widget_type(self) -> WidgetType:
        widget = self.get_string_attribute(NodeAttribute.WIDGET)
        if widget is not None:
            return WidgetType.from_string(widget, self.node_info.name)
        return WidgetType.from_builder_type(WidgetBuilderType.INPUT)

    def _unsupported(self) -> ModuleInternalError:
        msg = (
            f"{type(self).__name__} cannot provide a FieldMgr - only applicable to "
            "items, actions and cellmates"
        )
        return ModuleInternalError(msg)

    def get_field_mgr(self) -> FieldMgr:
        raise self._unsupported()

    def get_external_field_name(self) -> str:
        raise self._unsupported()

    def get_external_fox_id(self) -> str:
        raise self._unsupported()


__all__ = ["EvaluatedNodeInfoStub"]
