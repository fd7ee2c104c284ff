"""Eligibility resolution for rendered, action-backed fields.

Exports
-------
- ``EvaluatedNodeInfo``: base capabilities (widget type, visibility).
- ``EvaluatedNodeInfoItem``: variant that backs a real input field.
- ``EvaluatedNodeInfoStub``: column probe that narrows non-runnable actions
  to denied and refuses field accessors.
- ``EvaluatedNodeInfoList``: parent list with candidate-column probing.
"""

from .evaluated import EvaluatedNodeInfo, EvaluatedNodeInfoItem, FieldMgr
from .node_info import EvaluatedPresentationNode, NodeAttribute, NodeEvaluationContext, NodeInfo
from .node_list import EvaluatedNodeInfoList
from .stub import EvaluatedNodeInfoStub
from .visibility import NodeVisibility
from .widgets import WidgetBuilderType, WidgetType

__all__ = [
    "EvaluatedNodeInfo",
    "EvaluatedNodeInfoItem",
    "EvaluatedNodeInfoList",
    "EvaluatedNodeInfoStub",
    "EvaluatedPresentationNode",
    "FieldMgr",
    "NodeAttribute",
    "NodeEvaluationContext",
    "NodeInfo",
    "NodeVisibility",
    "WidgetBuilderType",
    "WidgetType",
]
