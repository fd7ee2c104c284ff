"""Parent container for evaluated nodes rendered as a list set-out."""

from __future__ import annotations

import typing as typ

from .stub import EvaluatedNodeInfoStub
from .visibility import NodeVisibility

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .evaluated import EvaluatedNodeInfo
    from .node_info import EvaluatedPresentationNode, NodeEvaluationContext, NodeInfo


class EvaluatedNodeInfoList:
    """Evaluated list set-out holding its child nodes."""

    def __init__(self, name: str, *, fox_id_prefix: str = "") -> None:
        self.name = name
        self.fox_id_prefix = fox_id_prefix
        self.children: list[EvaluatedNodeInfo] = []

    def add_child(self, child: EvaluatedNodeInfo) -> None:
        self.children.append(child)

    def candidate_columns(
        self,
        presentation_node: EvaluatedPresentationNode,
        context: NodeEvaluationContext,
        node_infos: cabc.Iterable[NodeInfo],
        *,
        visibilities: typ.Mapping[str, NodeVisibility] | None = None,
        default_visibility: NodeVisibility = NodeVisibility.VIEW,
    ) -> list[EvaluatedNodeInfoStub]:
        """Probe each node as a possible column; keep and return those not denied.

        Parameters
        ----------
        presentation_node : EvaluatedPresentationNode
            The set-out node whose attributes apply to every column.
        context : NodeEvaluationContext
            Request context used to decide runnability.
        node_infos : Iterable[NodeInfo]
            Candidate column nodes in display order.
        visibilities : Mapping[str, NodeVisibility], optional
            Upstream visibility per node name.
        default_visibility : NodeVisibility
            Visibility for nodes missing from ``visibilities``.
        """
        resolved = visibilities or {}
        columns: list[EvaluatedNodeInfoStub] = []
        for node_info in node_infos:
            stub = EvaluatedNodeInfoStub(
                self,
                presentation_node,
                context,
                resolved.get(node_info.name, default_visibility),
                node_info,
            )
            if stub.visibility is not NodeVisibility.DENIED:
                self.add_child(stub)
                columns.append(stub)
        return columns

    def __repr__(self) -> str:
        return f"EvaluatedNodeInfoList({self.name!r}, children={len(self.children)})"


__all__ = ["EvaluatedNodeInfoList"]
