"""Inputs shared by every evaluated node: schema metadata and evaluation context."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

if typ.TYPE_CHECKING:
    from ..state import State


class NodeAttribute(enum.Enum):
    """Attributes consulted while resolving a rendered node."""

    WIDGET = "widget"
    ACTION = "action"
    RUN = "run"


@dc.dataclass(frozen=True, slots=True)
class NodeInfo:
    """Static schema metadata for one data node.

    Attributes
    ----------
    name : str
        Element name of the node.
    path : str
        Absolute path of the node in the data document.
    data_type : str
        Schema type, for example ``xs:string`` or ``xs:date``.
    attributes : dict[str, str]
        Presentation attributes declared on the schema element.
    """

    name: str
    path: str
    data_type: str = "xs:string"
    attributes: dict[str, str] = dc.field(default_factory=dict)


@dc.dataclass(frozen=True, slots=True)
class EvaluatedPresentationNode:
    """Attributes of a presentation node after expression evaluation."""

    name: str
    attributes: dict[str, str] = dc.field(default_factory=dict)


@dc.dataclass(frozen=True, slots=True)
class NodeEvaluationContext:
    """Request-time facts used to decide what a node may do."""

    state: State
    plus_privilege: bool = False
    disabled_actions: frozenset[str] = frozenset()

    def is_action_executable(self, action_name: str) -> bool:
        return action_name not in self.disabled_actions


__all__ = ["EvaluatedPresentationNode", "NodeAttribute", "NodeEvaluationContext", "NodeInfo"]
