"""Data definitions a state declares it depends on."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .errors import ModuleConfigError

if typ.TYPE_CHECKING:
    from .metadata import MetadataNode


@dc.dataclass(frozen=True, slots=True)
class ImplicatedDataDefinition:
    """A declared data dependency.

    Attributes
    ----------
    data_definition_name : str
        Name of the data definition to run.
    match : str
        XPath the data definition is evaluated against; ``"."`` when omitted.
    """

    data_definition_name: str
    match: str = "."

    @classmethod
    def from_metadata(cls, node: MetadataNode) -> ImplicatedDataDefinition:
        name = (node.attr("name") or "").strip()
        if not name:
            msg = f"data-definition on line {node.sourceline} has no name attribute"
            raise ModuleConfigError(msg)
        return cls(data_definition_name=name, match=node.attr("match") or ".")


__all__ = ["ImplicatedDataDefinition"]
