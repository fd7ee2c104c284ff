"""Pre-parsed presentation buffers declared with ``set-buffer`` and ``set-page``.

Full presentation parse trees belong to the rendering pipeline. The engine
keeps a summary of each buffer: its name, its attributes, the names of its top
level children and the original markup so a renderer can parse it later.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .errors import ModuleConfigError

if typ.TYPE_CHECKING:
    from .metadata import MetadataNode


@dc.dataclass(frozen=True, slots=True)
class BufferPresentationNode:
    """A named presentation fragment emitted during rendering."""

    name: str
    attributes: dict[str, str] = dc.field(default_factory=dict)
    child_names: tuple[str, ...] = ()
    markup: str = dc.field(default="", repr=False)


def parse_buffer(node: MetadataNode, *, name: str | None = None) -> BufferPresentationNode:
    """Build a :class:`BufferPresentationNode` from a buffer element.

    Parameters
    ----------
    node : MetadataNode
        The ``set-buffer`` or ``set-page`` element.
    name : str, optional
        Name to give the buffer. When omitted the element's ``@name`` is used
        and must be present.

    Raises
    ------
    ModuleConfigError
        If no name is supplied and the element has no ``@name``.
    """
    attributes = node.attributes
    buffer_name = name if name is not None else (attributes.get("name") or "").strip()
    if not buffer_name:
        msg = f"{node.name} element on line {node.sourceline} has no name attribute"
        raise ModuleConfigError(msg)
    return BufferPresentationNode(
        name=buffer_name,
        attributes=attributes,
        child_names=tuple(child.name for child in node.children()),
        markup=node.to_markup(),
    )


__all__ = ["BufferPresentationNode", "parse_buffer"]
