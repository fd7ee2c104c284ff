r"""Read-only adapter over parsed module definition XML.

Module definitions are XML documents, usually in the ``fm`` namespace. The
engine never walks raw lxml elements; it addresses the tree through
:class:`MetadataNode`, using slash-separated local names such as
``presentation/set-buffer``. Paths are qualified with the namespace of the node
they are evaluated against, so namespaced and plain documents behave the same.

Single-element queries return a :class:`Selection` describing how many matches
were found instead of raising for the expected "nothing declared" case.

Example
-------
>>> from pageflow.metadata import parse_metadata
>>> root = parse_metadata('<state name="s1"><action-list/></state>')
>>> root.attr("name")
's1'
>>> root.select_one("presentation/set-page").cardinality.name
'ABSENT'
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from lxml import etree

from .errors import ModuleConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path


class Cardinality(enum.Enum):
    """How many elements matched a single-element query."""

    ABSENT = "absent"
    ONE = "one"
    MANY = "many"


@dc.dataclass(frozen=True, slots=True)
class Selection:
    """Result of :meth:`MetadataNode.select_one`.

    Attributes
    ----------
    cardinality : Cardinality
        Whether zero, one or several elements matched.
    node : MetadataNode or None
        The matched node when ``cardinality`` is ``ONE``.
    count : int
        Number of matching elements.
    """

    cardinality: Cardinality
    node: MetadataNode | None = None
    count: int = 0


class MetadataNode:
    """Namespace-aware view of one element in a module definition."""

    __slots__ = ("_element",)

    def __init__(self, element: etree._Element) -> None:
        self._element = element

    @property
    def name(self) -> str:
        """Local name of the element, without namespace."""
        return etree.QName(self._element).localname

    @property
    def namespace(self) -> str | None:
        return etree.QName(self._element).namespace

    @property
    def value(self) -> str:
        """Text content of the element and its descendants."""
        return "".join(self._element.itertext())

    @property
    def sourceline(self) -> int | None:
        return self._element.sourceline

    @property
    def attributes(self) -> dict[str, str]:
        """Attributes keyed by local name, in document order."""
        return {
            etree.QName(key).localname: value
            for key, value in self._element.attrib.items()
        }

    def attr(self, name: str) -> str | None:
        """Return the named attribute, or ``None`` when it is absent."""
        return self._element.get(name)

    def children(self) -> list[MetadataNode]:
        """Return the child elements in document order."""
        return [
            MetadataNode(child)
            for child in self._element.iterchildren()
            if isinstance(child.tag, str)
        ]

    def select(self, path: str) -> list[MetadataNode]:
        """Return every element matching ``path`` in document order."""
        return [MetadataNode(match) for match in self._element.findall(self._qualify(path))]

    def select_one(self, path: str) -> Selection:
        """Return a :class:`Selection` for a path expected to match at most once."""
        matches = self.select(path)
        if not matches:
            return Selection(Cardinality.ABSENT)
        if len(matches) == 1:
            return Selection(Cardinality.ONE, node=matches[0], count=1)
        return Selection(Cardinality.MANY, count=len(matches))

    def to_markup(self) -> str:
        """Serialise the element back to XML text."""
        return etree.tostring(self._element, encoding="unicode", with_tail=False)

    def _qualify(self, path: str) -> str:
        namespace = self.namespace
        segments = [segment for segment in path.split("/") if segment]
        if namespace:
            return "/".join(f"{{{namespace}}}{segment}" for segment in segments)
        return "/".join(segments)

    def __repr__(self) -> str:
        return f"MetadataNode({self.name!r}, line={self.sourceline})"


def _parser(encoding: str | None = None) -> etree.XMLParser:
    return etree.XMLParser(
        encoding=encoding,
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
    )


def parse_metadata(source: str | bytes) -> MetadataNode:
    """Parse XML text into a :class:`MetadataNode` rooted at the document element.

    Parameters
    ----------
    source : str or bytes
        XML document text. Bytes honour the document's encoding declaration;
        text is parsed as already decoded.

    Returns
    -------
    MetadataNode
        Node wrapping the document element.

    Raises
    ------
    ModuleConfigError
        If the text is not well-formed XML.
    """
    # Declared encodings are ignored for already-decoded text.
    if isinstance(source, str):
        data, encoding = source.encode("utf-8"), "utf-8"
    else:
        data, encoding = source, None
    try:
        element = etree.fromstring(data, _parser(encoding))
    except etree.XMLSyntaxError as exc:
        msg = f"Module definition is not well-formed XML: {exc}"
        raise ModuleConfigError(msg) from exc
    return MetadataNode(element)


def load_metadata(path: Path) -> MetadataNode:
    """Read and parse an XML module definition from ``path``."""
    if not path.exists():
        msg = f"Module definition '{path}' not found."
        raise FileNotFoundError(msg)
    return parse_metadata(path.read_bytes())


__all__ = ["Cardinality", "MetadataNode", "Selection", "load_metadata", "parse_metadata"]
