"""Stored XPath definitions resolved through a chain of scopes."""

from __future__ import annotations

import types
import typing as typ

from .errors import ModuleConfigError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .metadata import MetadataNode


class StoredXPathResolver:
    """Answer stored-XPath lookups locally, then through the parent resolver."""

    __slots__ = ("_definitions", "parent")

    def __init__(
        self,
        definitions: typ.Mapping[str, str] | None = None,
        parent: StoredXPathResolver | None = None,
    ) -> None:
        self._definitions = dict(definitions or {})
        self.parent = parent

    @classmethod
    def create_from_nodes(
        cls,
        nodes: cabc.Iterable[MetadataNode],
        parent: StoredXPathResolver | None = None,
    ) -> StoredXPathResolver:
        """Build a resolver from ``xpath`` elements carrying ``@name`` and ``@value``.

        Raises
        ------
        ModuleConfigError
            If an element has no name or value, or a name is declared twice.
        """
        definitions: dict[str, str] = {}
        for node in nodes:
            name = (node.attr("name") or "").strip()
            value = node.attr("value")
            if not name:
                msg = f"Stored XPath on line {node.sourceline} has no name attribute"
                raise ModuleConfigError(msg)
            if value is None or not value.strip():
                msg = f"Stored XPath '{name}' has no value attribute"
                raise ModuleConfigError(msg)
            if name in definitions:
                msg = f"Stored XPath '{name}' is defined more than once"
                raise ModuleConfigError(msg)
            definitions[name] = value
        return cls(definitions, parent)

    @property
    def local_definitions(self) -> typ.Mapping[str, str]:
        return types.MappingProxyType(self._definitions)

    def resolve_xpath(self, name: str) -> str | None:
        """Return the XPath stored under ``name``, or ``None`` if no scope defines it."""
        value = self._definitions.get(name)
        if value is None and self.parent is not None:
            return self.parent.resolve_xpath(name)
        return value

    def __repr__(self) -> str:
        return f"StoredXPathResolver(local={sorted(self._definitions)}, delegating={self.parent is not None})"


__all__ = ["StoredXPathResolver"]
