"""Merge parent display attributes with child overrides."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


def merge_attributes(
    parent: typ.Mapping[str, str],
    overrides: cabc.Iterable[tuple[str, str | None]],
) -> dict[str, str]:
    """Return a copy of ``parent`` with ``overrides`` applied in order.

    Parameters
    ----------
    parent : Mapping[str, str]
        Attribute set inherited from the enclosing scope. It is never modified.
    overrides : Iterable[tuple[str, str | None]]
        ``(name, value)`` pairs declared by the child scope. A ``None`` value
        is stored as the empty string. Later pairs win over earlier ones and
        over the parent.

    Returns
    -------
    dict[str, str]
        The child's effective attribute set.

    Examples
    --------
    >>> merge_attributes({"a": "1", "b": "2"}, [("b", "9"), ("c", "3")])
    {'a': '1', 'b': '9', 'c': '3'}
    """
    merged: dict[str, str] = dict(parent)
    for name, value in overrides:
        merged[name] = value or ""
    return merged


__all__ = ["merge_attributes"]
