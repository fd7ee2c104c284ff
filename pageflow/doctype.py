"""Output doctypes a state may request for its HTML page buffer."""

from __future__ import annotations

import enum


class HtmlDoctype(enum.Enum):
    """Doctype declarations keyed by the name used in ``@document-type``."""

    HTML5 = "<!DOCTYPE html>"
    HTML4_STRICT = (
        '<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01//EN" '
        '"http://www.w3.org/TR/html4/strict.dtd">'
    )
    HTML4_TRANSITIONAL = (
        '<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01 Transitional//EN" '
        '"http://www.w3.org/TR/html4/loose.dtd">'
    )
    XHTML_STRICT = (
        '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN" '
        '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd">'
    )
    XHTML_TRANSITIONAL = (
        '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN" '
        '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-transitional.dtd">'
    )

    @property
    def declaration(self) -> str:
        return self.value

    @classmethod
    def get_by_name_or_none(cls, name: str | None) -> HtmlDoctype | None:
        """Return the doctype called ``name``, or ``None`` when absent or unknown.

        Examples
        --------
        >>> HtmlDoctype.get_by_name_or_none("HTML5").name
        'HTML5'
        >>> HtmlDoctype.get_by_name_or_none("quirks") is None
        True
        """
        if name is None:
            return None
        return cls.__members__.get(name.strip())


__all__ = ["HtmlDoctype"]
