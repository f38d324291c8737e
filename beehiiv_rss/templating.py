"""Jinja2 environment for beehiiv_rss templates."""

from __future__ import annotations

from importlib import resources

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

_ENV: Environment | None = None

_XML_REPLACEMENTS = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def escape_xml(value: object | None) -> str:
    """Escape the five XML special characters, ampersand first."""
    if value is None:
        return ""
    text = str(value)
    for char, entity in _XML_REPLACEMENTS:
        text = text.replace(char, entity)
    return text


def _xml(value: object | None) -> Markup:
    return Markup(escape_xml(value))


def _cdata(value: str | None) -> Markup:
    """Wrap raw markup in a CDATA section.

    A literal ``]]>`` inside ``value`` ends the section early; it is left as is.
    """
    return Markup(f"<![CDATA[{value or ''}]]>")


def get_environment() -> Environment:
    """Return a cached Jinja environment configured for package templates."""
    global _ENV
    if _ENV is None:
        template_dir = resources.files(__package__) / "templates"
        loader = FileSystemLoader(str(template_dir))
        # Values are escaped explicitly with the xml filter so that the
        # entity forms stay exactly &quot; and &#39;.
        _ENV = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        _ENV.filters["xml"] = _xml
        _ENV.filters["cdata"] = _cdata
    return _ENV
