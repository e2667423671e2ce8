"""
Shared Jinja2 filters and globals for pagination templates.
"""

from typing import Optional


def translate(text: str, config=None) -> str:
    """Translate text with the configured translator, or return it unchanged."""
    from pagekit.config import get_config

    translator = (config or get_config()).translator
    if translator is None:
        return text
    return translator(text)


def page_label(page, of_label: Optional[str] = None) -> str:
    """Format "N of M" for a page, e.g. "2 of 4"."""
    of_label = of_label or translate("of")
    return f"{page.page_number} {of_label} {page.pages}"


def register_filters(templates):
    """
    Register pagekit filters on a Jinja2Templates instance.

    Usage:
        from pagekit.utils.template_filters import register_filters
        templates = Jinja2Templates(directory="templates")
        register_filters(templates)
    """
    templates.env.filters["page_label"] = page_label
    templates.env.globals["_"] = translate
    templates.env.globals["translate"] = translate
