"""
Rich text formatting for HTML stored on booking options.

Descriptions and status texts are edited by teachers in an HTML editor, so
they are cleaned against an allow-list before they reach a template.
"""
import nh3
from django.utils.safestring import mark_safe


def format_text(text) -> str:
    """Return cleaned HTML marked safe for templates. Empty input stays ''."""
    if not text:
        return ''
    return mark_safe(nh3.clean(str(text)))
