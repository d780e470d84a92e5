"""
Input Sanitization Utilities

Strips markup from request input before it reaches filters or persisted
options.
"""

import html
import re
from typing import Optional

import bleach


def sanitize_plain_text(text: Optional[str]) -> str:
    """
    Strip all HTML tags and return plain text only.
    Useful for search terms, post type slugs and other single-line fields.

    Args:
        text: The text to sanitize

    Returns:
        Plain text with HTML tags stripped and whitespace normalized
    """
    if text is None:
        return ""

    # Strip all HTML tags
    cleaned = bleach.clean(text, tags=[], strip=True)

    # bleach escapes bare entities; the value is text, not markup
    cleaned = html.unescape(cleaned)

    # Normalize whitespace
    cleaned = re.sub(r'\s+', ' ', cleaned).strip()

    return cleaned
