"""
HTML sanitization functions for table cells.

Column renderers may return HTML (badges, links); it is cleaned before it
reaches the browser.
"""

import bleach

ALLOWED_TAGS = ['a', 'span', 'strong', 'em', 'br', 'small', 'code', 'pre']
ALLOWED_ATTRIBUTES = {
    'a': ['href', 'target', 'rel', 'title'],
    'span': ['class', 'title'],
    '*': ['class', 'title']
}
ALLOWED_PROTOCOLS = ['http', 'https', 'mailto', 'tel']


def sanitize_html(html_content: str) -> str:
    """
    Sanitize HTML content to prevent XSS attacks.

    Only safe tags and attributes survive; disallowed tags are stripped and
    their text kept.

    Args:
        html_content: Raw HTML content to sanitize

    Returns:
        Sanitized HTML content safe for rendering
    """
    if not html_content:
        return ''

    return bleach.clean(
        str(html_content),
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True
    )
