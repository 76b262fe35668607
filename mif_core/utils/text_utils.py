"""Text utility functions - single source of truth."""


def unescape_entities(text: str) -> str:
    """Replace the apostrophe and ampersand XML entities with literals.

    Args:
        text: Attribute value text

    Returns:
        Text with ``&apos;`` and ``&amp;`` replaced

    Examples:
        >>> unescape_entities("Tom &amp; Jerry")
        'Tom & Jerry'
        >>> unescape_entities("O&apos;Connell Street")
        "O'Connell Street"
    """
    return (str(text)
            .replace('&apos;', "'")
            .replace('&amp;', '&'))
