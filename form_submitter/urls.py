from urllib.parse import urljoin, urlsplit, urlunsplit

from .errors import InvalidUrl


def is_absolute(url: str) -> bool:
    """
    Checks that `url` is a well-formed absolute URL: it has a scheme and a
    host, and its port (if any) is a number.
    """
    if not isinstance(url, str) or not url or url != url.strip():
        return False
    try:
        parts = urlsplit(url)
        # raises ValueError for a non-numeric or out of range port
        parts.port
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc and parts.hostname)


def resolve_reference(base: str, reference: str) -> str:
    """
    Resolves a possibly relative URL reference against an absolute base URL.

    Args:
        base (str): Absolute URL the reference is relative to.
        reference (str): Relative path, absolute path, query-only reference
                         or absolute URL.

    Returns:
        str: The absolute URL.

    Raises:
        InvalidUrl: `base` is not absolute, or the result is not absolute.
    """
    if not is_absolute(base):
        raise InvalidUrl(f"URL {base} is not valid.")
    if is_absolute(reference):
        return reference
    url = urljoin(base, reference)
    if not is_absolute(url):
        raise InvalidUrl(f"Cannot resolve {reference} against {base}.")
    return url


def merge_query(url: str, query: str) -> str:
    """Appends an encoded query string to whatever query `url` already has."""
    if not query:
        return url
    parts = urlsplit(url)
    merged = f"{parts.query}&{query}" if parts.query else query
    return urlunsplit(parts._replace(query=merged))
