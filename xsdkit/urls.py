"""URL helpers."""

from typing import List, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


def url_with_query(url: str, *pairs: str) -> str:
    """
    Append query parameters given as alternating keys and values.

    A trailing key without a value is ignored, pairs with an empty key are
    skipped.

        >>> url_with_query("http://example.com", "a", "x", "b", "y")
        'http://example.com?a=x&b=y'
    """
    parts = urlsplit(url)
    query: List[Tuple[str, str]] = parse_qsl(parts.query, keep_blank_values=True)
    for key, value in zip(pairs[0::2], pairs[1::2]):
        if key:
            query.append((key, value))
    return urlunsplit(parts._replace(query=urlencode(query)))
