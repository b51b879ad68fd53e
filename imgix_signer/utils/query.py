"""
Query Encoding Utility
Canonical query strings for signed imgix URLs
"""

from typing import Any, Mapping, Optional
from urllib.parse import quote, quote_plus

from imgix_signer.core.errors import InvalidInputError

# Only RFC 3986 unreserved characters (letters, digits, "-_.~") survive
UNRESERVED_SAFE = ""


def _render_value(key: str, value: Any) -> str:
    """Render a scalar parameter value as it appears in the query string."""
    # bool first, it is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise InvalidInputError(
        f"expected a string, number or boolean, got {type(value).__name__}",
        field=key
    )


def _render_key(key: Any) -> str:
    if isinstance(key, bool) or not isinstance(key, (str, int)):
        raise InvalidInputError(f"parameter names must be strings, got {key!r}", field="params")
    return str(key)


def encode_query(params: Mapping[Any, Any]) -> str:
    """
    Serialize parameters into a canonical query string.

    Pairs are sorted by the key's string form, so integer keys sort as text
    ("10" before "9"). Keys and values are form encoded: unreserved
    characters are kept, spaces become "+", everything else is percent-encoded.

    Args:
        params: Mapping of imgix parameter names to scalar values

    Returns:
        Query string without the leading "?"

    Raises:
        InvalidInputError: If a value is not a scalar, or two keys render
            to the same name (e.g. 1 and "1")
    """
    rendered = {}
    for key, value in params.items():
        name = _render_key(key)
        if name in rendered:
            raise InvalidInputError(f"duplicate parameter name {name!r}", field="params")
        rendered[name] = _render_value(name, value)

    return "&".join(
        f"{quote_plus(name, safe=UNRESERVED_SAFE)}={quote_plus(value, safe=UNRESERVED_SAFE)}"
        for name, value in sorted(rendered.items())
    )


def encode_unreserved(value: str) -> str:
    """
    Percent-encode every character outside the unreserved set.

    "=", "&", "+", "/" and ":" are all escaped, so the result is safe to use
    as a single opaque path segment.
    """
    return quote(value, safe=UNRESERVED_SAFE)


def _has_params(params: Optional[Mapping[Any, Any]]) -> bool:
    if params is None:
        return False
    if not isinstance(params, Mapping):
        raise InvalidInputError(
            f"expected a mapping, got {type(params).__name__}",
            field="params"
        )
    return len(params) > 0


def path_with_params(path: str, params: Optional[Mapping[Any, Any]] = None) -> str:
    """
    Append the canonical query string to a path.

    This is the form that gets signed. Absent or empty params return the
    path unchanged.
    """
    if not _has_params(params):
        return path
    return f"{path}?{encode_query(params)}"


def path_with_encoded_params(path: str, params: Optional[Mapping[Any, Any]] = None) -> str:
    """
    Append the query string, encoded a second time, to a path.

    This is the form that appears in the final URL. Absent or empty params
    return the path unchanged.
    """
    if not _has_params(params):
        return path
    return f"{path}?{encode_unreserved(encode_query(params))}"
