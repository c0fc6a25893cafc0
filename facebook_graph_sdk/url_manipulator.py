"""
URL Manipulator — Query string helpers shared by requests, pagination and login.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit

GRAPH_URL_PREFIX = re.compile(r"^http(s)?://.+\.(facebook|fb)\.com(/v.+?)?/")


def _flatten(key: str, value: Any) -> List[Tuple[str, str]]:
    if value is None:
        return []
    if isinstance(value, dict):
        pairs = []
        for sub_key, sub_value in value.items():
            pairs.extend(_flatten(f"{key}[{sub_key}]", sub_value))
        return pairs
    if isinstance(value, (list, tuple)):
        pairs = []
        for index, sub_value in enumerate(value):
            pairs.extend(_flatten(f"{key}[{index}]", sub_value))
        return pairs
    if isinstance(value, bool):
        return [(key, "true" if value else "false")]
    return [(key, str(value))]


def flatten_params(params: Dict[str, Any]) -> List[Tuple[str, str]]:
    """Flatten nested params into (key, value) pairs using bracket notation."""
    pairs: List[Tuple[str, str]] = []
    for key, value in params.items():
        pairs.extend(_flatten(str(key), value))
    return pairs


def build_query(params: Dict[str, Any], separator: str = "&") -> str:
    """Encode params as a query string joined by separator.

    Nested dicts and lists are flattened with bracket notation
    (``a[b]=1``, ``ids[0]=5``), None values are skipped and booleans are
    sent as "true"/"false".
    """
    return separator.join(urlencode([pair]) for pair in flatten_params(params))


def get_params_as_dict(url: str) -> Dict[str, str]:
    """Return the query params of a URL. Repeated keys keep the last value."""
    query = urlsplit(url).query
    if not query:
        return {}
    return dict(parse_qsl(query, keep_blank_values=True))


def remove_params_from_url(url: str, params_to_filter: Iterable[str]) -> str:
    """Drop the named query params, leaving the rest of the URL as given."""
    parts = urlsplit(url)

    query = ""
    if parts.query:
        params = dict(parse_qsl(parts.query, keep_blank_values=True))
        for name in params_to_filter:
            params.pop(name, None)
        if params:
            query = "?" + build_query(params)

    scheme = f"{parts.scheme}://" if parts.scheme else ""
    fragment = f"#{parts.fragment}" if parts.fragment else ""

    return f"{scheme}{parts.netloc}{parts.path}{query}{fragment}"


def append_params_to_url(url: str, new_params: Optional[Dict[str, Any]] = None) -> str:
    """Append params to a URL. Params already in the URL win; keys are sorted."""
    if not new_params:
        return url

    if "?" not in url:
        return f"{url}?{build_query(new_params)}"

    path, query = url.split("?", 1)
    merged = dict(new_params)
    merged.update(parse_qsl(query, keep_blank_values=True))

    return f"{path}?{build_query(dict(sorted(merged.items())))}"


def merge_url_params(url_to_steal_from: str, url_to_add_to: str) -> str:
    """Add the params of the first URL to the second. Existing params are untouched."""
    new_params = get_params_as_dict(url_to_steal_from)
    if not new_params:
        return url_to_add_to
    return append_params_to_url(url_to_add_to, new_params)


def force_slash_prefix(value: Optional[str]) -> Optional[str]:
    if not value:
        return value
    return value if value.startswith("/") else f"/{value}"


def base_graph_url_endpoint(url_to_trim: str) -> str:
    """Trim the scheme, Graph host and version prefix off a full Graph URL."""
    return "/" + GRAPH_URL_PREFIX.sub("", url_to_trim, count=1)
