from typing import Any, Set


def exclude_keys(data: Any, keys: Set[str]) -> Any:
    """Drop volatile keys (ids, timestamps) from a response body or a list of them."""
    if isinstance(data, list):
        return [exclude_keys(item, keys) for item in data]
    return {k: v for k, v in data.items() if k not in keys}
