"""Helpers for rebuilding nested translation trees from dotted keys."""

from typing import Any


def set_nested_value(target: dict[str, Any], key: str, value: Any, sep: str = ".") -> None:
    """Assign value at a dotted path inside target, creating dicts as needed.

    A non-dict value found on the way is replaced by a dict, so later
    deeper keys win over an earlier scalar at the same prefix.

    Args:
        target: Dict mutated in place.
        key: Dotted path (e.g. 'auth.errors.required').
        value: Leaf value to store.
        sep: Path separator.
    """
    parts = key.split(sep)
    current = target
    for part in parts[:-1]:
        node = current.get(part)
        if not isinstance(node, dict):
            node = {}
            current[part] = node
        current = node
    current[parts[-1]] = value
