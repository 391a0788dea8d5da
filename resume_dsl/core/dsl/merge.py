"""
Theme Deep Merge
================

Merges a persisted base theme with a resume's custom theme overrides.
"""

from typing import Any, Dict, Mapping


def _is_plain_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two DSL fragments without mutating either.

    Nested mappings present on both sides are merged recursively. For anything else,
    including lists and ``None``, the override value replaces the base value.

    Args:
        base: Base theme fragment
        overrides: Custom overrides, winning on conflict

    Returns:
        New merged dictionary
    """
    result: Dict[str, Any] = dict(base)

    for key, override_value in overrides.items():
        base_value = base.get(key)
        if _is_plain_mapping(base_value) and _is_plain_mapping(override_value):
            result[key] = deep_merge(base_value, override_value)
        else:
            result[key] = override_value

    return result
