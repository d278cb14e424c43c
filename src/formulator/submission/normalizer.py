"""Cleaning and allow-list restriction of submitted form fields."""

from typing import Any, Dict, Mapping, Sequence


def clean_fields(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop every field whose value is empty or missing."""
    return {name: value for name, value in raw.items() if value}


def normalize(raw: Mapping[str, Any], allow_list: Sequence[str] = ()) -> Dict[str, Any]:
    """
    Normalize decoded form data.

    Empty values are always removed, using Python truthiness: empty
    strings, None, 0, False, empty lists and empty dicts all count as
    empty. When an allow-list is given, only the listed fields are kept,
    in allow-list order.

    Args:
        raw: Decoded request body
        allow_list: Accepted field names, empty for no restriction

    Returns:
        Normalized field mapping
    """
    cleaned = clean_fields(raw)

    if not allow_list:
        return cleaned

    return {name: cleaned[name] for name in allow_list if name in cleaned}
