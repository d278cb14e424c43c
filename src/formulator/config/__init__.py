"""
Configuration package for Formulator.
"""

from .settings import Settings, parse_field_list

__all__ = [
    "Settings",
    "parse_field_list",
]
