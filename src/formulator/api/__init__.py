"""HTTP surface of the form handler."""

from formulator.api.endpoints import create_app

__all__ = ['create_app']
