"""Formulator: form submission handler with Discord and Slack notifications."""

__version__ = "1.0.0"
