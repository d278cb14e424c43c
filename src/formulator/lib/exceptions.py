"""
Exception Hierarchy

Custom exceptions for the Formulator form handler.
"""


class FormulatorException(Exception):
    """Base exception for Formulator"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# Configuration Exceptions
class ConfigurationException(FormulatorException):
    """Exception related to configuration"""
    pass


class InvalidConfigurationException(ConfigurationException):
    """Exception when configuration is invalid"""
    pass


# Notification Exceptions
class NotificationException(FormulatorException):
    """Exception during notification delivery"""
    pass


class WebhookDeliveryException(NotificationException):
    """Exception when a webhook target rejects or cannot receive a message"""

    def __init__(self, target: str, message: str, status_code: int = None):
        details = {"target": target}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)
        self.target = target
        self.status_code = status_code


# Utility functions
def format_exception_details(exception: FormulatorException) -> str:
    """
    Format exception details for logging

    Args:
        exception: Formulator exception instance

    Returns:
        Formatted string with exception details
    """
    details_str = f"{exception.__class__.__name__}: {exception.message}"

    if exception.details:
        details_list = [f"  {k}: {v}" for k, v in exception.details.items()]
        details_str += "\nDetails:\n" + "\n".join(details_list)

    return details_str
