"""
Error taxonomy for the document-expiration notifier.

Only ConfigurationError is allowed to escape to process startup.
Everything else is caught per offset / per recipient and counted
in the cycle summary.
"""


class ExpirationError(Exception):
    """Base class for expiration notifier errors."""


class ConfigurationError(ExpirationError):
    """Invalid trigger hour, offsets or timeouts."""


class DataAccessError(ExpirationError):
    """A document, user or notification store query/write failed."""


class TransientDeliveryError(ExpirationError):
    """The email transport failed or timed out."""
