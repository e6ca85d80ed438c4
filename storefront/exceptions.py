"""Storefront exception types."""


class StorefrontError(Exception):
    """Base class for storefront errors."""


class RemoteStoreError(StorefrontError):
    """The remote document store could not be reached or refused the call."""


class SnapshotDecodeError(StorefrontError):
    """A local snapshot value is not valid JSON."""


class AuthError(StorefrontError):
    """Identity service failure carrying a message fit to show the user."""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        self.code = code
