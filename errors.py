"""Lookup and transport errors raised by the Redmine and Slack collaborators."""


class LookupFailure(Exception):
    """A collaborator could not produce the requested record."""


class NotFoundError(LookupFailure):
    """The requested record does not exist (or is not visible to us)."""


class TransportError(LookupFailure):
    """The remote call failed: network error, bad status or unusable payload."""
