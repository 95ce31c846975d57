"""
db/errors.py
------------
Error taxonomy for the data-access layer.
Callers above the repositories only ever see these two kinds.
"""


class StoreError(Exception):
    """Base class for every error raised by the data-access layer."""


class DataAccessError(StoreError):
    """Any underlying store failure: connectivity, constraint violation, bad row."""


class NotFoundError(StoreError):
    """A point lookup matched zero rows."""
