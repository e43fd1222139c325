"""
Exception types raised by SubSync.
"""


class SubSyncError( Exception ):
    """Base class for all SubSync errors."""


class TimeCodeError( SubSyncError, ValueError ):
    """A subtitle time code could not be parsed or formatted."""
