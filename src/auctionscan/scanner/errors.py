from __future__ import annotations


class ScanError(RuntimeError):
    """Base class for scan controller failures."""


class PreconditionFailed(ScanError):
    """
    A scan could not be started; the message is shown to the user as is.
    """


class OverrideAlreadyInstalled(ScanError):
    """
    The readiness predicate was wrapped twice without restoring it in between.
    """
