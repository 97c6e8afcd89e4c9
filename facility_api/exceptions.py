"""
Exceptions raised by the service layer.

Not-found is never signalled with an exception: services return ``None``
(or an empty list) and the HTTP layer turns that into a 404.
"""


class FacilityApiError(Exception):
    """Base class for application errors."""


class TransactionFailure(FacilityApiError):
    """A multi-step write failed and its unit of work was rolled back."""

    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"Transaction rolled back: {cause}")


class StorageCleanupFault(FacilityApiError):
    """An object could not be removed from storage after its row was deleted."""

    def __init__(self, uri, cause):
        self.uri = uri
        self.cause = cause
        super().__init__(f"Could not remove {uri} from storage: {cause}")


class UnknownReference(FacilityApiError):
    """A write referenced rows that do not exist."""

    def __init__(self, kind, ids):
        self.kind = kind
        self.ids = sorted(ids)
        super().__init__(f"Unknown {kind} ids: {', '.join(str(i) for i in self.ids)}")
