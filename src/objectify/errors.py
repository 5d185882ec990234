class ObjectifyError(Exception):
    """Base error for the project."""

class InaccessiblePathError(ObjectifyError):
    pass

class NoEntriesError(ObjectifyError):
    pass

class ListingError(ObjectifyError):
    pass
