class SessionNotFoundError(LookupError):
    """Raised when a selection session id is unknown or was evicted."""
    pass
