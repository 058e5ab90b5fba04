class NotFound(LookupError):
    """A document a use case depends on does not exist."""
