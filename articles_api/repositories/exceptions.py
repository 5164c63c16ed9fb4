class DataAccessError(Exception):
    """A store fault: connectivity, constraint violation, a vanished row."""
