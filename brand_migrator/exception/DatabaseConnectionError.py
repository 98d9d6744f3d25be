class DatabaseConnectionError(Exception):
    """Raised when the connection string is missing or the store is unreachable at startup."""
    def __init__(self, message):
        super().__init__(message)
