class MigrationError(Exception):
    """Raised when a pipeline step (clear, import, transform, seed, export) fails."""
    def __init__(self, message):
        super().__init__(message)
