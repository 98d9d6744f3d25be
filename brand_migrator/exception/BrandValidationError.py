from brand_migrator.exception.MigrationError import MigrationError


class BrandValidationError(MigrationError):
    """Raised by the repository when a canonical write violates the brand schema."""
    def __init__(self, errors, message=None):
        self.errors = dict(errors or {})
        if message is None:
            detail = '; '.join(f'{k}: {v}' for k, v in self.errors.items())
            message = f'Brand validation failed: {detail}'
        super().__init__(message)
