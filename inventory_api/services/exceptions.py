# inventory_api/services/exceptions.py

class ServiceError(Exception):
    """Base class for service layer errors."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class ResourceNotFoundError(ServiceError):
    """Resource not found."""
    pass


class ConflictError(ServiceError):
    """State conflict for the requested operation."""
    pass


class ProductNotFoundError(ResourceNotFoundError):
    def __init__(self, detail: str = "Product not found"):
        super().__init__(detail)


class DuplicateNameError(ConflictError):
    def __init__(self, detail: str = "Product with this name already exists"):
        super().__init__(detail)


class NoFieldsSuppliedError(ServiceError):
    def __init__(self, detail: str = "No fields to update"):
        super().__init__(detail)


# --- Import ---
class MissingUploadError(ServiceError):
    def __init__(self, detail: str = "No CSV file uploaded"):
        super().__init__(detail)


class InvalidUploadError(ServiceError):
    def __init__(self, detail: str = "Only CSV files are allowed"):
        super().__init__(detail)


class EmptyImportFileError(ServiceError):
    def __init__(self, detail: str = "CSV file is empty"):
        super().__init__(detail)


class CsvParseError(ServiceError):
    """Raised when the uploaded file cannot be read as CSV."""
    pass
