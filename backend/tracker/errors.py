class TrackerError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(TrackerError):
    """A field is missing or holds a value outside its allowed set."""

    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        return {"message": self.message, "field": self.field}


class NotFoundError(TrackerError):
    status_code = 404

    def __init__(self, message: str = "Application not found"):
        super().__init__(message)


class StoreUnavailableError(TrackerError):
    status_code = 500
