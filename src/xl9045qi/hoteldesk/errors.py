# Exception taxonomy for the hotel desk.
#
# Every error carries a short code (shown to the operator next to the message)
# and the time it was raised.

import datetime


class HotelError(Exception):
    """Base class for every error raised by the hotel desk."""

    code = "HOTEL-000"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.timestamp = datetime.datetime.now()

    def full_message(self) -> str:
        return f"[{self.code}] {self.timestamp:%Y-%m-%d %H:%M:%S}: {self.message}"


class ValidationError(HotelError):
    """Malformed or out-of-range input. Recoverable by asking again."""

    code = "VAL-001"

    def __init__(self, message: str, field: str = "", value=None):
        if field:
            message = f"Validation failed for field '{field}': {message}"
            if value is not None and value != "":
                message += f" (value: '{value}')"
        super().__init__(message)
        self.field = field
        self.value = value


class BillAlreadyPaidError(ValidationError):

    def __init__(self, bill_id: int):
        super().__init__(f"Bill #{bill_id} is already paid")
        self.bill_id = bill_id


class NotFoundError(HotelError):
    """A referenced record does not exist."""

    code = "DB-001"

    def __init__(self, record_type: str, record_id):
        super().__init__(f"{record_type} with ID {record_id} not found")
        self.record_type = record_type
        self.record_id = record_id


class ConflictError(HotelError):
    """The operation clashes with the current state of a record, e.g. a room that is not available."""

    code = "ROOM-001"


class FileError(HotelError):
    """An I/O failure on one of the store files."""

    code = "FILE-001"

    def __init__(self, path: str, details: str = ""):
        message = f"File error on '{path}'"
        if details:
            message += f" ({details})"
        super().__init__(message)
        self.path = path
        self.details = details


class FileReadError(FileError):
    pass


class FileWriteError(FileError):
    pass


class FileCorruptedError(FileError):
    pass


class AuthenticationError(HotelError):

    code = "EMP-001"

    def __init__(self, username: str, reason: str = "Invalid credentials"):
        super().__init__(f"Login failed for '{username}': {reason}")
        self.username = username


class AuthorizationError(HotelError):

    code = "EMP-001"

    def __init__(self, operation: str, required_role: str):
        super().__init__(f"Operation '{operation}' requires role: {required_role}")
        self.operation = operation
        self.required_role = required_role


class ConfigurationError(HotelError):

    code = "SYS-001"
