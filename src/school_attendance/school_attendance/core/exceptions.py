class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced student or class does not exist."""


class DuplicateLogError(DomainError):
    """Raised by a log store when (student, day, type) is already taken."""

    def __init__(self, student_id: str, log_date, log_type):
        super().__init__(f"log already exists for {student_id} on {log_date} ({log_type})")
        self.student_id = student_id
        self.log_date = log_date
        self.log_type = log_type
