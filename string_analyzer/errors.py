from typing import Optional


class StringAnalyzerError(Exception):
    """Base error. Each subclass maps to a stable HTTP status at the API boundary."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class MissingField(StringAnalyzerError):
    status_code = 400
    message = "Missing required field"


class InvalidType(StringAnalyzerError):
    status_code = 422
    message = "Invalid data type"


class Conflict(StringAnalyzerError):
    status_code = 409
    message = "String already exists in the system"


class NotFound(StringAnalyzerError):
    status_code = 404
    message = "String does not exist in the system"


class InvalidFilterValue(StringAnalyzerError):
    status_code = 400
    message = "Invalid query parameter values or types"


class UnparsableQuery(StringAnalyzerError):
    status_code = 400
    message = "Unable to parse natural language query"


class InternalError(StringAnalyzerError):
    pass
