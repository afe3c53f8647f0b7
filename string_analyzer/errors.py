from fastapi import status


class StringAnalyzerError(Exception):
    """Base class for errors raised by the string analyzer core"""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidStringError(StringAnalyzerError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request body or missing 'value' field"


class StringAlreadyExists(StringAnalyzerError):
    status_code = status.HTTP_409_CONFLICT
    message = "String already exists in the system"


class StringNotFound(StringAnalyzerError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "String does not exist in the system"


class QueryParseError(StringAnalyzerError):
    """Natural language query matched none of the parser rules"""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Unable to parse natural language query"


class ConflictingFiltersError(StringAnalyzerError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    message = "Query parsed but resulted in conflicting filters"
