class FormSubmitterError(Exception):
    pass


class MalformedHtml(FormSubmitterError):
    pass


class FormNotFound(FormSubmitterError):
    pass


class AmbiguousAction(FormSubmitterError):
    pass


class InvalidUrl(FormSubmitterError):
    pass


class TransportError(FormSubmitterError):
    """
    Raised when the HTTP request could not be completed.

    Args:
        message (str): Diagnostic reported by the HTTP client.
        status_code (int | None): Response status, set only when the request
                                 failed because of an HTTP error status.
        cause (Exception | None): Exception raised by the HTTP client.
    """

    def __init__(self, message: str, status_code: int | None = None, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.cause = cause
