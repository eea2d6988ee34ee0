"""
Error kinds raised by the service layer.

Route handlers translate these into HTTP responses using ``status_code``;
anything that is not a ``ServiceError`` is treated as an internal error.
"""


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFieldError(ServiceError):
    status_code = 400


class InvalidFieldError(ServiceError):
    status_code = 400


class InvalidStatusError(InvalidFieldError):
    pass


class InvalidUploadError(ServiceError):
    status_code = 400


class UploadTooLargeError(InvalidUploadError):
    pass


class NotFoundError(ServiceError):
    status_code = 404


class DuplicateIdentityError(ServiceError):
    status_code = 409
