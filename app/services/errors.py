"""Ошибки сервиса учётных данных и проверки токена.

Каждая ошибка несёт HTTP статус и сообщение, которое можно показать клиенту.
"""


class ServiceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(ServiceError):
    status_code = 400
    default_message = "Invalid input"


class DuplicateUser(ServiceError):
    status_code = 409
    default_message = "User already exists"


class InvalidCredentials(ServiceError):
    status_code = 401
    default_message = "Invalid credentials"


class Unauthenticated(ServiceError):
    status_code = 401
    default_message = "Invalid or expired token"


class NotFound(ServiceError):
    status_code = 404
    default_message = "User not found"
