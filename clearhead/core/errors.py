"""Domain error taxonomy.

Every error carries a short message that is safe to show to a user. Internal
details (store errors, driver codes) stay in the logs.
"""

GENERIC_MESSAGE = "An unexpected error occurred. Please try again."


class DomainError(Exception):
    status_code: int = 400
    default_message: str = GENERIC_MESSAGE

    def __init__(self, message: str | None = None, *, detail: str | None = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(detail or self.message)


class NotFound(DomainError):
    status_code = 404
    default_message = "We couldn't find what you were looking for."


class PolicyViolation(DomainError):
    status_code = 409
    default_message = "This action isn't allowed at this time."


class SlotUnavailable(PolicyViolation):
    default_message = "That time slot is no longer available. Please pick another one."


class InvalidTransition(PolicyViolation):
    default_message = "This session can no longer be changed."


class StoreFailure(DomainError):
    status_code = 503
    default_message = "We couldn't save your changes. Please try again."


class NotificationFailure(DomainError):
    status_code = 502
    default_message = "We couldn't send the email notification."


def user_message(exc: BaseException) -> str:
    if isinstance(exc, DomainError):
        return exc.message
    return GENERIC_MESSAGE
