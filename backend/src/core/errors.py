# backend/src/core/errors.py

GENERIC_INTERNAL_ERROR = "An internal server error occurred."


# ------------------------------------------------------------
# Base error
# ------------------------------------------------------------
class QuizError(Exception):
    """Base for every failure the quiz handler reports to the caller."""

    status_code: int = 500
    message: str = GENERIC_INTERNAL_ERROR

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"error": self.message}


# ------------------------------------------------------------
# Caller / configuration errors
# ------------------------------------------------------------
class MethodNotAllowed(QuizError):
    status_code = 405
    message = "Method Not Allowed"


class ServerMisconfigured(QuizError):
    status_code = 500
    message = "API key is not configured on the server."


class InvalidDifficulty(QuizError):
    status_code = 400

    def __init__(self, received):
        self.received = received
        super().__init__(f"Invalid difficulty level provided. Received: {received}")


class InvalidTopic(QuizError):
    status_code = 400
    message = "A valid topic must be provided."


# ------------------------------------------------------------
# Upstream errors
# ------------------------------------------------------------
class UpstreamCallFailed(QuizError):
    """Gemini answered with a non-success status; that status is forwarded."""

    message = "Failed to fetch data from Gemini API."

    def __init__(self, status_code: int, detail: str = ""):
        self.detail = detail
        super().__init__(status_code=status_code)


class UpstreamResponseMalformed(QuizError):
    # detail is for the logs only, the caller gets the generic message
    def __init__(self, detail: str = "Invalid response structure from API."):
        self.detail = detail
        super().__init__()

    def __str__(self) -> str:
        return self.detail


class InternalError(QuizError):
    pass
