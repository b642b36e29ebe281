class FeedError(Exception):
    """Base error carrying the HTTP status it should be rendered with."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(FeedError):
    status_code = 400
    default_message = "Invalid input"

    def __init__(self, message: str = None, param: str = None, location: str = "body"):
        super().__init__(message)
        self.param = param
        self.location = location

    def as_errors(self):
        return [{"msg": self.message, "param": self.param, "location": self.location}]


class BadRequestError(FeedError):
    status_code = 400
    default_message = "Bad request"


class NotFoundError(FeedError):
    status_code = 404
    default_message = "Not found"


class AuthorizationError(FeedError):
    status_code = 401
    default_message = "User not authorized"


class UnauthenticatedError(FeedError):
    status_code = 401
    default_message = "Token is not valid"


class PersistenceError(FeedError):
    # Message stays opaque, the cause is logged where it is raised
    status_code = 500
    default_message = "Server error"
