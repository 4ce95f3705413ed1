"""
Domain Exceptions
Raised by the coaching core and mapped to HTTP errors by the API layer
"""


class CoachingError(ValueError):
    """Base error for coaching domain failures"""


class InvalidTierError(CoachingError):
    """Subscription tier value is not one of FREE / PRO / GURU"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown subscription tier: {value!r}")


class UserNotFoundError(CoachingError):
    """User record could not be loaded from the persistence collaborator"""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")
