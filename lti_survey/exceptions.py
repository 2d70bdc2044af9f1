"""
Exceptions raised while handling an LTI survey launch.

Every exception carries a short ``message`` that is safe to show to the
learner; internal details belong in the logs only.
"""


class LtiError(Exception):
    """
    Base error class for LTI survey launches.
    """
    message = "The LTI launch could not be completed."
    http_status = 400

    def __init__(self, message=None):
        if not message:
            message = self.message
        self.message = message
        super().__init__(message)


class LtiValidationError(LtiError):
    """
    The launch request is malformed or incomplete.
    """
    message = "Not a valid LTI launch request."


class LtiAuthError(LtiError):
    """
    The launch signature or consumer key could not be verified.
    """
    message = "The LTI launch could not be authenticated."
    http_status = 403


class LtiNotFoundError(LtiError):
    """
    The targeted survey does not exist or is not activated.
    """
    message = "This survey is not available."
    http_status = 404


class LtiStateError(LtiError):
    """
    The participant session cannot be launched in its current state.
    """
    message = "Survey already completed."
    http_status = 409


class LtiPersistenceError(LtiError):
    """
    The participant session could not be stored.
    """
    message = "Error creating the survey participant."
    http_status = 500


class DuplicateParticipantError(LtiPersistenceError):
    """
    A participant already exists for the same survey, resource and user.
    """
