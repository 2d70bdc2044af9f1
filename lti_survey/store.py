"""
Data-access contract for participant sessions, and its Django implementation.
"""
import logging

from django.db import DatabaseError, IntegrityError, transaction

from lti_survey.exceptions import DuplicateParticipantError, LtiNotFoundError, LtiPersistenceError
from lti_survey.models import LtiParticipant, LtiSurveyConfiguration

log = logging.getLogger(__name__)


class ParticipantStore:
    """
    Storage of participant sessions for surveys.

    Implementations must make `find_by_resource_and_user` followed by
    `create(..., single_attempt=True)` behave as an atomic find-or-create:
    a second single-attempt session for the same survey, resource and user
    must be refused with DuplicateParticipantError.
    """

    def table_exists(self, survey_id):
        """
        Returns True if the survey exists and has its participant table.
        """
        raise NotImplementedError

    def find_by_resource_and_user(self, survey_id, resource_id, user_id):
        """
        Returns the first ParticipantSession of the survey for the pair, or None.
        """
        raise NotImplementedError

    def create(self, session, single_attempt=False):
        """
        Stores a new ParticipantSession and returns it.

        Raises:
            DuplicateParticipantError if `single_attempt` is set and the pair already has a session.
            LtiPersistenceError if the session could not be stored.
        """
        raise NotImplementedError

    def set_completion_status(self, survey_id, token, status):
        """
        Updates the completion status of a session and returns it.

        Raises:
            LtiNotFoundError if the token is unknown.
        """
        raise NotImplementedError


class DjangoParticipantStore(ParticipantStore):
    """
    ParticipantStore backed by the LtiParticipant and LtiSurveyConfiguration models.

    The at-most-one-session rule is enforced by a conditional unique constraint
    on single-attempt participants.
    """

    def table_exists(self, survey_id):
        return LtiSurveyConfiguration.objects.filter(survey_id=survey_id, active=True).exists()

    def find_by_resource_and_user(self, survey_id, resource_id, user_id):
        participant = LtiParticipant.objects.filter(
            survey_id=survey_id,
            resource_id=resource_id,
            user_id=user_id,
        ).order_by('id').first()
        return participant.to_session() if participant else None

    def create(self, session, single_attempt=False):
        try:
            with transaction.atomic():
                participant = LtiParticipant.objects.create(
                    survey_id=session.survey_id,
                    token=session.token,
                    resource_id=session.resource_id,
                    user_id=session.user_id,
                    return_url=session.return_url,
                    course_title=session.course_title,
                    first_name=session.first_name,
                    last_name=session.last_name,
                    email=session.email,
                    completed=session.completed,
                    single_attempt=single_attempt,
                )
        except IntegrityError as exc:
            log.warning(
                "Participant for survey %s, resource %s and user %s was not created: %s",
                session.survey_id,
                session.resource_id,
                session.user_id,
                exc,
            )
            raise DuplicateParticipantError() from exc
        except DatabaseError as exc:
            log.error("Error creating participant for survey %s: %s", session.survey_id, exc)
            raise LtiPersistenceError() from exc

        return participant.to_session()

    def set_completion_status(self, survey_id, token, status):
        try:
            participant = LtiParticipant.objects.get(survey_id=survey_id, token=token)
        except LtiParticipant.DoesNotExist as exc:
            raise LtiNotFoundError("Unknown participant token.") from exc

        participant.completed = status
        participant.save(update_fields=['completed'])
        return participant.to_session()
