"""
Handling of LTI 1.1 survey launches.

A launch goes through the following gates, any of which can reject it:

    survey available -> signature verified -> consumer key matches
    -> identity mapped -> participant resumed or created -> redirect

The participant decision only depends on the ParticipantStore contract, so
the same orchestrator runs against the Django models or any other storage.
"""
import logging

from lti_survey.data import ParticipantSession, RedirectTarget
from lti_survey.exceptions import (
    DuplicateParticipantError,
    LtiAuthError,
    LtiNotFoundError,
    LtiStateError,
)
from lti_survey.mapping import map_attributes
from lti_survey.oauth import consumer_key_matches, verify_launch_request
from lti_survey.tokens import generate_token
from lti_survey.utils import get_nonce_window

log = logging.getLogger(__name__)


class LaunchOrchestrator:
    """
    Resolves an LTI launch into a participant session of a survey.
    """

    def __init__(self, store, token_generator=generate_token, replay_window=None):
        """
        Arguments:
            store (ParticipantStore): storage of participant sessions
            token_generator (callable): returns a new unguessable participant token
            replay_window (int): seconds used by the nonce check, defaults to LTI_SURVEY_NONCE_WINDOW
        """
        self.store = store
        self.token_generator = token_generator
        self.replay_window = replay_window

    def handle_launch(self, survey_id, launch_request, policy):
        """
        Verifies a launch and returns where to redirect the participant.

        Arguments:
            survey_id: the survey being launched
            launch_request (LaunchRequest): the launch as received
            policy (LaunchPolicy): the survey's launch configuration

        Returns:
            RedirectTarget

        Raises:
            LtiError subclasses, each terminal for this launch only.
        """
        if not self.store.table_exists(survey_id):
            log.info("LTI launch for survey %s rejected: survey is not activated", survey_id)
            raise LtiNotFoundError(f"No participant table for survey {survey_id}")

        attributes = verify_launch_request(
            launch_request,
            policy.consumer,
            replay_window=self._get_replay_window(policy),
        )

        if not consumer_key_matches(attributes, policy.consumer):
            log.info("LTI launch for survey %s rejected: wrong consumer key", survey_id)
            raise LtiAuthError()

        log.debug("Valid LTI launch for survey %s: %s", survey_id, attributes)

        identity = map_attributes(attributes, policy.attribute_mapping)

        if policy.allow_multiple_completions:
            session = self._create_session(survey_id, identity, single_attempt=False)
            return self._redirect(session, new_attempt=True)

        session = self.store.find_by_resource_and_user(survey_id, identity.resource_id, identity.user_id)
        if session is None:
            try:
                session = self._create_session(survey_id, identity, single_attempt=True)
                return self._redirect(session, new_attempt=True)
            except DuplicateParticipantError:
                # A concurrent launch created the participant first
                session = self.store.find_by_resource_and_user(survey_id, identity.resource_id, identity.user_id)
                if session is None:
                    raise

        if session.is_completed:
            log.info(
                "LTI launch for survey %s rejected: participant %s already completed",
                survey_id,
                session.token,
            )
            raise LtiStateError()

        return self._redirect(session, new_attempt=False)

    def _get_replay_window(self, policy):
        if not policy.check_nonce:
            return None
        return self.replay_window if self.replay_window is not None else get_nonce_window()

    def _create_session(self, survey_id, identity, single_attempt):
        """
        Stores a new participant for the identity, with a fresh token.
        """
        session = ParticipantSession(
            survey_id=survey_id,
            token=self.token_generator(),
            resource_id=identity.resource_id,
            user_id=identity.user_id,
            return_url=identity.return_url,
            course_title=identity.course_title,
            first_name=identity.first_name,
            last_name=identity.last_name,
            email=identity.email,
        )
        session = self.store.create(session, single_attempt=single_attempt)
        log.info(
            "Created participant %s for survey %s, resource %s and user %s",
            session.token,
            survey_id,
            session.resource_id,
            session.user_id,
        )
        return session

    def _redirect(self, session, new_attempt):
        return RedirectTarget(survey_id=session.survey_id, token=session.token, new_attempt=new_attempt)

