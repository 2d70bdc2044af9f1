"""
Python APIs used to configure LTI surveys and handle their launches.

These are the entry points other apps (e.g. the survey engine) should use,
instead of touching the models directly.
"""

from lti_survey import constants
from lti_survey.exceptions import LtiNotFoundError
from lti_survey.launch import LaunchOrchestrator
from lti_survey.models import LtiSurveyConfiguration
from lti_survey.store import DjangoParticipantStore
from lti_survey.tokens import generate_consumer_credentials
from lti_survey.utils import _, get_lti_launch_url


def get_survey_configuration(survey_id):
    """
    Retrieves the LTI configuration of a survey.

    Raises:
        LtiNotFoundError if the survey has no LTI configuration.
    """
    try:
        return LtiSurveyConfiguration.objects.get(survey_id=survey_id)
    except LtiSurveyConfiguration.DoesNotExist as exc:
        raise LtiNotFoundError(f"Survey {survey_id} does not exist") from exc


def get_launch_policy(survey_id):
    """
    Returns the LaunchPolicy of a survey.
    """
    return get_survey_configuration(survey_id).get_launch_policy()


def create_survey_configuration(survey_id, **kwargs):
    """
    Creates the LTI configuration of a survey with a freshly generated key and secret.

    Any model field can be passed as a keyword argument to override its default.
    """
    consumer = generate_consumer_credentials()
    kwargs.setdefault('consumer_key', consumer.key)
    kwargs.setdefault('consumer_secret', consumer.secret)
    return LtiSurveyConfiguration.objects.create(survey_id=survey_id, **kwargs)


def launch_survey(survey_id, launch_request, store=None, **kwargs):
    """
    Handles an LTI launch of a survey and returns the RedirectTarget.

    Arguments:
        survey_id: the survey being launched
        launch_request (LaunchRequest): the launch as received
        store (ParticipantStore): participant storage, defaults to the Django models
        kwargs: extra arguments for the LaunchOrchestrator

    Raises:
        LtiError subclasses if the launch is rejected.
    """
    policy = get_launch_policy(survey_id)
    orchestrator = LaunchOrchestrator(store or DjangoParticipantStore(), **kwargs)
    return orchestrator.handle_launch(survey_id, launch_request, policy)


def mark_participant_in_progress(survey_id, token, store=None):
    """
    Flags a participant as having started the survey.
    """
    store = store or DjangoParticipantStore()
    return store.set_completion_status(survey_id, token, constants.COMPLETION_IN_PROGRESS)


def mark_participant_completed(survey_id, token, store=None):
    """
    Flags a participant as having completed the survey.

    Further launches for the same resource and user are rejected unless the
    survey allows multiple completions.
    """
    store = store or DjangoParticipantStore()
    return store.set_completion_status(survey_id, token, constants.COMPLETION_COMPLETED)


def get_launch_info(survey_id, base_url=None):
    """
    Returns what a consumer platform needs to set up the survey.

    If the survey is not ready to be launched, `launch_url` is None and
    `messages` explains what is missing.

    Arguments:
        survey_id: the survey to describe
        base_url (str): scheme and host of this site

    Returns:
        dict: with keys `launch_url`, `lti_passport` and `messages`
    """
    lti_config = get_survey_configuration(survey_id)

    messages = []
    if not lti_config.active:
        messages.append(_("Please activate the survey before continuing."))
    if not lti_config.consumer_key.strip():
        messages.append(_("Set an Auth key and save these settings before you can access the LTI URL."))
    if not lti_config.consumer_secret.strip():
        messages.append(_("Set an Auth secret and save these settings before you can access the LTI URL."))

    if messages:
        return {
            'launch_url': None,
            'lti_passport': None,
            'messages': messages,
        }

    return {
        'launch_url': get_lti_launch_url(survey_id, base_url),
        # Open edX "LTI Passports" entry, in the form id:key:secret
        'lti_passport': f'survey{survey_id}:{lti_config.consumer_key}:{lti_config.consumer_secret}',
        'messages': [],
    }
