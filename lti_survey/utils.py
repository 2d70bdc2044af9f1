"""
Utility functions for the LTI survey launch provider
"""
from urllib.parse import urlencode

from django.conf import settings
from django.urls import reverse


DEFAULT_SURVEY_ENTRY_URL = '/survey/index'
DEFAULT_NONCE_WINDOW = 300


def _(text):
    """
    Make '_' a no-op so we can scrape strings
    """
    return text


def get_survey_entry_url(survey_id, token, new_attempt=False):
    """
    Returns the link to the survey-taking entry point for a participant token.

    The entry point can be changed with the LTI_SURVEY_ENTRY_URL setting.

    :param survey_id: the survey the participant belongs to
    :param token: the participant token
    :param new_attempt: mark the link as a fresh attempt rather than a resume
    """
    query = {
        'sid': survey_id,
        'token': token,
    }
    if new_attempt:
        query['newtest'] = 'Y'

    return "{entry_url}?{query}".format(
        entry_url=getattr(settings, 'LTI_SURVEY_ENTRY_URL', DEFAULT_SURVEY_ENTRY_URL),
        query=urlencode(query),
    )


def get_launch_base_url():
    """
    Returns the scheme and host launches are signed against, if overridden.

    When running behind a proxy (or a tunnel such as ngrok) the consumer signs
    the public URL while Django sees the internal one. Use the setting
    LTI_SURVEY_BASE_URL_OVERRIDE to fix the public base in that case.
    """
    return getattr(settings, 'LTI_SURVEY_BASE_URL_OVERRIDE', None)


def get_lti_launch_path(survey_id):
    """
    Returns the path of the LTI launch endpoint of a survey
    """
    return reverse('lti_survey:lti_survey.launch', kwargs={'survey_id': survey_id})


def get_lti_launch_url(survey_id, base_url=None):
    """
    Returns the absolute LTI launch URL for a survey, as entered in the consumer platform.

    :param survey_id: the survey to launch
    :param base_url: scheme and host to use, defaults to LTI_SURVEY_BASE_URL_OVERRIDE
    """
    base_url = base_url or get_launch_base_url() or ''
    return "{base}{path}".format(
        base=base_url.rstrip('/'),
        path=get_lti_launch_path(survey_id),
    )


def get_nonce_window():
    """
    Returns the number of seconds a launch timestamp stays valid, and a nonce stays reserved,
    when replay protection is enabled for a survey.
    """
    return getattr(settings, 'LTI_SURVEY_NONCE_WINDOW', DEFAULT_NONCE_WINDOW)
