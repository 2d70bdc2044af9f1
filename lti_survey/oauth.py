"""
Utility functions for signing and verifying LTI 1.1 launches with OAuth 1.0a.
"""

import logging
import time
import urllib.parse

from django.core.cache import cache
from edx_django_utils.cache import get_cache_key
from oauthlib import oauth1
from oauthlib.common import safe_string_equals

from lti_survey.constants import (
    LTI_MESSAGE_TYPE,
    LTI_VERSION,
    OAUTH_CONSUMER_KEY,
    OAUTH_PARAMETER_PREFIX,
    OAUTH_SIGNATURE,
    OAUTH_SIGNATURE_METHOD_HMAC_SHA1,
)
from lti_survey.exceptions import LtiAuthError, LtiValidationError

log = logging.getLogger(__name__)


class SignedRequest:
    """
    Encapsulates request attributes needed when working
    with the `oauthlib.oauth1` API
    """
    def __init__(self, **kwargs):
        self.uri = kwargs.get('uri')
        self.http_method = kwargs.get('http_method')
        self.params = kwargs.get('params')
        self.signature = kwargs.get('signature')


def sign_launch_parameters(key, secret, url, lti_parameters):
    """
    Signs launch parameters the way an LTI 1.1 consumer does.

    This is a public helper for the consumer side of `verify_launch_request`:
    it lets survey administrators build a launch form to try a survey's
    configuration without a learning platform.

    Arguments:
        key (str): LTI consumer key
        secret (str): LTI consumer secret
        url (str): launch URL of the survey
        lti_parameters (dict or list): LTI parameters to send, as a dict or
            as (key, value) pairs when a key is repeated

    Returns:
        list: (key, value) pairs of the LTI parameters followed by the OAuth
        parameters, with values unescaped as a browser would post them

    Raises:
        LtiValidationError if the launch URL can't be signed.
    """
    lti_items = list(lti_parameters.items() if isinstance(lti_parameters, dict) else lti_parameters)
    client = oauth1.Client(client_key=str(key), client_secret=str(secret))
    try:
        __, headers, __ = client.sign(
            url.strip(),
            http_method='POST',
            body=lti_items,
            # Needed for body encoding
            headers={'Content-Type': 'application/x-www-form-urlencoded'},
        )
    except ValueError as err:
        raise LtiValidationError("Failed to sign the launch for {}".format(url)) from err

    oauth_items = [
        (name, oauth1.rfc5849.utils.unescape(value))
        for name, value in oauth1.rfc5849.utils.parse_authorization_header(headers['Authorization'])
    ]
    return lti_items + oauth_items


def check_launch_parameters(params):
    """
    Checks that the parameters describe an LTI 1.1 basic launch.

    Raises:
        LtiValidationError if a required parameter is missing or wrong.
    """
    if params.get('lti_message_type') != LTI_MESSAGE_TYPE or params.get('lti_version') != LTI_VERSION:
        raise LtiValidationError("Not a valid LTI launch request")

    if 'resource_link_id' not in params:
        raise LtiValidationError("No resource link id provided")

    if not params.get(OAUTH_CONSUMER_KEY):
        raise LtiValidationError("Missing oauth_consumer_key in request")


def check_launch_replay(params, window):
    """
    Rejects launches whose timestamp is outside of `window` seconds
    or whose nonce was already used by the same consumer within it.

    Raises:
        LtiAuthError if the launch is stale or replayed.
    """
    try:
        timestamp = int(params.get('oauth_timestamp', ''))
    except ValueError as err:
        log.info("LTI launch rejected: invalid oauth_timestamp %r", params.get('oauth_timestamp'))
        raise LtiAuthError() from err

    if abs(time.time() - timestamp) > window:
        log.info("LTI launch rejected: oauth_timestamp %s is outside of the %ss window", timestamp, window)
        raise LtiAuthError()

    nonce = params.get('oauth_nonce')
    if not nonce:
        log.info("LTI launch rejected: missing oauth_nonce")
        raise LtiAuthError()

    cache_key = get_cache_key(
        app='lti_survey',
        key='nonce',
        consumer_key=params[OAUTH_CONSUMER_KEY],
        nonce=nonce,
    )
    # cache.add is atomic: it only succeeds for the first launch using the nonce
    if not cache.add(cache_key, timestamp, timeout=window):
        log.info("LTI launch rejected: oauth_nonce %s was already used", nonce)
        raise LtiAuthError()


def get_launch_attributes(params):
    """
    Strips the OAuth protocol parameters from a launch, keeping the consumer key.
    """
    return {
        key: value
        for key, value in params.items()
        if not key.startswith(OAUTH_PARAMETER_PREFIX) or key == OAUTH_CONSUMER_KEY
    }


def verify_launch_request(launch_request, consumer, replay_window=None):
    """
    Verify an LTI 1.1 launch signed with OAuth 1.0a HMAC-SHA1.

    The signature base string is rebuilt from the launch URL (including its
    query parameters) and the form body, and signed with the consumer secret.
    The consumer key is *not* compared here: callers must check it against the
    key configured for the launched resource.

    Arguments:
        launch_request (LaunchRequest): the launch as received
        consumer (Consumer): credentials to verify the launch with
        replay_window (int): if set, enforce timestamp freshness and nonce uniqueness within this many seconds

    Returns:
        dict: the launch attributes, without OAuth parameters except oauth_consumer_key

    Raises:
        LtiValidationError if the launch is malformed.
        LtiAuthError if the signature can't be verified.
    """
    params = launch_request.params
    check_launch_parameters(params)

    signature_method = params.get('oauth_signature_method')
    if signature_method != OAUTH_SIGNATURE_METHOD_HMAC_SHA1:
        log.info("LTI launch rejected: unsupported signature method %r", signature_method)
        raise LtiAuthError()

    oauth_signature = params.get(OAUTH_SIGNATURE)
    if not oauth_signature:
        log.info("LTI launch rejected: missing oauth_signature")
        raise LtiAuthError()

    try:
        signed_params = oauth1.rfc5849.signature.collect_parameters(
            uri_query=urllib.parse.urlparse(launch_request.url).query,
            body=list(launch_request.body_items),
        )
        signed_request = SignedRequest(
            uri=launch_request.url,
            http_method=str(launch_request.http_method).upper(),
            params=signed_params,
            signature=oauth_signature,
        )
        is_valid = oauth1.rfc5849.signature.verify_hmac_sha1(signed_request, consumer.secret)
    except ValueError as err:
        log.error("OAuth signature verification failed for url %s: %s", launch_request.url, err)
        raise LtiAuthError() from err

    if not is_valid:
        log.error(
            "OAuth signature verification failed, for consumer key:%s url:%s method:%s",
            params.get(OAUTH_CONSUMER_KEY),
            launch_request.url,
            launch_request.http_method,
        )
        raise LtiAuthError()

    if replay_window is not None:
        check_launch_replay(params, replay_window)

    return get_launch_attributes(params)


def consumer_key_matches(attributes, consumer):
    """
    Constant-time comparison of the verified consumer key with the configured one.
    """
    return safe_string_equals(str(attributes.get(OAUTH_CONSUMER_KEY, '')), str(consumer.key))
