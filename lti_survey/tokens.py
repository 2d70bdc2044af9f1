"""
Random token and credential generation.

Both participant tokens and the initial consumer key/secret come from
``django.utils.crypto.get_random_string``, which draws from the operating
system CSPRNG. 32 alphanumeric characters give roughly 190 bits of entropy.
"""
from django.utils.crypto import get_random_string

from lti_survey.constants import RANDOM_STRING_LENGTH
from lti_survey.data import Consumer


def generate_random_string(length=RANDOM_STRING_LENGTH):
    """
    Returns a random alphanumeric string, safe to use in URLs and LTI passports.
    """
    return get_random_string(length)


def generate_token():
    """
    Returns a new participant token.
    """
    return generate_random_string()


def generate_consumer_credentials():
    """
    Returns a Consumer with a freshly generated key and secret.
    """
    return Consumer(key=generate_random_string(), secret=generate_random_string())
