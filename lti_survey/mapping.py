"""
Mapping of platform-specific launch attributes onto the canonical identity.
"""
import logging

from lti_survey.data import CanonicalIdentity
from lti_survey.exceptions import LtiValidationError

log = logging.getLogger(__name__)

REQUIRED_FIELDS = ('resource_id', 'user_id')
OPTIONAL_FIELDS = ('return_url', 'course_title', 'email', 'first_name', 'last_name')


def map_attributes(attributes, mapping):
    """
    Reads the canonical identity out of verified launch attributes.

    Values are passed through exactly as the consumer sent them.

    Arguments:
        attributes (dict): verified launch attributes
        mapping (AttributeMapping): the request key to read for each field

    Returns:
        CanonicalIdentity

    Raises:
        LtiValidationError if the resource id or user id can't be read.
    """
    identity = {}

    for field_name in REQUIRED_FIELDS:
        source_key = getattr(mapping, field_name)
        if not source_key or source_key not in attributes:
            log.info("LTI launch is missing the %s attribute %r", field_name, source_key)
            raise LtiValidationError(f"No {field_name.replace('_', ' ')} provided")
        identity[field_name] = attributes[source_key]

    for field_name in OPTIONAL_FIELDS:
        source_key = getattr(mapping, field_name)
        identity[field_name] = attributes.get(source_key, '') if source_key else ''

    return CanonicalIdentity(**identity)
