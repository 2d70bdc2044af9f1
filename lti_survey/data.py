"""
This module provides public data structures used to describe an LTI survey launch: the incoming request,
the per-survey launch policy, the identity mapped out of the request and the resulting participant session.
"""

from attrs import Factory, define, field, frozen, validators

from lti_survey import constants
from lti_survey.utils import get_survey_entry_url


def _copy_params(params):
    return dict(params or {})


def _body_items(launch_request):
    return tuple(launch_request.params.items())


@frozen
class LaunchRequest:
    """
    The LaunchRequest class holds an incoming LTI 1.1 launch as it was received.

    * url (required): The absolute URL the consumer posted the launch to, including any query string.
    * params (required): The form-encoded body parameters. Keys are case-sensitive and values are kept verbatim.
      A repeated key keeps its last value.
    * http_method (optional): The HTTP method of the launch. It defaults to POST.
    * body_items (optional): Every (key, value) pair of the body in the order received, repeated keys included.
      The signature is checked against these. It defaults to the items of ``params``.
    """
    url = field(validator=validators.instance_of(str))
    params = field(converter=_copy_params)
    http_method = field(default='POST')
    body_items = field(
        default=Factory(_body_items, takes_self=True),
        converter=tuple,
    )


@frozen
class Consumer:
    """
    The LTI consumer credentials configured for a survey. The secret never leaves this process.
    """
    key = field()
    secret = field(repr=False)


@frozen
class AttributeMapping:
    """
    The AttributeMapping class binds each canonical identity field to the request key the consumer platform
    uses for it.

    * resource_id (required): The key holding the unique resource (e.g. unit) identifier.
    * user_id (required): The key holding the unique user identifier.
    * return_url, course_title, email, first_name, last_name (optional): An empty value means the field is
      not populated from the launch.
    """
    resource_id = field(default=constants.DEFAULT_RESOURCE_ID_ATTRIBUTE)
    user_id = field(default=constants.DEFAULT_USER_ID_ATTRIBUTE)
    return_url = field(default=constants.DEFAULT_RETURN_URL_ATTRIBUTE)
    course_title = field(default=constants.DEFAULT_COURSE_TITLE_ATTRIBUTE)
    email = field(default=constants.DEFAULT_EMAIL_ATTRIBUTE)
    first_name = field(default=constants.DEFAULT_FIRST_NAME_ATTRIBUTE)
    last_name = field(default=constants.DEFAULT_LAST_NAME_ATTRIBUTE)


@frozen
class CanonicalIdentity:
    """
    The identity of the launching user, as mapped from the launch attributes.
    Optional fields are empty strings when the consumer did not send them.
    """
    resource_id = field()
    user_id = field()
    return_url = field(default='')
    course_title = field(default='')
    email = field(default='')
    first_name = field(default='')
    last_name = field(default='')


@frozen
class LaunchPolicy:
    """
    Per-survey launch configuration, read-only for the duration of a launch.

    * consumer (required): The Consumer whose key and secret the launch must be signed with.
    * attribute_mapping (optional): The AttributeMapping to read the identity with.
    * allow_multiple_completions (optional): If True, every launch creates a fresh participant session.
    * check_nonce (optional): If True, launches with a stale timestamp or a reused nonce are rejected.
    """
    consumer = field(validator=validators.instance_of(Consumer))
    attribute_mapping = field(
        factory=AttributeMapping,
        validator=validators.instance_of(AttributeMapping),
    )
    allow_multiple_completions = field(default=False)
    check_nonce = field(default=False)


@define
class ParticipantSession:
    """
    A participant session of a survey, tying a (resource, user) pair to an access token.
    """
    survey_id = field()
    token = field()
    resource_id = field()
    user_id = field()
    return_url = field(default='')
    course_title = field(default='')
    first_name = field(default='')
    last_name = field(default='')
    email = field(default='')
    completed = field(
        default=constants.COMPLETION_NOT_STARTED,
        validator=validators.in_([value for value, _ in constants.COMPLETION_CHOICES]),
    )

    @property
    def is_completed(self):
        return self.completed == constants.COMPLETION_COMPLETED


@frozen
class RedirectTarget:
    """
    Where the browser is sent once the launch is resolved.

    ``new_attempt`` is True when the session was just created, so that the survey
    starts from the beginning instead of resuming.
    """
    survey_id = field()
    token = field()
    new_attempt = field(default=False)

    @property
    def url(self):
        return get_survey_entry_url(self.survey_id, self.token, self.new_attempt)
