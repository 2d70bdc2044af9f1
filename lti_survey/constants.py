"""
LTI 1.1 launch constants.
"""

LTI_MESSAGE_TYPE = 'basic-lti-launch-request'
LTI_VERSION = 'LTI-1p0'

OAUTH_PARAMETER_PREFIX = 'oauth_'
OAUTH_CONSUMER_KEY = 'oauth_consumer_key'
OAUTH_SIGNATURE = 'oauth_signature'
OAUTH_SIGNATURE_METHOD_HMAC_SHA1 = 'HMAC-SHA1'

# Participant completion states
COMPLETION_NOT_STARTED = 'not_started'
COMPLETION_IN_PROGRESS = 'in_progress'
COMPLETION_COMPLETED = 'completed'
COMPLETION_CHOICES = [
    (COMPLETION_NOT_STARTED, 'Not started'),
    (COMPLETION_IN_PROGRESS, 'In progress'),
    (COMPLETION_COMPLETED, 'Completed'),
]

# Default request keys for each canonical identity field.
# Other platforms use different names, e.g. Canvas sends
# custom_canvas_course_id and custom_canvas_user_id.
DEFAULT_RESOURCE_ID_ATTRIBUTE = 'resource_link_id'
DEFAULT_USER_ID_ATTRIBUTE = 'user_id'
DEFAULT_RETURN_URL_ATTRIBUTE = 'launch_presentation_return_url'
DEFAULT_COURSE_TITLE_ATTRIBUTE = 'context_title'
DEFAULT_EMAIL_ATTRIBUTE = 'lis_person_contact_email_primary'
DEFAULT_FIRST_NAME_ATTRIBUTE = 'lis_person_name_given'
DEFAULT_LAST_NAME_ATTRIBUTE = 'lis_person_name_family'

# Length of generated participant tokens and consumer credentials
RANDOM_STRING_LENGTH = 32
