"""
LTI survey configuration and participant models.
"""

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from lti_survey import constants
from lti_survey.data import AttributeMapping, Consumer, LaunchPolicy, ParticipantSession
from lti_survey.tokens import generate_random_string


class LtiSurveyConfiguration(models.Model):
    """
    Model to store the LTI launch configuration of a survey.

    Each survey has its own consumer key/secret pair, which is entered as the
    LTI passport of the consumer platform.

    .. no_pii:
    """
    survey_id = models.PositiveIntegerField(
        unique=True,
        help_text=_("Identifier of the survey launched through LTI."),
    )

    active = models.BooleanField(
        default=False,
        help_text=_("The survey is activated and its participant table exists."),
    )

    consumer_key = models.CharField(
        max_length=255,
        default=generate_random_string,
        help_text=_("REQUIRED: The key used as a password in your LTI system. Please use something random."),
    )

    consumer_secret = models.CharField(
        max_length=255,
        default=generate_random_string,
        help_text=_("REQUIRED: The secret used as a password in your LTI system. Please use something random."),
    )

    allow_multiple_completions = models.BooleanField(
        default=False,
        help_text=_(
            "Allow a user in a course to complete this survey more than once. "
            "A new participant is created each time they access the survey."
        ),
    )

    check_nonce = models.BooleanField(
        default=False,
        help_text=_("Reject launches with a stale timestamp or a nonce that was already used."),
    )

    # Names of the LTI attributes read on launch
    resource_id_attribute = models.CharField(
        max_length=255,
        default=constants.DEFAULT_RESOURCE_ID_ATTRIBUTE,
        help_text=_(
            "REQUIRED: The LTI attribute that stores the unique Resource ID. For Open edX it is probably "
            "resource_link_id, for Canvas it is probably custom_canvas_course_id."
        ),
    )
    user_id_attribute = models.CharField(
        max_length=255,
        default=constants.DEFAULT_USER_ID_ATTRIBUTE,
        help_text=_(
            "REQUIRED: The LTI attribute that stores the unique User ID. For Open edX it is probably "
            "user_id, for Canvas it is probably custom_canvas_user_id."
        ),
    )
    return_url_attribute = models.CharField(
        max_length=255,
        blank=True,
        default=constants.DEFAULT_RETURN_URL_ATTRIBUTE,
        help_text=_("Optional: The LTI attribute that stores the return URL. Leave blank for no data to be stored."),
    )
    course_title_attribute = models.CharField(
        max_length=255,
        blank=True,
        default=constants.DEFAULT_COURSE_TITLE_ATTRIBUTE,
        help_text=_("Optional: The LTI attribute that stores the course title. Leave blank for no data to be stored."),
    )
    email_attribute = models.CharField(
        max_length=255,
        blank=True,
        default=constants.DEFAULT_EMAIL_ATTRIBUTE,
        help_text=_(
            "Optional: The LTI attribute that stores the participant's email address. "
            "Leave blank for no data to be stored."
        ),
    )
    first_name_attribute = models.CharField(
        max_length=255,
        blank=True,
        default=constants.DEFAULT_FIRST_NAME_ATTRIBUTE,
        help_text=_(
            "Optional: The LTI attribute that stores the participant's first name. "
            "Leave blank for no data to be stored."
        ),
    )
    last_name_attribute = models.CharField(
        max_length=255,
        blank=True,
        default=constants.DEFAULT_LAST_NAME_ATTRIBUTE,
        help_text=_(
            "Optional: The LTI attribute that stores the participant's last name. "
            "Leave blank for no data to be stored."
        ),
    )

    def clean(self):
        errors = {}
        if not self.consumer_key.strip():
            errors['consumer_key'] = _("Set an Auth key before you can access the LTI URL.")
        if not self.consumer_secret.strip():
            errors['consumer_secret'] = _("Set an Auth secret before you can access the LTI URL.")
        if not self.resource_id_attribute:
            errors['resource_id_attribute'] = _("The Resource ID attribute is required.")
        if not self.user_id_attribute:
            errors['user_id_attribute'] = _("The User ID attribute is required.")
        if errors:
            raise ValidationError(errors)

    def get_attribute_mapping(self):
        """
        Returns the AttributeMapping configured for this survey.
        """
        return AttributeMapping(
            resource_id=self.resource_id_attribute,
            user_id=self.user_id_attribute,
            return_url=self.return_url_attribute,
            course_title=self.course_title_attribute,
            email=self.email_attribute,
            first_name=self.first_name_attribute,
            last_name=self.last_name_attribute,
        )

    def get_launch_policy(self):
        """
        Returns the read-only LaunchPolicy used to handle launches of this survey.
        """
        return LaunchPolicy(
            consumer=Consumer(key=self.consumer_key, secret=self.consumer_secret),
            attribute_mapping=self.get_attribute_mapping(),
            allow_multiple_completions=self.allow_multiple_completions,
            check_nonce=self.check_nonce,
        )

    def __str__(self):
        return f"[LTI survey {self.survey_id}] {'active' if self.active else 'inactive'}"


class LtiParticipant(models.Model):
    """
    Model for a participant session of a survey started through an LTI launch.

    Participants created while multiple completions are disabled are flagged
    as single-attempt; the database guarantees there is at most one of those
    per survey, resource and user, even when launches race each other.

    .. pii: Stores the name, email and LTI user id sent by the consumer platform.
    .. pii_types: name, email_address, other
    .. pii_retirement: retained
    """
    survey_id = models.PositiveIntegerField(db_index=True)
    token = models.CharField(max_length=64, unique=True)
    resource_id = models.CharField(max_length=255)
    user_id = models.CharField(max_length=255)

    return_url = models.TextField(blank=True)
    course_title = models.CharField(max_length=255, blank=True)
    first_name = models.CharField(max_length=255, blank=True)
    last_name = models.CharField(max_length=255, blank=True)
    email = models.CharField(max_length=255, blank=True)

    completed = models.CharField(
        max_length=20,
        choices=constants.COMPLETION_CHOICES,
        default=constants.COMPLETION_NOT_STARTED,
    )
    single_attempt = models.BooleanField(default=False)
    created = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['survey_id', 'resource_id', 'user_id'], name='lti_survey_participant_lookup'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['survey_id', 'resource_id', 'user_id'],
                condition=Q(single_attempt=True),
                name='lti_survey_single_attempt_participant',
            ),
        ]

    def to_session(self):
        """
        Returns the ParticipantSession value of this record.
        """
        return ParticipantSession(
            survey_id=self.survey_id,
            token=self.token,
            resource_id=self.resource_id,
            user_id=self.user_id,
            return_url=self.return_url,
            course_title=self.course_title,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            completed=self.completed,
        )

    def __str__(self):
        return f"[Survey {self.survey_id}] {self.resource_id} / {self.user_id}: {self.completed}"
