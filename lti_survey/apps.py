"""
lti_survey Django application initialization.
"""

from django.apps import AppConfig


class LTISurveyApp(AppConfig):
    """
    Configuration for the lti_survey Django application.
    """

    name = 'lti_survey'
    verbose_name = 'LTI Survey Provider'
    default_auto_field = 'django.db.models.AutoField'
