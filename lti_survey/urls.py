"""
URL mappings for the LTI survey launch provider.
"""
from django.urls import path

from lti_survey.views import lti_launch_endpoint

app_name = 'lti_survey'
urlpatterns = [
    path(
        'lti_survey/v1/launch/<int:survey_id>',
        lti_launch_endpoint,
        name='lti_survey.launch'
    ),
]
