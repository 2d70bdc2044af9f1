"""
Admin views for LTI survey models.
"""
from django.contrib import admin

from lti_survey.models import LtiParticipant, LtiSurveyConfiguration


class LtiSurveyConfigurationAdmin(admin.ModelAdmin):
    """
    Admin view for LtiSurveyConfiguration models.
    """
    list_display = ('survey_id', 'active', 'consumer_key', 'allow_multiple_completions')
    list_filter = ('active', 'allow_multiple_completions')
    search_fields = ['survey_id', 'consumer_key']


class LtiParticipantAdmin(admin.ModelAdmin):
    """
    Admin view for LtiParticipant models.

    Makes the token and identity fields read-only to keep launches resumable.
    """
    list_display = ('survey_id', 'resource_id', 'user_id', 'completed', 'created')
    list_filter = ('completed',)
    search_fields = ['resource_id', 'user_id', 'token']
    readonly_fields = ('survey_id', 'token', 'resource_id', 'user_id', 'single_attempt', 'created')


admin.site.register(LtiSurveyConfiguration, LtiSurveyConfigurationAdmin)
admin.site.register(LtiParticipant, LtiParticipantAdmin)
