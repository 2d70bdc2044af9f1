"""
Unit tests for lti_survey.utils module
"""
from django.test.testcases import TestCase
from django.test.utils import override_settings

from lti_survey.utils import (
    get_launch_base_url,
    get_lti_launch_path,
    get_lti_launch_url,
    get_nonce_window,
    get_survey_entry_url,
)


class TestSurveyEntryUrl(TestCase):
    """
    Tests for `get_survey_entry_url`
    """

    def test_resume_url(self):
        self.assertEqual(get_survey_entry_url(42, 'abc'), '/survey/index?sid=42&token=abc')

    def test_new_attempt_url(self):
        self.assertEqual(get_survey_entry_url(42, 'abc', new_attempt=True), '/survey/index?sid=42&token=abc&newtest=Y')

    @override_settings(LTI_SURVEY_ENTRY_URL='https://surveys.example.com/index.php/survey/index')
    def test_entry_url_setting(self):
        self.assertEqual(
            get_survey_entry_url(42, 'abc'),
            'https://surveys.example.com/index.php/survey/index?sid=42&token=abc',
        )


class TestLaunchUrl(TestCase):
    """
    Tests for the launch URL helpers
    """

    def test_launch_path(self):
        self.assertEqual(get_lti_launch_path(42), '/lti_survey/v1/launch/42')

    def test_launch_url(self):
        self.assertEqual(get_lti_launch_url(42), '/lti_survey/v1/launch/42')
        self.assertEqual(
            get_lti_launch_url(42, 'https://surveys.example.com/'),
            'https://surveys.example.com/lti_survey/v1/launch/42',
        )

    @override_settings(LTI_SURVEY_BASE_URL_OVERRIDE='https://public.example.com')
    def test_launch_url_override(self):
        self.assertEqual(get_launch_base_url(), 'https://public.example.com')
        self.assertEqual(get_lti_launch_url(42), 'https://public.example.com/lti_survey/v1/launch/42')
        self.assertEqual(
            get_lti_launch_url(42, 'https://surveys.example.com'),
            'https://surveys.example.com/lti_survey/v1/launch/42',
        )

    def test_nonce_window(self):
        self.assertEqual(get_nonce_window(), 300)

        with self.settings(LTI_SURVEY_NONCE_WINDOW=60):
            self.assertEqual(get_nonce_window(), 60)
