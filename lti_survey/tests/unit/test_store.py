"""
Unit tests for lti_survey.store module
"""
from unittest.mock import patch

import ddt

from django.db import DatabaseError
from django.test.testcases import TestCase

from lti_survey import constants
from lti_survey.data import ParticipantSession, RedirectTarget
from lti_survey.exceptions import DuplicateParticipantError, LtiNotFoundError, LtiPersistenceError, LtiStateError
from lti_survey.launch import LaunchOrchestrator
from lti_survey.models import LtiParticipant, LtiSurveyConfiguration
from lti_survey.store import DjangoParticipantStore, ParticipantStore
from lti_survey.tests.test_utils import FAKE_CONSUMER_KEY, FAKE_CONSUMER_SECRET, FAKE_SURVEY_ID, make_launch_request


def make_session(token, **kwargs):
    """
    Helper to build a ParticipantSession of survey 42
    """
    fields = {
        'survey_id': 42,
        'token': token,
        'resource_id': 'unit42',
        'user_id': 'stu7',
    }
    fields.update(kwargs)
    return ParticipantSession(**fields)


@ddt.ddt
class TestParticipantStore(TestCase):
    """
    Unit tests for the abstract `ParticipantStore`
    """

    @ddt.data(
        ('table_exists', (42,)),
        ('find_by_resource_and_user', (42, 'unit42', 'stu7')),
        ('create', (make_session('token'),)),
        ('set_completion_status', (42, 'token', constants.COMPLETION_COMPLETED)),
    )
    @ddt.unpack
    def test_methods_not_implemented(self, method_name, args):
        with self.assertRaises(NotImplementedError):
            getattr(ParticipantStore(), method_name)(*args)


class TestDjangoParticipantStore(TestCase):
    """
    Unit tests for `DjangoParticipantStore`
    """

    def setUp(self):
        super().setUp()
        self.store = DjangoParticipantStore()

    def test_table_exists(self):
        self.assertFalse(self.store.table_exists(42))

        config = LtiSurveyConfiguration.objects.create(survey_id=42)
        self.assertFalse(self.store.table_exists(42))

        config.active = True
        config.save()
        self.assertTrue(self.store.table_exists(42))
        self.assertFalse(self.store.table_exists(43))

    def test_create_and_find(self):
        session = make_session('token-1', course_title='Intro', email='stu7@example.com')

        created = self.store.create(session, single_attempt=True)

        self.assertEqual(created, session)
        self.assertEqual(self.store.find_by_resource_and_user(42, 'unit42', 'stu7'), session)
        self.assertIsNone(self.store.find_by_resource_and_user(42, 'unit42', 'stu8'))
        self.assertIsNone(self.store.find_by_resource_and_user(43, 'unit42', 'stu7'))
        self.assertTrue(LtiParticipant.objects.get(token='token-1').single_attempt)

    def test_single_attempt_duplicate(self):
        """
        Test the database refuses a second single-attempt session for the same survey, resource and user
        """
        self.store.create(make_session('token-1'), single_attempt=True)

        with self.assertRaises(DuplicateParticipantError):
            self.store.create(make_session('token-2'), single_attempt=True)

        self.assertEqual(LtiParticipant.objects.count(), 1)

    def test_single_attempt_other_survey(self):
        self.store.create(make_session('token-1'), single_attempt=True)
        self.store.create(make_session('token-2', survey_id=43), single_attempt=True)

        self.assertEqual(LtiParticipant.objects.count(), 2)

    def test_multiple_attempts(self):
        """
        Test sessions that are not single-attempt can share the resource and user
        """
        self.store.create(make_session('token-1'), single_attempt=True)
        self.store.create(make_session('token-2'))
        self.store.create(make_session('token-3'))

        self.assertEqual(LtiParticipant.objects.filter(survey_id=42).count(), 3)
        self.assertEqual(self.store.find_by_resource_and_user(42, 'unit42', 'stu7').token, 'token-1')

    def test_duplicate_token(self):
        self.store.create(make_session('token-1'))

        with self.assertRaises(DuplicateParticipantError):
            self.store.create(make_session('token-1', user_id='stu8'))

    def test_database_error(self):
        with patch.object(LtiParticipant.objects, 'create', side_effect=DatabaseError('disk full')):
            with self.assertRaises(LtiPersistenceError) as context:
                self.store.create(make_session('token-1'))

        self.assertNotIsInstance(context.exception, DuplicateParticipantError)
        self.assertEqual(context.exception.http_status, 500)

    def test_set_completion_status(self):
        self.store.create(make_session('token-1'))

        session = self.store.set_completion_status(42, 'token-1', constants.COMPLETION_COMPLETED)

        self.assertTrue(session.is_completed)
        self.assertTrue(self.store.find_by_resource_and_user(42, 'unit42', 'stu7').is_completed)

    def test_set_completion_status_unknown_token(self):
        self.store.create(make_session('token-1'))

        for survey_id, token in ((42, 'token-2'), (43, 'token-1')):
            with self.assertRaises(LtiNotFoundError):
                self.store.set_completion_status(survey_id, token, constants.COMPLETION_COMPLETED)


class TestConcurrentFirstLaunch(TestCase):
    """
    Test two first launches of the same resource and user racing against the database
    """

    def setUp(self):
        super().setUp()
        LtiSurveyConfiguration.objects.create(
            survey_id=FAKE_SURVEY_ID,
            active=True,
            consumer_key=FAKE_CONSUMER_KEY,
            consumer_secret=FAKE_CONSUMER_SECRET,
        )
        self.store = DjangoParticipantStore()
        self.policy = LtiSurveyConfiguration.objects.get(survey_id=FAKE_SURVEY_ID).get_launch_policy()

    def test_losing_launch_resumes_winner(self):
        """
        Test the launch whose insert is refused resumes the session stored by the other launch
        """
        find_by_resource_and_user = self.store.find_by_resource_and_user
        lookups = []

        def find_after_other_launch(survey_id, resource_id, user_id):
            lookups.append((survey_id, resource_id, user_id))
            if len(lookups) == 1:
                # The other launch stores its session right after this lookup
                self.store.create(make_session('winner-token'), single_attempt=True)
                return None
            return find_by_resource_and_user(survey_id, resource_id, user_id)

        with patch.object(self.store, 'find_by_resource_and_user', side_effect=find_after_other_launch):
            target = LaunchOrchestrator(self.store).handle_launch(FAKE_SURVEY_ID, make_launch_request(), self.policy)

        self.assertEqual(target, RedirectTarget(survey_id=FAKE_SURVEY_ID, token='winner-token', new_attempt=False))
        self.assertEqual(len(lookups), 2)
        self.assertEqual(LtiParticipant.objects.count(), 1)
        self.assertEqual(LtiParticipant.objects.get().token, 'winner-token')

    def test_losing_launch_completed_winner(self):
        self.store.create(make_session('winner-token'), single_attempt=True)
        self.store.set_completion_status(FAKE_SURVEY_ID, 'winner-token', constants.COMPLETION_COMPLETED)
        find_by_resource_and_user = self.store.find_by_resource_and_user

        with patch.object(
            self.store, 'find_by_resource_and_user', side_effect=[None, find_by_resource_and_user(42, 'unit42', 'stu7')]
        ):
            with self.assertRaises(LtiStateError):
                LaunchOrchestrator(self.store).handle_launch(FAKE_SURVEY_ID, make_launch_request(), self.policy)

        self.assertEqual(LtiParticipant.objects.count(), 1)
