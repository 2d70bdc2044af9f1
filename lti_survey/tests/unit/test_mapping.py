"""
Unit tests for lti_survey.mapping module
"""
import unittest

import ddt

from lti_survey.data import AttributeMapping, CanonicalIdentity
from lti_survey.exceptions import LtiValidationError
from lti_survey.mapping import map_attributes
from lti_survey.tests.test_utils import make_launch_parameters


@ddt.ddt
class TestMapAttributes(unittest.TestCase):
    """
    Unit tests for `lti_survey.mapping.map_attributes`
    """

    def test_default_mapping(self):
        identity = map_attributes(make_launch_parameters(), AttributeMapping())

        self.assertEqual(identity, CanonicalIdentity(
            resource_id='unit42',
            user_id='stu7',
            return_url='https://lms.example.com/courses/intro/unit42',
            course_title='Introduction to Surveys',
            email='stu7@example.com',
            first_name='Ada',
            last_name='Lovelace',
        ))

    def test_custom_mapping(self):
        """
        Test platforms using other request keys, e.g. Canvas
        """
        attributes = {
            'custom_canvas_course_id': '1138',
            'custom_canvas_user_id': '2049',
            'resource_link_id': 'unit42',
            'user_id': 'stu7',
        }
        mapping = AttributeMapping(
            resource_id='custom_canvas_course_id',
            user_id='custom_canvas_user_id',
        )

        identity = map_attributes(attributes, mapping)

        self.assertEqual(identity.resource_id, '1138')
        self.assertEqual(identity.user_id, '2049')

    def test_optional_attributes_missing(self):
        attributes = make_launch_parameters(
            context_title=None,
            launch_presentation_return_url=None,
            lis_person_contact_email_primary=None,
            lis_person_name_given=None,
            lis_person_name_family=None,
        )

        identity = map_attributes(attributes, AttributeMapping())

        self.assertEqual(identity, CanonicalIdentity(resource_id='unit42', user_id='stu7'))

    def test_optional_attributes_not_mapped(self):
        """
        Test an empty mapping leaves the field empty, even if the launch carries it
        """
        mapping = AttributeMapping(email='', first_name='', last_name='')

        identity = map_attributes(make_launch_parameters(), mapping)

        self.assertEqual(identity.email, '')
        self.assertEqual(identity.first_name, '')
        self.assertEqual(identity.last_name, '')
        self.assertEqual(identity.course_title, 'Introduction to Surveys')

    def test_values_passed_through(self):
        attributes = make_launch_parameters(user_id='  STU-7 ', lis_person_name_given='')

        identity = map_attributes(attributes, AttributeMapping())

        self.assertEqual(identity.user_id, '  STU-7 ')
        self.assertEqual(identity.first_name, '')

    @ddt.data(
        ({'resource_link_id': None}, {}, "No resource id provided"),
        ({'user_id': None}, {}, "No user id provided"),
        ({}, {'resource_id': ''}, "No resource id provided"),
        ({}, {'user_id': 'custom_canvas_user_id'}, "No user id provided"),
    )
    @ddt.unpack
    def test_required_attribute_missing(self, overrides, mapping_kwargs, message):
        with self.assertRaises(LtiValidationError) as context:
            map_attributes(make_launch_parameters(**overrides), AttributeMapping(**mapping_kwargs))

        self.assertEqual(context.exception.message, message)
