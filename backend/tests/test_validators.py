import unittest

from registration.validators import ValidationError, validate_email, validate_registration
from support import valid_registration


def error_fields(data):
    try:
        validate_registration(data)
    except ValidationError as e:
        return [err['field'] for err in e.errors]
    return []


class ValidateEmailTests(unittest.TestCase):
    def test_accepts_simple_addresses(self):
        self.assertTrue(validate_email('jane@example.com'))
        self.assertTrue(validate_email('a.b+c@school.k12.us'))

    def test_rejects_malformed_addresses(self):
        for email in ['', 'invalid-email', 'jane@example', 'jane@@example.com',
                      'jane doe@example.com', '@example.com', None, 42]:
            self.assertFalse(validate_email(email), email)


class ValidateRegistrationTests(unittest.TestCase):
    def test_valid_submission_is_cleaned(self):
        data = valid_registration(unknownField='dropped', grade=None)
        cleaned = validate_registration(data)

        self.assertEqual(cleaned['studentName'], 'John Doe')
        self.assertTrue(cleaned['consentGiven'])
        self.assertEqual(cleaned['additionalStudents'], [])
        self.assertNotIn('unknownField', cleaned)
        self.assertNotIn('grade', cleaned)

    def test_missing_required_fields_are_listed(self):
        fields = error_fields({
            'studentName': '',
            'teacher': '',
            'parentGuardianName': '',
            'parentGuardianEmail': '',
            'consentGiven': False,
        })
        self.assertEqual(
            sorted(fields),
            sorted(['studentName', 'teacher', 'parentGuardianName',
                    'parentGuardianEmail', 'consentGiven']),
        )

    def test_absent_fields_are_required(self):
        data = valid_registration()
        del data['teacher']
        self.assertEqual(error_fields(data), ['teacher'])

    def test_length_limits(self):
        self.assertEqual(error_fields(valid_registration(studentName='x' * 201)), ['studentName'])
        self.assertEqual(error_fields(valid_registration(studentName='x' * 200)), [])
        self.assertEqual(error_fields(valid_registration(projectName='p' * 501)), ['projectName'])
        self.assertEqual(error_fields(valid_registration(grade='g' * 51)), ['grade'])
        long_email = 'a' * 190 + '@example.com'
        self.assertEqual(error_fields(valid_registration(parentGuardianEmail=long_email)),
                         ['parentGuardianEmail'])

    def test_invalid_email_message(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_registration(valid_registration(parentGuardianEmail='invalid-email'))
        self.assertEqual(ctx.exception.errors,
                         [{'field': 'parentGuardianEmail', 'message': 'Invalid email format'}])

    def test_consent_must_be_true(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_registration(valid_registration(consentGiven=False))
        self.assertEqual(ctx.exception.errors[0]['message'], 'Consent must be given to register')

        self.assertEqual(error_fields(valid_registration(consentGiven='true')), ['consentGiven'])
        data = valid_registration()
        del data['consentGiven']
        self.assertEqual(error_fields(data), ['consentGiven'])

    def test_non_string_values_rejected(self):
        self.assertEqual(error_fields(valid_registration(studentName=123)), ['studentName'])

    def test_volunteer_flag_must_be_boolean(self):
        self.assertEqual(error_fields(valid_registration(parentWillingToVolunteer='yes')),
                         ['parentWillingToVolunteer'])
        cleaned = validate_registration(valid_registration(parentWillingToVolunteer=False))
        self.assertIs(cleaned['parentWillingToVolunteer'], False)

    def test_non_object_body(self):
        for body in [None, [], 'text']:
            with self.assertRaises(ValidationError) as ctx:
                validate_registration(body)
            self.assertEqual(ctx.exception.errors[0]['field'], '')


class AdditionalStudentTests(unittest.TestCase):
    def test_three_additional_students_allowed(self):
        students = [{'studentName': f'Student {i}', 'teacher': 'Mr. Johnson'} for i in range(3)]
        cleaned = validate_registration(valid_registration(additionalStudents=students))
        self.assertEqual(len(cleaned['additionalStudents']), 3)

    def test_more_than_three_rejected(self):
        students = [{'studentName': f'Student {i}', 'teacher': 'Mr. Johnson'} for i in range(4)]
        with self.assertRaises(ValidationError) as ctx:
            validate_registration(valid_registration(additionalStudents=students))
        self.assertIn(
            {'field': 'additionalStudents', 'message': 'Maximum 3 additional students allowed'},
            ctx.exception.errors,
        )

    def test_nested_field_paths(self):
        students = [
            {'studentName': 'Alice', 'teacher': 'Mr. Johnson'},
            {'studentName': 'Bob', 'teacher': '', 'parentGuardianEmail': 'bad'},
        ]
        fields = error_fields(valid_registration(additionalStudents=students))
        self.assertEqual(sorted(fields), ['additionalStudents.1.parentGuardianEmail',
                                          'additionalStudents.1.teacher'])

    def test_optional_parent_fields(self):
        students = [{'studentName': 'Alice', 'teacher': 'Mr. Johnson', 'parentGuardianEmail': ''}]
        cleaned = validate_registration(valid_registration(additionalStudents=students))
        self.assertEqual(cleaned['additionalStudents'][0]['parentGuardianEmail'], '')

    def test_non_list_and_non_object_entries(self):
        self.assertEqual(error_fields(valid_registration(additionalStudents='Alice')),
                         ['additionalStudents'])
        self.assertEqual(error_fields(valid_registration(additionalStudents=['Alice'])),
                         ['additionalStudents.0'])

    def test_null_additional_students_treated_as_empty(self):
        cleaned = validate_registration(valid_registration(additionalStudents=None))
        self.assertEqual(cleaned['additionalStudents'], [])


if __name__ == '__main__':
    unittest.main()
