import unittest

from core.error_handlers import validation_errors_to_fields


class ValidationErrorsToFieldsTests(unittest.TestCase):

    def test_value_error_prefix_is_stripped(self):
        errors = [{"type": "value_error", "loc": ("body", "taxId"), "msg": "Value error, Tax ID must be exactly 10 digits"}]
        self.assertEqual(validation_errors_to_fields(errors), {"taxId": "Tax ID must be exactly 10 digits"})

    def test_missing_field(self):
        errors = [{"type": "missing", "loc": ("body", "hireDate"), "msg": "Field required"}]
        self.assertEqual(validation_errors_to_fields(errors), {"hireDate": "hireDate is required"})

    def test_query_parameter(self):
        errors = [{"type": "greater_than_equal", "loc": ("query", "page"), "msg": "Input should be greater than or equal to 0"}]
        self.assertEqual(validation_errors_to_fields(errors), {"page": "Input should be greater than or equal to 0"})

    def test_every_field_reported_first_message_wins(self):
        errors = [
            {"type": "value_error", "loc": ("body", "name"), "msg": "Value error, Company name is required"},
            {"type": "string_type", "loc": ("body", "name"), "msg": "Input should be a valid string"},
            {"type": "value_error", "loc": ("body", "taxId"), "msg": "Value error, Tax ID is required"},
        ]
        self.assertEqual(validation_errors_to_fields(errors), {
            "name": "Company name is required",
            "taxId": "Tax ID is required",
        })

    def test_whole_body_error(self):
        errors = [{"type": "model_attributes_type", "loc": ("body",), "msg": "Input should be a valid dictionary"}]
        self.assertEqual(validation_errors_to_fields(errors), {"body": "Input should be a valid dictionary"})


if __name__ == "__main__":
    unittest.main()
