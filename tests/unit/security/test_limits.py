"""
Test cases for security limits and validation.

Tests focus on preventing resource exhaustion attacks and validating input constraints.
"""

import sys
import unittest

from jsonsax.security.exceptions import ErrorKind, SecurityError
from jsonsax.security.limits import LimitValidator
from jsonsax.utils.config import ParseLimits


class TestLimitValidator(unittest.TestCase):
    """Test LimitValidator functionality for security constraints."""

    def setUp(self):
        """Set up test validator with custom limits."""
        self.limits = ParseLimits(
            max_input_size=1000,
            max_string_length=50,
            max_number_length=20,
            max_nesting_depth=5,
            max_array_items=10,
            max_object_keys=10,
            max_total_items=15,
        )
        self.validator = LimitValidator(self.limits)

    def test_input_size_validation_pass(self):
        """Test input size validation within limits."""
        self.validator.validate_input_size("x" * 500)  # Should not raise

    def test_input_size_validation_fail(self):
        """Test input size validation exceeding limits."""
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_input_size("x" * 1001)

        error = cm.exception
        self.assertIn("input of 1001 characters exceeds limit 1000", str(error))
        self.assertEqual(error.kind, ErrorKind.LIMIT_EXCEEDED)

    def test_string_length_validation_pass(self):
        """Test string length validation within limits."""
        self.validator.validate_string_length(30)  # Should not raise

    def test_string_length_validation_fail(self):
        """Test that the limit counts UTF-8 bytes."""
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_string_length(51)

        self.assertEqual(cm.exception.message, "string of 51 UTF-8 bytes exceeds limit 50")

    def test_number_length_validation_pass(self):
        """Test number length validation within limits."""
        self.validator.validate_number_length("123.456789")  # Should not raise

    def test_number_length_validation_fail(self):
        """Test number length validation exceeding limits."""
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_number_length("1" * 21)

        error = cm.exception
        self.assertIn("number literal of 21 characters exceeds limit 20", str(error))

    def test_nesting_depth_validation_pass(self):
        """Test nesting depth validation within limits."""
        for _ in range(5):
            self.validator.enter_structure()

        # At max depth but not over
        self.assertEqual(self.validator.nesting_depth, 5)

    def test_nesting_depth_validation_fail(self):
        """Test nesting depth validation exceeding limits."""
        for _ in range(5):
            self.validator.enter_structure()

        with self.assertRaises(SecurityError) as cm:
            self.validator.enter_structure()

        error = cm.exception
        self.assertIn("nesting depth 6 exceeds limit 5", str(error))
        self.assertEqual(error.kind, ErrorKind.NESTING_TOO_DEEP)

    def test_nesting_depth_exit(self):
        """Test exiting nested structures."""
        self.validator.enter_structure()
        self.validator.enter_structure()
        self.assertEqual(self.validator.nesting_depth, 2)

        self.validator.exit_structure()
        self.assertEqual(self.validator.nesting_depth, 1)

        self.validator.exit_structure()
        self.validator.exit_structure()  # never goes negative
        self.assertEqual(self.validator.nesting_depth, 0)

    def test_array_items_validation_pass(self):
        """Test array items validation within limits."""
        for i in range(10):
            self.validator.validate_array_items(i + 1)

    def test_array_items_validation_fail(self):
        """Test array items validation exceeding limits."""
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_array_items(11)

        self.assertIn("array with 11 elements exceeds limit 10", str(cm.exception))

    def test_object_keys_validation_pass(self):
        """Test object keys validation within limits."""
        for i in range(10):
            self.validator.validate_object_keys(i + 1)

    def test_object_keys_validation_fail(self):
        """Test object keys validation exceeding limits."""
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_object_keys(11)

        self.assertIn("object with 11 properties exceeds limit 10", str(cm.exception))

    def test_total_items(self):
        """Test the running count of values."""
        for _ in range(15):
            self.validator.count_item()

        with self.assertRaises(SecurityError) as cm:
            self.validator.count_item()

        self.assertIn("value count 16 exceeds limit 15", str(cm.exception))

    def test_validator_state_isolation(self):
        """Test that validator state is properly isolated."""
        validator1 = LimitValidator(self.limits)
        validator2 = LimitValidator(self.limits)

        validator1.enter_structure()
        validator1.count_item()

        self.assertEqual(validator1.nesting_depth, 1)
        self.assertEqual(validator2.nesting_depth, 0)
        self.assertEqual(validator2.total_items, 0)

    def test_reset(self):
        """Test resetting validator state between parses."""
        self.validator.enter_structure()
        self.validator.count_item()
        self.validator.reset()

        self.assertEqual(self.validator.nesting_depth, 0)
        self.assertEqual(self.validator.total_items, 0)


class TestDefaultLimits(unittest.TestCase):
    """Test the default limit values."""

    def test_default_values(self):
        """Test that only the nesting depth is bounded by default."""
        limits = ParseLimits()
        self.assertEqual(limits.max_input_size, sys.maxsize)
        self.assertEqual(limits.max_string_length, sys.maxsize)
        self.assertEqual(limits.max_number_length, sys.maxsize)
        self.assertEqual(limits.max_nesting_depth, 100)

    def test_default_validator_accepts_deep_nesting_to_limit(self):
        """Test that the default depth limit allows 100 levels."""
        validator = LimitValidator(ParseLimits())
        for _ in range(100):
            validator.enter_structure()
        with self.assertRaises(SecurityError):
            validator.enter_structure()


if __name__ == '__main__':
    unittest.main()
