import unittest

from calgrid.util.floats import (
    EPSILON,
    is_equal,
    is_greater_or_equal,
    is_greater_than,
    is_less_or_equal,
    is_less_than,
    is_zero,
)


class TestFloatToleranceContract(unittest.TestCase):
    def test_drift_is_treated_as_equal(self) -> None:
        drift = 0.1 + 0.2 - 0.3
        self.assertNotEqual(drift, 0.0)
        self.assertTrue(is_zero(drift))
        self.assertTrue(is_equal(0.1 + 0.2, 0.3))
        self.assertFalse(is_greater_than(0.1 + 0.2, 0.3))
        self.assertFalse(is_less_than(0.3, 0.1 + 0.2))
        self.assertTrue(is_greater_or_equal(0.3, 0.1 + 0.2))
        self.assertTrue(is_less_or_equal(0.1 + 0.2, 0.3))

    def test_real_differences_are_ordered(self) -> None:
        a = 0.5
        b = 0.5 + 10 * EPSILON
        self.assertTrue(is_less_than(a, b))
        self.assertTrue(is_greater_than(b, a))
        self.assertFalse(is_equal(a, b))


if __name__ == "__main__":
    unittest.main(verbosity=2)
