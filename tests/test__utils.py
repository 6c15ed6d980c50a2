import numpy as np
import pytest

from tailstat import (
    DistributionError,
    InvalidParameterError,
    InvalidProbabilityError,
    InvalidRangeError,
    ParameterValidationError,
    SolverError,
    update_defaults,
)
from tailstat._special import erf_difference, generalized_harmonic, log_binomial_coefficient
from tailstat._utils import (
    DEFAULTS,
    NotStrictlyPositiveError,
    OutOfRangeError,
    check_probability,
    is_finite_strictly_positive,
)


class TestUpdateDefaults:
    """Test the global configuration."""

    def test_update(self):
        update_defaults(ratio=50, default_color="C3")
        assert DEFAULTS["ratio"] == 50
        assert DEFAULTS["default_color"] == "C3"

    def test_global_seed_becomes_generator(self):
        update_defaults(global_seed=1)
        assert isinstance(DEFAULTS["global_seed"], np.random.Generator)

    def test_unknown_key_is_ignored(self):
        with pytest.warns(UserWarning, match="colour"):
            update_defaults(colour="red")
        assert "colour" not in DEFAULTS


class TestErrors:
    """Test the error hierarchy and messages."""

    def test_hierarchy(self):
        for error in (ParameterValidationError, InvalidParameterError, InvalidProbabilityError, SolverError):
            assert issubclass(error, DistributionError)
        assert issubclass(DistributionError, ValueError)
        assert issubclass(InvalidRangeError, InvalidParameterError)

    def test_probability_message(self):
        with pytest.raises(InvalidProbabilityError, match="Not a probability"):
            check_probability(1.5)

    def test_probability_bounds(self):
        check_probability(0)
        check_probability(1)
        with pytest.raises(InvalidProbabilityError):
            check_probability(np.nan)

    def test_range_message(self):
        assert str(InvalidRangeError(5, 2)) == "Lower bound 5 > upper bound 2"
        assert str(InvalidRangeError(5, 5, strict=True)) == "Lower bound 5 >= upper bound 5"

    def test_parameter_messages(self):
        assert "-1" in str(NotStrictlyPositiveError(-1))
        assert "(0, 1]" in str(OutOfRangeError(2, 0, 1, open_lower=True))

    def test_parameter_validation_lists_options(self):
        error = ParameterValidationError(["x"], [["mu", "sigma"]])
        assert "mu" in str(error)

    def test_finite_strictly_positive(self):
        assert is_finite_strictly_positive(1.0)
        assert not is_finite_strictly_positive(0.0)
        assert not is_finite_strictly_positive(np.inf)
        assert not is_finite_strictly_positive(np.nan)


class TestSpecialFunctions:
    """Test the numeric helpers."""

    def test_erf_difference_upper_tail(self):
        # erfc(5) - erfc(6)
        assert erf_difference(5, 6) == pytest.approx(1.5374597944280348e-12 - 2.1519736712498913e-17, rel=1e-10)

    def test_erf_difference_is_antisymmetric(self):
        assert erf_difference(1, -1) == pytest.approx(-erf_difference(-1, 1))

    def test_erf_difference_lower_tail(self):
        assert erf_difference(-6, -5) == pytest.approx(erf_difference(5, 6), rel=1e-12)

    def test_log_binomial_coefficient(self):
        assert log_binomial_coefficient(10, 3) == pytest.approx(np.log(120))
        assert log_binomial_coefficient(10, 0) == 0
        assert log_binomial_coefficient(10, 9) == pytest.approx(np.log(10))

    def test_generalized_harmonic(self):
        assert generalized_harmonic(3, 1) == pytest.approx(1 + 1 / 2 + 1 / 3)
        assert generalized_harmonic(3, -1) == pytest.approx(6)
        assert generalized_harmonic(0, 2) == 0
