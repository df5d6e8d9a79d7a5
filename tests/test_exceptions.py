"""Tests for custom exception hierarchy."""

from career_loans.exceptions import (
    CareerLoansError,
    ConfigurationError,
    LoanNotFoundError,
    ResultError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_career_loans_error_is_exception(self) -> None:
        assert isinstance(CareerLoansError("test"), Exception)

    def test_configuration_error_is_career_loans_error(self) -> None:
        assert isinstance(ConfigurationError("test"), CareerLoansError)

    def test_loan_not_found_is_career_loans_error(self) -> None:
        assert isinstance(LoanNotFoundError("test"), CareerLoansError)

    def test_result_error_is_career_loans_error(self) -> None:
        assert isinstance(ResultError("test"), CareerLoansError)

    def test_exception_message(self) -> None:
        err = LoanNotFoundError("Loan abc not found")
        assert str(err) == "Loan abc not found"
