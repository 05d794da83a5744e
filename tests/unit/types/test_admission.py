import pytest

from rate_limit_lab.types import (
    REJECTION_REASONS,
    WINDOW_LIMIT_EXCEEDED,
    AdmissionResult,
)


class TestAdmissionResult:
    def test_accept(self):
        """Test accepted result carries no reason."""
        result = AdmissionResult.accept()
        assert result.allowed is True
        assert result.reason is None
        assert bool(result) is True

    def test_reject(self):
        """Test rejected result carries its reason."""
        result = AdmissionResult.reject(WINDOW_LIMIT_EXCEEDED)
        assert result.allowed is False
        assert result.reason == "window limit exceeded"
        assert bool(result) is False

    def test_equality(self):
        assert AdmissionResult.accept() == AdmissionResult(allowed=True)
        assert AdmissionResult.reject("x") == AdmissionResult(allowed=False, reason="x")

    def test_frozen(self):
        result = AdmissionResult.accept()
        with pytest.raises(AttributeError):
            result.allowed = False  # type: ignore[misc]

    def test_rejection_requires_reason(self):
        with pytest.raises(ValueError, match="non-empty reason"):
            AdmissionResult(allowed=False)
        with pytest.raises(ValueError, match="non-empty reason"):
            AdmissionResult.reject("")

    def test_acceptance_has_no_reason(self):
        with pytest.raises(ValueError, match="no reason"):
            AdmissionResult(allowed=True, reason="because")

    def test_reasons_are_distinct_and_lowercase(self):
        assert len(set(REJECTION_REASONS)) == len(REJECTION_REASONS)
        assert all(reason == reason.lower() for reason in REJECTION_REASONS)
