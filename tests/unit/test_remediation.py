"""Tests for remediation checklists."""

import pytest

from siteops.execution.error_classifier import ErrorCategory, NormalizedError
from siteops.execution.remediation import (
    DISTRIBUTION_NOT_FOUND_STEPS,
    FUNCTION_NOT_FOUND_STEPS,
    PRECONDITION_FAILED_STEPS,
    RESOURCE_NOT_FOUND_STEPS,
    VALIDATION_STEPS,
    get_remediation_steps,
)


class TestGetRemediationSteps:
    """Tests for get_remediation_steps."""

    @pytest.mark.parametrize("category", list(ErrorCategory))
    def test_never_empty(self, category):
        """Every category yields at least one step."""
        steps = get_remediation_steps(category, NormalizedError(message="x"))

        assert len(steps) > 0
        assert all(isinstance(step, str) and step for step in steps)

    def test_authorization_mentions_iam(self):
        """Authorization failures point at IAM permissions."""
        steps = get_remediation_steps(
            ErrorCategory.AUTHORIZATION, NormalizedError(name="AccessDenied")
        )

        assert any("IAM" in step and "permission" in step for step in steps)

    def test_authentication_mentions_credentials(self):
        steps = get_remediation_steps(ErrorCategory.AUTHENTICATION, NormalizedError())

        assert any("credentials" in step for step in steps)

    def test_missing_distribution(self):
        """Distribution lookups get the distribution checklist."""
        steps = get_remediation_steps(
            ErrorCategory.RESOURCE_NOT_FOUND,
            NormalizedError(message="The specified distribution does not exist"),
        )

        assert steps == DISTRIBUTION_NOT_FOUND_STEPS

    def test_missing_function_by_name(self):
        """NoSuchFunctionExists gets the function checklist."""
        steps = get_remediation_steps(
            ErrorCategory.RESOURCE_NOT_FOUND,
            NormalizedError(name="NoSuchFunctionExists", message="does not exist"),
        )

        assert steps == FUNCTION_NOT_FOUND_STEPS

    def test_missing_other_resource(self):
        """Other missing resources get the generic checklist."""
        steps = get_remediation_steps(
            ErrorCategory.RESOURCE_NOT_FOUND,
            NormalizedError(message="Cache policy not found"),
        )

        assert steps == RESOURCE_NOT_FOUND_STEPS

    def test_precondition_failed(self):
        """ETag conflicts get the concurrent-modification checklist."""
        steps = get_remediation_steps(
            ErrorCategory.VALIDATION, NormalizedError(name="PreconditionFailed")
        )

        assert steps == PRECONDITION_FAILED_STEPS
        assert any("ETag" in step for step in steps)

    def test_generic_validation(self):
        steps = get_remediation_steps(
            ErrorCategory.VALIDATION, NormalizedError(message="invalid TTL")
        )

        assert steps == VALIDATION_STEPS
