"""Remediation checklists attached to terminal operation failures.

Steps are advisory text for a human operator. They never influence
retry decisions.
"""

from siteops.execution.error_classifier import ErrorCategory, NormalizedError

AUTHENTICATION_STEPS = (
    "Verify AWS credentials are configured correctly",
    "Check AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY environment variables",
    "Ensure AWS profile is set up if using AWS CLI",
    "Verify credentials have not expired",
)

AUTHORIZATION_STEPS = (
    "Verify IAM user/role has required CloudFront permissions",
    "Required IAM permissions: cloudfront:GetDistribution*, "
    "cloudfront:UpdateDistribution, cloudfront:*Function*",
    "Check if MFA is required for the operation",
    "Verify the AWS account has access to the CloudFront distribution",
)

DISTRIBUTION_NOT_FOUND_STEPS = (
    "Verify the CloudFront distribution ID is correct",
    "Check that the distribution exists in your AWS account",
    "Ensure you are using the correct AWS region/account",
)

FUNCTION_NOT_FOUND_STEPS = (
    "Verify the CloudFront Function name is correct",
    "Check if the function exists in the correct stage (DEVELOPMENT/LIVE)",
)

RESOURCE_NOT_FOUND_STEPS = (
    "Verify the resource identifier is correct",
    "Check that the resource exists in your AWS account",
)

RATE_LIMIT_STEPS = (
    "Wait before retrying the operation",
    "Reduce the frequency of API calls",
    "Implement exponential backoff in your retry logic",
    "Consider using AWS SDK built-in retry mechanisms",
)

PRECONDITION_FAILED_STEPS = (
    "The distribution configuration was modified by another process",
    "Retry the operation to get the latest ETag",
    "Ensure no other processes are modifying the distribution",
)

VALIDATION_STEPS = (
    "Verify all required parameters are provided",
    "Check parameter formats and values",
    "Review CloudFront API documentation for parameter requirements",
)

NETWORK_STEPS = (
    "Check internet connectivity",
    "Verify DNS resolution for AWS endpoints",
    "Check firewall and proxy settings",
    "Retry the operation after a short delay",
)

CONFIGURATION_STEPS = (
    "Review the CloudFront distribution configuration",
    "Verify all required settings are properly configured",
    "Check for conflicting configuration options",
    "Consult CloudFront documentation for configuration requirements",
)

UNKNOWN_STEPS = (
    "Review the error message for specific details",
    "Check AWS service status for any ongoing issues",
    "Consult AWS CloudFront documentation",
    "Contact AWS support if the issue persists",
)

_CATEGORY_STEPS: dict[ErrorCategory, tuple[str, ...]] = {
    ErrorCategory.AUTHENTICATION: AUTHENTICATION_STEPS,
    ErrorCategory.AUTHORIZATION: AUTHORIZATION_STEPS,
    ErrorCategory.RATE_LIMIT: RATE_LIMIT_STEPS,
    ErrorCategory.NETWORK: NETWORK_STEPS,
    ErrorCategory.CONFIGURATION: CONFIGURATION_STEPS,
    ErrorCategory.UNKNOWN: UNKNOWN_STEPS,
}


def get_remediation_steps(
    category: ErrorCategory,
    error: NormalizedError,
) -> tuple[str, ...]:
    """Get the ordered remediation checklist for a failure.

    Args:
        category: Category of the final error.
        error: Normalized final error.

    Returns:
        Tuple of human-readable steps, never empty.
    """
    message = (error.message or "").lower()

    if category == ErrorCategory.RESOURCE_NOT_FOUND:
        if "distribution" in message or error.name == "NoSuchDistribution":
            return DISTRIBUTION_NOT_FOUND_STEPS
        if "function" in message or error.name == "NoSuchFunctionExists":
            return FUNCTION_NOT_FOUND_STEPS
        return RESOURCE_NOT_FOUND_STEPS

    if category == ErrorCategory.VALIDATION:
        if error.name == "PreconditionFailed":
            return PRECONDITION_FAILED_STEPS
        return VALIDATION_STEPS

    return _CATEGORY_STEPS.get(category, UNKNOWN_STEPS)
