"""Resilient wrappers for CloudFront management operations.

Each helper binds a resource identifier as context, logs start and
completion, and runs the operation under the shared executor. The
helpers never create a CloudFront client; callers pass the call in.

Usage:
    cloudfront = boto3.client("cloudfront")
    helpers = CloudFrontOperationHelpers(get_executor())

    config = await helpers.execute_distribution_operation(
        lambda: cloudfront.get_distribution_config(Id=distribution_id),
        "Get Distribution Configuration",
        distribution_id,
    )
"""

import inspect
from collections.abc import Mapping
from typing import Any, Callable, TypeVar

from siteops.execution.retry_policy import OperationHandler, ResilientExecutor

T = TypeVar("T")


class CloudFrontOperationHelpers:
    """Named, context-bound CloudFront operations."""

    def __init__(self, executor: ResilientExecutor):
        self.executor = executor

    async def execute_distribution_operation(
        self,
        operation: Callable[[], T],
        operation_name: str,
        distribution_id: str,
    ) -> T:
        """Run an operation against a single distribution.

        Args:
            operation: Zero-argument CloudFront call.
            operation_name: Descriptive operation name.
            distribution_id: Distribution the call targets.

        Returns:
            The operation's result.
        """
        handler = self.executor.create_operation_handler(
            operation_name, {"distribution_id": distribution_id}
        )
        return await self._run(
            handler,
            operation,
            f"Starting {operation_name} for distribution {distribution_id}",
        )

    async def execute_function_operation(
        self,
        operation: Callable[[], T],
        operation_name: str,
        function_name: str,
    ) -> T:
        """Run an operation against a CloudFront Function.

        Args:
            operation: Zero-argument CloudFront call.
            operation_name: Descriptive operation name.
            function_name: CloudFront Function the call targets.

        Returns:
            The operation's result.
        """
        handler = self.executor.create_operation_handler(
            operation_name, {"function_name": function_name}
        )
        return await self._run(
            handler,
            operation,
            f"Starting {operation_name} for function {function_name}",
        )

    async def execute_configuration_update(
        self,
        operation: Callable[[], T],
        operation_name: str,
        config: Mapping[str, Any],
    ) -> T:
        """Run a distribution configuration update.

        Args:
            operation: Zero-argument CloudFront call.
            operation_name: Descriptive operation name.
            config: Update description with ``distribution_id`` and an
                optional ``type``.

        Returns:
            The operation's result.
        """
        config_type = config.get("type") or "unknown"
        handler = self.executor.create_operation_handler(
            operation_name,
            {
                "distribution_id": config.get("distribution_id"),
                "config_type": config_type,
            },
        )
        return await self._run(
            handler,
            operation,
            f"Starting {operation_name}",
            completed="Configuration update completed successfully",
            config_type=config_type,
        )

    async def _run(
        self,
        handler: OperationHandler,
        operation: Callable[[], T],
        started: str,
        completed: str | None = None,
        **started_metadata: Any,
    ) -> T:
        async def logged_operation():
            handler.log_info(started, **started_metadata)
            result = operation()
            if inspect.isawaitable(result):
                result = await result
            handler.log_info(
                completed or f"Completed {handler.operation_name} successfully"
            )
            return result

        return await handler.execute(logged_operation)
