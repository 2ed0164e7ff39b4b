"""
Base Service Interface

All services inherit from this base class.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseService(ABC, Generic[InputT, OutputT]):
    """
    Base class for all services.

    Each service:
    - Has a defined input type
    - Has a defined output type
    - Can check its health
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging."""
        pass

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        """
        Execute the service's main function.

        Args:
            input_data: Validated input conforming to InputT schema

        Returns:
            Output conforming to OutputT schema

        Raises:
            ServiceError: If execution fails
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if service is healthy and can process requests."""
        pass


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class InvalidDateError(ServiceError):
    """Date string is malformed or not a real calendar date."""

    def __init__(self, value: str, expected: str = "YYYY-MM-DD"):
        super().__init__(
            "DateRange",
            f"Invalid date '{value}'. Expected {expected}.",
            {"value": value, "expected": expected},
        )


class UnknownContractError(ServiceError):
    """Contract is not in the source's allow-list."""

    def __init__(self, contract: str):
        super().__init__(
            "BarsService",
            f"Unknown contract '{contract}'",
            {"contract": contract},
        )


class SourceUnavailableError(ServiceError):
    """Backing dataset is missing or unreadable."""

    def __init__(self, path: str):
        super().__init__(
            "BarsService",
            f"Bars data source unavailable at '{path}'",
            {"path": path},
        )


class ColumnReadError(ServiceError):
    """Required column is missing or has an unexpected type."""

    def __init__(self, column: str):
        super().__init__(
            "BarsService",
            f"Column '{column}' is missing or has an unexpected type",
            {"column": column},
        )
