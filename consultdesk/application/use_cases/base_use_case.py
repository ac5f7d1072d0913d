"""
Use case base classes.
A use case runs one application operation for one tenant and reports the
outcome as a UseCaseResult instead of raising.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, TypeVar, Generic, List
from dataclasses import dataclass, field
from datetime import date, datetime

from consultdesk.domain.events.base import DomainEvent, EventDispatcher, get_event_dispatcher
from consultdesk.domain.models.base import DomainException, ValidationError, BusinessRuleViolation
from consultdesk.domain.models.value_objects import DateRange
from consultdesk.domain.services.date_range_service import DateRangeResolver


logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')

Clock = Callable[[], datetime]

UNKNOWN_ERROR = "UNKNOWN_ERROR"


@dataclass
class UseCaseResult(Generic[T]):
    """Outcome of a use case: data on success, a message and code on failure."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success_result(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> "UseCaseResult[T]":
        return cls(success=True, data=data, metadata=dict(metadata or {}))

    @classmethod
    def error_result(
        cls,
        error: str,
        error_code: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "UseCaseResult[T]":
        return cls(success=False, error=error, error_code=error_code, metadata=dict(metadata or {}))

    @classmethod
    def from_exception(cls, exc: Exception) -> "UseCaseResult[T]":
        """
        Domain errors keep their code, and the offending field when there is
        one. Anything else is reported as UNKNOWN_ERROR.
        """
        if not isinstance(exc, DomainException):
            return cls.error_result(str(exc), UNKNOWN_ERROR)

        metadata = {}
        if getattr(exc, "field", None):
            metadata["field"] = exc.field
        return cls.error_result(exc.message, exc.code, metadata)


class BaseUseCase(ABC, Generic[T, R]):
    """Validates the request, runs the operation and wraps the outcome."""

    async def execute(self, request: T) -> UseCaseResult[R]:
        started = time.perf_counter()
        try:
            await self._validate_request(request)
            data = await self._execute_business_logic(request)
        except DomainException as exc:
            logger.info(f"{type(self).__name__} rejected request: {exc.code} {exc.message}")
            outcome = UseCaseResult.from_exception(exc)
        except Exception as exc:
            # unexpected failures keep their traceback in the log only
            logger.exception(f"{type(self).__name__} failed unexpectedly")
            outcome = UseCaseResult.from_exception(exc)
        else:
            outcome = UseCaseResult.success_result(data)

        outcome.metadata["use_case"] = type(self).__name__
        outcome.metadata["duration_ms"] = round((time.perf_counter() - started) * 1000, 3)
        return outcome

    async def _validate_request(self, request: T) -> None:
        """Hook for request checks that need no repository access."""

    @abstractmethod
    async def _execute_business_logic(self, request: T) -> R:
        pass


class QueryUseCase(BaseUseCase[T, R]):
    """Read-only use case."""


class CommandUseCase(BaseUseCase[T, R]):
    """
    Use case that changes state.
    Domain events recorded during the command are published once it succeeds
    and dropped when it fails.
    """

    def __init__(self, event_dispatcher: Optional[EventDispatcher] = None):
        super().__init__()
        self.events: List[DomainEvent] = []
        self.event_dispatcher = event_dispatcher

    async def _execute_business_logic(self, request: T) -> R:
        try:
            result = await self._execute_command_logic(request)
        except Exception:
            self.events.clear()
            raise

        await self._publish_events()
        return result

    @abstractmethod
    async def _execute_command_logic(self, request: T) -> R:
        pass

    def record_event(self, event: DomainEvent) -> None:
        self.events.append(event)

    async def _publish_events(self) -> None:
        dispatcher = self.event_dispatcher or get_event_dispatcher()
        pending, self.events = self.events, []
        for event in pending:
            await dispatcher.dispatch(event)


class CreateUseCase(CommandUseCase[T, R]):
    pass


class UpdateUseCase(CommandUseCase[T, R]):
    pass


class DeleteUseCase(CommandUseCase[T, R]):
    pass


class GetByIdUseCase(QueryUseCase[T, R]):
    """Lookup by a positive integer id."""

    async def _validate_request(self, request: T) -> None:
        await super()._validate_request(request)
        if isinstance(request, int) and request <= 0:
            raise ValidationError("ID must be positive", "id")


class AuthorizedUseCase(BaseUseCase[T, R]):
    """
    Mixin for use cases scoped to a tenant. Every read and write is
    restricted to records owned by the current user.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.current_user_id: Optional[str] = None

    def set_current_user(self, user_id: str) -> "AuthorizedUseCase":
        """Set the current user context."""
        self.current_user_id = user_id
        return self

    async def _validate_request(self, request: T) -> None:
        """Validate request with authorization check."""
        if not self.current_user_id:
            raise BusinessRuleViolation("User authentication required")

        await super()._validate_request(request)


class ClockedUseCase:
    """Mixin providing the reference time used for derived state."""

    clock: Clock = staticmethod(datetime.utcnow)

    def now(self) -> datetime:
        return self.clock()

    def today(self) -> date:
        return self.now().date()

    def resolve_range(
        self,
        token: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        reference_date: Optional[date] = None
    ) -> DateRange:
        """Resolve a list filter against the request's reference date or today."""
        return DateRangeResolver().resolve(token, reference_date or self.today(), start_date, end_date)
