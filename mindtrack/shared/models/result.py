"""Operation results and the error contract.

Every mutating operation returns an OperationResult. Inside a service the
failure kinds travel as exceptions; the @operation decorator turns them into
a failed result at the public boundary so callers never see a raised
WellnessError.

Error codes are part of the external contract and must not change:
    INVALID_INPUT  = 400
    NOT_AUTHORIZED = 401
    NOT_FOUND      = 404
"""
import functools
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class ErrorCode(IntEnum):
    INVALID_INPUT = 400
    NOT_AUTHORIZED = 401
    NOT_FOUND = 404


class WellnessError(Exception):
    """Base exception for expected operation failures."""
    code: ErrorCode = ErrorCode.INVALID_INPUT

    def __init__(self, message: str = "", field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidInputError(WellnessError):
    """Payload out of range, too long, or inconsistent."""
    code = ErrorCode.INVALID_INPUT


class NotAuthorizedError(WellnessError):
    """Caller is not the owner or the privileged principal."""
    code = ErrorCode.NOT_AUTHORIZED


class NotFoundError(WellnessError):
    """Record absent, or present but owned by someone else."""
    code = ErrorCode.NOT_FOUND


@dataclass(frozen=True)
class OperationResult:
    """Typed success-or-failure value returned by every mutating operation.

    Attributes:
        ok: True on success
        value: Success payload (new id, level, stored value or True)
        error: Error code on failure, None on success
    """
    ok: bool
    value: Any = None
    error: Optional[ErrorCode] = None

    @classmethod
    def success(cls, value: Any) -> "OperationResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ErrorCode) -> "OperationResult":
        return cls(ok=False, error=error)


def operation(event: str) -> Callable[[F], F]:
    """Wrap a service method so it returns an OperationResult.

    The wrapped method returns its success value or raises a WellnessError.
    Any other exception is a defect and propagates unchanged.

    Args:
        event: Upper-snake event name used in the rejection log line
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> OperationResult:
            try:
                value = func(*args, **kwargs)
            except WellnessError as exc:
                logger.warning(
                    f"{event}_REJECTED",
                    extra={
                        "error_code": int(exc.code),
                        "error_kind": type(exc).__name__,
                        "field": exc.field,
                        "reason": str(exc),
                    }
                )
                return OperationResult.failure(exc.code)
            return OperationResult.success(value)
        return wrapper  # type: ignore[return-value]
    return decorator
