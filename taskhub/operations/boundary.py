import functools
from collections.abc import Callable
from typing import Any, TypeVar

import structlog
from sqlalchemy.orm import Session

from taskhub.errors import AppError, Internal
from taskhub.schemas.envelope import Result

logger = structlog.get_logger()

R = TypeVar("R", bound=Result)

def _failure(out: type[R], message: str, list_data: bool) -> R:
    if list_data:
        return out(success=False, message=message, data=[])
    return out(success=False, message=message)

def operation(out: type[R], failure_message: str, *, list_data: bool = False):
    """Wrap an operation so it always returns an envelope.

    ``AppError`` messages are surfaced as-is; ``Internal`` ones are also
    logged with their cause. Anything else is logged and replaced by
    ``failure_message``. The session is rolled back in both cases.
    List operations report ``data=[]`` on failure.
    """

    def decorate(fn: Callable[..., R]) -> Callable[..., R]:
        @functools.wraps(fn)
        def wrapper(db: Session, *args: Any, **kwargs: Any) -> R:
            try:
                return fn(db, *args, **kwargs)
            except Internal as e:
                db.rollback()
                logger.exception("operation_failed", operation=fn.__name__, reason=e.message)
                return _failure(out, e.message, list_data)
            except AppError as e:
                db.rollback()
                logger.info("operation_rejected", operation=fn.__name__, kind=e.kind, reason=e.message)
                return _failure(out, e.message, list_data)
            except Exception:
                db.rollback()
                logger.exception("operation_failed", operation=fn.__name__)
                return _failure(out, failure_message, list_data)

        return wrapper

    return decorate
