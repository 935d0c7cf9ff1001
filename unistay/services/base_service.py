"""
Base service class providing common functionality for all services.
"""

import time
from contextlib import contextmanager
from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from unistay.config.logging import get_logger
from unistay.config.settings import settings
from unistay.core.exceptions import ConflictError, ErrorCode

T = TypeVar("T")


class BaseService:
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Transaction management with rollback
    - Retry of transient store failures with exponential backoff
    """

    def __init__(
        self,
        db_session: Session,
        *,
        max_retries: Optional[int] = None,
        retry_base_delay: Optional[float] = None,
        retry_max_delay: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize base service.

        Args:
            db_session: SQLAlchemy database session
            max_retries: Attempts for a retried unit of work
            retry_base_delay: First backoff delay in seconds, doubled per attempt
            retry_max_delay: Upper bound for a single backoff delay
            sleep: Sleep function, replaceable in tests
        """
        self.db: Session = db_session
        self.max_retries = max(1, max_retries if max_retries is not None else settings.TRANSACTION_MAX_RETRIES)
        self.retry_base_delay = (
            retry_base_delay if retry_base_delay is not None else settings.TRANSACTION_RETRY_BASE_DELAY
        )
        self.retry_max_delay = (
            retry_max_delay if retry_max_delay is not None else settings.TRANSACTION_RETRY_MAX_DELAY
        )
        self._sleep = sleep
        self._logger = get_logger(self.__class__.__name__)

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self):
        """
        Context manager for database transactions with automatic rollback.

        Example:
            with self.transaction():
                self.repository.create(entity)
                # commit on success, rollback on exception
        """
        try:
            yield self.db
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def run_in_transaction(self, operation: str, work: Callable[[], T]) -> T:
        """
        Run ``work`` as one unit of work, retrying transient failures.

        ``work`` must perform its own reads so every attempt sees fresh
        state. Only ``OperationalError`` (lock timeouts, serialization
        failures, dropped connections) is retried; domain errors roll back
        and propagate immediately.

        Raises:
            ConflictError: TRANSACTION_RETRY_EXHAUSTED once attempts run out
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                with self.transaction():
                    return work()
            except OperationalError as e:
                if attempt >= self.max_retries:
                    self._logger.error(
                        f"{operation} failed after {attempt} attempts: {e}",
                        extra={"operation": operation, "attempts": attempt},
                    )
                    raise ConflictError(
                        "The operation could not be completed because of concurrent activity; please retry",
                        error_code=ErrorCode.TRANSACTION_RETRY_EXHAUSTED,
                        details={"operation": operation, "attempts": attempt},
                    ) from e

                delay = min(self.retry_max_delay, self.retry_base_delay * (2 ** (attempt - 1)))
                self._logger.warning(
                    f"Transient failure during {operation} (attempt {attempt}/{self.max_retries}), "
                    f"retrying in {delay:.3f}s: {e}",
                    extra={"operation": operation, "attempt": attempt},
                )
                self._sleep(delay)
