"""
Transaction helpers shared by the engine services.
"""
import functools
import logging
import time

from django.conf import settings
from django.db import DatabaseError, IntegrityError, OperationalError, connection

from .exceptions import ConcurrencyConflictError, StorageError

logger = logging.getLogger(__name__)

# PostgreSQL serialization_failure / deadlock_detected
PG_CONFLICT_CODES = {'40001', '40P01'}
# MySQL lock wait timeout / deadlock
MYSQL_CONFLICT_CODES = {1205, 1213}


def is_conflict_error(exc):
    """Check whether a database error is a serialization conflict worth retrying"""
    cause = exc.__cause__ or exc
    # psycopg 3 exposes sqlstate, psycopg2 pgcode
    sqlstate = getattr(cause, 'sqlstate', None) or getattr(cause, 'pgcode', None)
    if sqlstate in PG_CONFLICT_CODES:
        return True
    args = getattr(cause, 'args', ())
    if args and args[0] in MYSQL_CONFLICT_CODES:
        return True
    return 'database is locked' in str(exc) or 'database table is locked' in str(exc)


def compute_retry_delay(attempt):
    """Exponential backoff: base, 2*base, 4*base, ..."""
    base_delay = settings.MEMBERSHIP_ENGINE.get('CONFLICT_RETRY_BASE_DELAY', 0.05)
    return base_delay * (2 ** attempt)


def retry_on_conflict(func):
    """
    Run a transactional service call, retrying serialization conflicts.

    The wrapped function must open its own ``transaction.atomic()`` block so
    that every attempt starts from a clean transaction. When the call is
    nested inside an outer atomic block a retry is impossible and the
    conflict is raised straight away.

    Database errors that are not conflicts are surfaced as StorageError.
    """
    name = getattr(func, '__qualname__', type(func).__name__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        max_attempts = max(1, settings.MEMBERSHIP_ENGINE.get('CONFLICT_RETRY_ATTEMPTS', 3))
        attempt = 0
        while True:
            try:
                return func(*args, **kwargs)
            except IntegrityError as exc:
                raise StorageError(f"Integrity violation in {name}: {exc}") from exc
            except OperationalError as exc:
                if not is_conflict_error(exc):
                    raise StorageError(f"Database failure in {name}: {exc}") from exc

                attempt += 1
                if connection.in_atomic_block or attempt >= max_attempts:
                    logger.warning(f"Giving up on {name} after {attempt} conflicting attempt(s)")
                    raise ConcurrencyConflictError(attempts=attempt) from exc

                delay = compute_retry_delay(attempt - 1)
                logger.info(f"Conflict in {name}, retrying in {delay:.3f}s (attempt {attempt})")
                time.sleep(delay)
            except DatabaseError as exc:
                raise StorageError(f"Database failure in {name}: {exc}") from exc

    return wrapper
