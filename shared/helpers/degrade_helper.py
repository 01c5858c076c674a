import logging
from typing import Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from shared.core.exceptions import InfrastructureError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def degrade_on_storage_failure(fetch: Callable[[], T], fallback: Callable[[], T], label: str = "report") -> T:
    """
    Run a read-only aggregate and fall back to an empty/zeroed result if the
    storage layer fails. Only for dashboards: anything that mutates state must
    let the error through.
    """
    try:
        return fetch()
    except (SQLAlchemyError, InfrastructureError):
        logger.exception("Storage failure while building %s, returning fallback", label)
        return fallback()
