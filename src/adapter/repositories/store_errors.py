"""Translation of SQLAlchemy failures into the error taxonomy."""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.app.errors import ConflictError, DependencyError, OperationError

logger = logging.getLogger(__name__)


@contextmanager
def translate_store_errors(conflict_message: str = "Resource already exists"):
    try:
        yield
    except IntegrityError as exc:
        logger.warning(f"Integrity violation: {exc.orig}")
        raise OperationError(ConflictError("DUPLICATE_RESOURCE", conflict_message)) from exc
    except SQLAlchemyError as exc:
        logger.error(f"Store operation failed: {type(exc).__name__}")
        raise OperationError(
            DependencyError("STORE_UNAVAILABLE", "Data store operation failed")
        ) from exc
