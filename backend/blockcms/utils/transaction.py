from contextlib import contextmanager
from sqlalchemy.exc import IntegrityError
from blockcms.domain.errors import ConflictError


@contextmanager
def transactional(session, conflict_message="Resource already exists"):
    """Commit on success, roll back on any failure.

    Unique-constraint violations surface as ConflictError.
    """
    try:
        yield
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError(conflict_message) from exc
    except Exception:
        session.rollback()
        raise
