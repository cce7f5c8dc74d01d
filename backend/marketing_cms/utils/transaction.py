from contextlib import contextmanager


@contextmanager
def transactional(session):
    """Commit on success, roll back and re-raise on any error."""
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
