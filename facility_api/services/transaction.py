"""
Scoped unit of work on top of the SQLAlchemy session.

    with transaction() as tx:
        ...
        tx.commit()

Leaving the block without calling ``commit()`` rolls everything back, as
does any exception raised inside it. Exceptions are re-raised as
``TransactionFailure`` with the original error as the cause, except
application errors (``FacilityApiError``), which are rolled back and
re-raised unchanged.
"""

import logging
from contextlib import contextmanager

from facility_api.exceptions import FacilityApiError, TransactionFailure
from facility_api.extensions import db

logger = logging.getLogger(__name__)


class TransactionScope:
    def __init__(self, session):
        self.session = session
        self.committed = False

    def commit(self):
        self.session.commit()
        self.committed = True


@contextmanager
def transaction(session=None):
    session = session or db.session
    scope = TransactionScope(session)
    try:
        yield scope
    except FacilityApiError:
        raise
    except Exception as e:
        logger.error("Rolling back transaction: %s", e, exc_info=True)
        raise TransactionFailure(e) from e
    finally:
        if not scope.committed:
            session.rollback()
