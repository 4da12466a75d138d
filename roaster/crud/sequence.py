"""Named counters

Order sequence numbers and customer codes come from here. `next_value` runs
inside the caller's transaction: the UPDATE locks the counter row until that
transaction commits or rolls back, so concurrent callers never see the same
value.
"""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models import Order, Sequence, User

logger = logging.getLogger(__name__)

ORDERS = "orders"
CUSTOMER_CODE = "customer_code"


def _seed(db: Session, name: str) -> int:
    """Starting value for a counter that does not exist yet"""
    if name == ORDERS:
        return db.query(func.max(Order.sequence_number)).scalar() or 0
    if name == CUSTOMER_CODE:
        return db.query(func.max(User.customer_code)).scalar() or 0
    return 0


def _increment(db: Session, name: str) -> int:
    return (
        db.query(Sequence)
        .filter(Sequence.name == name)
        .update({Sequence.value: Sequence.value + 1}, synchronize_session=False)
    )


def next_value(db: Session, name: str) -> int:
    """Increment counter ``name`` and return the new value. Does not commit."""
    if not _increment(db, name):
        seed = _seed(db, name)
        try:
            with db.begin_nested():
                db.add(Sequence(name=name, value=seed + 1))
        except IntegrityError:
            # another transaction created the row first
            _increment(db, name)
        else:
            logger.info("created counter %s starting after %d", name, seed)
    return db.query(Sequence.value).filter(Sequence.name == name).scalar()


def current_value(db: Session, name: str) -> int:
    value = db.query(Sequence.value).filter(Sequence.name == name).scalar()
    return value if value is not None else _seed(db, name)
