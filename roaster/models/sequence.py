"""Named counters

Backs order sequence numbers and customer codes. Values are handed out by
`crud.sequence.next_value`, which increments the row in place.
"""

from sqlalchemy import Column, Integer, String
from .base import Base


class Sequence(Base):
    __tablename__ = "sequences"

    name = Column(String(64), primary_key=True)
    value = Column(Integer, nullable=False, default=0)  # last value handed out
