from sqlalchemy import Column, Index, Integer, Text, UniqueConstraint, text

from sqlalchemy.orm import declarative_base

Base = declarative_base()
metadata = Base.metadata


class Bookings(Base):
    __tablename__ = 'bookings'
    __table_args__ = (
        UniqueConstraint('date', 'time', name='uq_bookings_date_time'),
        Index('idx_bookings_date', 'date'),
    )

    date = Column(Text, nullable=False)  # YYYY-MM-DD
    time = Column(Text, nullable=False)  # canonical HH:MM
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    id = Column(Integer, primary_key=True)
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))


class Schedule(Base):
    __tablename__ = 'schedule'

    open_days = Column(Text, nullable=False, server_default=text("'[]'"))
    start_time = Column(Text, nullable=False)
    end_time = Column(Text, nullable=False)
    slot_minutes = Column(Integer, nullable=False)
    vacation_ranges = Column(Text, nullable=False, server_default=text("'[]'"))
    id = Column(Integer, primary_key=True)
    updated_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
