from .generated import Base, Bookings, Schedule

__all__ = ["Base", "Bookings", "Schedule"]
