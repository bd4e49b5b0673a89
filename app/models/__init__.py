from .checkin import DailyCheckIn

__all__ = [
    "DailyCheckIn",
]
