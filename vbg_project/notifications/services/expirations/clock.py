from datetime import datetime, time, timedelta

from django.utils import timezone


class Clock:
    """
    Source of "now" for the expiration notifier.

    All calendar arithmetic happens in the local timezone
    (settings.TIME_ZONE unless one is passed in), so day
    windows and the daily trigger follow local midnight.
    """

    def __init__(self, tz=None):
        self._tz = tz

    @property
    def tz(self):
        return self._tz or timezone.get_current_timezone()

    def now(self):
        return timezone.localtime(timezone.now(), self.tz)

    def today(self):
        return self.now().date()

    def localize(self, value):
        if timezone.is_naive(value):
            return timezone.make_aware(value, self.tz)
        return timezone.localtime(value, self.tz)

    def start_of_day(self, day):
        return timezone.make_aware(datetime.combine(day, time.min), self.tz)

    def day_window(self, day):
        """[local midnight of day, local midnight of the next day)."""
        return self.start_of_day(day), self.start_of_day(day + timedelta(days=1))

    def next_trigger(self, hour, now=None):
        """
        Next occurrence of hour:00 local time strictly after now.
        """
        now = self.localize(now) if now is not None else self.now()

        candidate = timezone.make_aware(
            datetime.combine(now.date(), time(hour=hour)),
            self.tz,
        )
        if candidate <= now:
            candidate = timezone.make_aware(
                datetime.combine(now.date() + timedelta(days=1), time(hour=hour)),
                self.tz,
            )
        return candidate


class FixedClock(Clock):
    """Clock pinned to a given instant; used by tests and dry runs."""

    def __init__(self, moment, tz=None):
        super().__init__(tz)
        self.moment = moment

    def now(self):
        return self.localize(self.moment)

    def advance(self, **kwargs):
        self.moment = self.moment + timedelta(**kwargs)
