from django.conf import settings

from notifications.exceptions import ConfigurationError

from .fanout import DEFAULT_EMAIL_TIMEOUT, DEFAULT_WRITE_ATTEMPTS
from .scanner import DEFAULT_OFFSETS


DEFAULT_TRIGGER_HOUR = 9
DEFAULT_WARMUP_SECONDS = 10


class ExpirationConfig:
    """
    Settings for the expiration notifier, validated up front.

    Read from Django settings:
        EXPIRATION_OFFSETS                 days relative to today
        EXPIRATION_TRIGGER_HOUR            local hour of the daily run
        EXPIRATION_RUN_ON_START            catch-up run after startup
        EXPIRATION_STARTUP_WARMUP_SECONDS  delay before the catch-up run
        EXPIRATION_EMAIL_TIMEOUT           seconds per email send
        EXPIRATION_WRITE_ATTEMPTS          tries for the in-app insert
    """

    def __init__(
        self,
        offsets=DEFAULT_OFFSETS,
        trigger_hour=DEFAULT_TRIGGER_HOUR,
        run_immediately_on_start=True,
        startup_warmup_seconds=DEFAULT_WARMUP_SECONDS,
        email_timeout=DEFAULT_EMAIL_TIMEOUT,
        write_attempts=DEFAULT_WRITE_ATTEMPTS,
    ):
        self.offsets = offsets
        self.trigger_hour = trigger_hour
        self.run_immediately_on_start = run_immediately_on_start
        self.startup_warmup_seconds = startup_warmup_seconds
        self.email_timeout = email_timeout
        self.write_attempts = write_attempts

        self.validate()

    @classmethod
    def from_settings(cls):
        return cls(
            offsets=getattr(settings, "EXPIRATION_OFFSETS", DEFAULT_OFFSETS),
            trigger_hour=getattr(settings, "EXPIRATION_TRIGGER_HOUR", DEFAULT_TRIGGER_HOUR),
            run_immediately_on_start=getattr(settings, "EXPIRATION_RUN_ON_START", True),
            startup_warmup_seconds=getattr(
                settings, "EXPIRATION_STARTUP_WARMUP_SECONDS", DEFAULT_WARMUP_SECONDS
            ),
            email_timeout=getattr(settings, "EXPIRATION_EMAIL_TIMEOUT", DEFAULT_EMAIL_TIMEOUT),
            write_attempts=getattr(settings, "EXPIRATION_WRITE_ATTEMPTS", DEFAULT_WRITE_ATTEMPTS),
        )

    def validate(self):
        hour = self.trigger_hour
        if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour <= 23:
            raise ConfigurationError(
                f"EXPIRATION_TRIGGER_HOUR must be an integer between 0 and 23, got {hour!r}"
            )

        offsets = self.offsets
        if isinstance(offsets, (str, bytes)) or not offsets:
            raise ConfigurationError("EXPIRATION_OFFSETS must be a non-empty list of integers")
        try:
            offsets = list(offsets)
        except TypeError:
            raise ConfigurationError(
                f"EXPIRATION_OFFSETS must be a list of integers, got {offsets!r}"
            ) from None
        if any(isinstance(o, bool) or not isinstance(o, int) for o in offsets):
            raise ConfigurationError(
                f"EXPIRATION_OFFSETS must only contain integers, got {offsets!r}"
            )
        if len(set(offsets)) != len(offsets):
            raise ConfigurationError(
                f"EXPIRATION_OFFSETS must not repeat a day, got {offsets!r}"
            )
        self.offsets = tuple(offsets)

        for name in ("startup_warmup_seconds", "email_timeout"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                raise ConfigurationError(f"{name} must be a non-negative number, got {value!r}")

        attempts = self.write_attempts
        if isinstance(attempts, bool) or not isinstance(attempts, int) or attempts < 1:
            raise ConfigurationError(
                f"EXPIRATION_WRITE_ATTEMPTS must be a positive integer, got {attempts!r}"
            )
