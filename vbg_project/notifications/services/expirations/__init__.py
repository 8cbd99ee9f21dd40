"""
Document expiration notifier.

Scans documents approaching, reaching or past their expiration date
and notifies the owner and every admin, in-app and by email, at most
once per recipient and title per local calendar day.
"""

from .clock import Clock, FixedClock
from .config import ExpirationConfig
from .cycle import CycleSummary, ExpirationCycle, run_expiration_cycle
from .dedup import DedupGuard, NotificationStore
from .fanout import DeliveryResult, NotificationFanout
from .mailer import EmailTransport
from .preferences import PreferenceGate
from .recipients import RecipientResolver, Recipients, UserStore
from .scanner import DocumentStore, ExpirationScanner

__all__ = [
    "Clock",
    "FixedClock",
    "ExpirationConfig",
    "CycleSummary",
    "ExpirationCycle",
    "run_expiration_cycle",
    "DedupGuard",
    "NotificationStore",
    "DeliveryResult",
    "NotificationFanout",
    "EmailTransport",
    "PreferenceGate",
    "RecipientResolver",
    "Recipients",
    "UserStore",
    "DocumentStore",
    "ExpirationScanner",
]
