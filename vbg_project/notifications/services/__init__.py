"""
Notification service layer.

Each subpackage emits notifications for one Notification.Category
without applying any inbox visibility rules.
"""

# =====================================================
# DOCUMENT EXPIRATION
# =====================================================
from .expirations import (
    ExpirationCycle,
    run_expiration_cycle,
)

# =====================================================
# PUBLIC EXPORTS
# =====================================================
__all__ = [
    "ExpirationCycle",
    "run_expiration_cycle",
]
