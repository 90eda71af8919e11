"""Room domain services: registry, admission, validation and reaping.

This package holds the in-memory room state and the pure checks that the
Socket.IO handlers call into, keeping transport concerns separated from
room bookkeeping.
"""

from .admission import SlidingWindowLimiter, client_address
from .registry import RoomRegistry

__all__ = ['RoomRegistry', 'SlidingWindowLimiter', 'client_address']
