import random
import threading
import time
from typing import Any, Callable, Dict, List, Optional

from relay.models import (
    AlreadyInRoomError,
    Room,
    RoomCapacityError,
    RoomFullError,
    RoomNotFoundError,
    generate_room_code,
)


class RoomRegistry:
    """Live rooms keyed by code, plus an index from connection sid to code.

    A single lock guards both maps: handlers for different connections run
    concurrently and code generation must see a consistent key set.
    Vacated rooms are never dropped here directly; only ``reap`` deletes.
    """

    def __init__(
        self,
        max_rooms: int = 100,
        grace_period: float = 300.0,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
        max_code_attempts: int = 1000,
    ):
        self.max_rooms = max_rooms
        self.grace_period = grace_period
        self._clock = clock
        self._rng = rng or random.SystemRandom()
        self._max_code_attempts = max_code_attempts
        self._rooms: Dict[str, Room] = {}
        self._sid_to_code: Dict[str, str] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    def __contains__(self, code) -> bool:
        with self._lock:
            return code in self._rooms

    def create(self, sid: str) -> str:
        """Open a room with ``sid`` seated as white and return its code."""
        with self._lock:
            if sid in self._sid_to_code:
                raise AlreadyInRoomError()
            if len(self._rooms) >= self.max_rooms:
                raise RoomCapacityError()
            code = generate_room_code(self._rooms, rng=self._rng, max_attempts=self._max_code_attempts)
            self._rooms[code] = Room(code, sid, self._clock())
            self._sid_to_code[sid] = code
            return code

    def join(self, code: str, sid: str) -> Optional[str]:
        """Seat ``sid`` as black in room ``code``; returns the white seat's sid.

        The white seat may already be vacant if the host left before anyone
        joined, in which case None is returned. Failures leave state untouched.
        """
        with self._lock:
            if sid in self._sid_to_code:
                raise AlreadyInRoomError()
            room = self._rooms.get(code)
            if room is None:
                raise RoomNotFoundError()
            if room.black is not None:
                raise RoomFullError()
            room.black = sid
            room.last_activity = self._clock()
            self._sid_to_code[sid] = code
            return room.white

    def touch(self, code: str) -> None:
        with self._lock:
            room = self._rooms.get(code)
            if room is not None:
                room.last_activity = self._clock()

    def vacate(self, code: str, sid: str) -> None:
        """Empty whichever seat ``sid`` holds. The room itself stays until reaped."""
        with self._lock:
            if self._sid_to_code.get(sid) == code:
                del self._sid_to_code[sid]
            room = self._rooms.get(code)
            if room is None:
                return
            if room.white == sid:
                room.white = None
            elif room.black == sid:
                room.black = None
            else:
                return
            room.last_activity = self._clock()

    def relay_target(self, code: str, sid: str) -> Optional[str]:
        with self._lock:
            room = self._rooms.get(code)
            if room is None:
                return None
            return room.opponent_of(sid)

    def room_for(self, sid: str) -> Optional[str]:
        with self._lock:
            return self._sid_to_code.get(sid)

    def get(self, code: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            room = self._rooms.get(code)
            return room.to_dict() if room else None

    def reap(self) -> List[str]:
        """Delete rooms with both seats empty for longer than the grace period."""
        with self._lock:
            now = self._clock()
            expired = [
                code for code, room in self._rooms.items()
                if room.is_vacant() and now - room.last_activity > self.grace_period
            ]
            for code in expired:
                del self._rooms[code]
            return expired
