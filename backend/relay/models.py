import random
from typing import Any, Dict, Optional

WHITE = 'white'
BLACK = 'black'

ROOM_CODE_MIN = 1000
ROOM_CODE_MAX = 9999


class RoomError(Exception):
    """Base class for room lifecycle failures reported back to a client."""

    message = 'Room request failed.'

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class RoomCapacityError(RoomError):
    message = 'Server is full. Try again later.'


class RoomCodeExhaustedError(RoomCapacityError):
    pass


class RoomNotFoundError(RoomError):
    message = 'Room not found.'


class RoomFullError(RoomError):
    message = 'Room is full.'


class AlreadyInRoomError(RoomError):
    message = 'Already in a room.'


def generate_room_code(taken, rng=None, max_attempts=1000) -> str:
    """Generate a 4-digit room code not present in ``taken``.

    Codes are drawn uniformly from 1000-9999 and redrawn on collision. With
    at most a few hundred live rooms against 9000 codes a free one is found
    within a handful of draws, but uniqueness is probabilistic, so the number
    of draws is capped and RoomCodeExhaustedError is raised past the cap.
    """
    rng = rng or random
    for _ in range(max_attempts):
        code = str(rng.randint(ROOM_CODE_MIN, ROOM_CODE_MAX))
        if code not in taken:
            return code
    raise RoomCodeExhaustedError()


class Room:
    """A two-seat room. A seat holds a connection sid or None when vacant."""

    __slots__ = ('code', 'white', 'black', 'last_activity')

    def __init__(self, code: str, host_sid: str, now: float):
        self.code = code
        self.white: Optional[str] = host_sid
        self.black: Optional[str] = None
        self.last_activity = now

    def is_vacant(self) -> bool:
        return self.white is None and self.black is None

    def side_of(self, sid: str) -> Optional[str]:
        if sid is None:
            return None
        if self.white == sid:
            return WHITE
        if self.black == sid:
            return BLACK
        return None

    def opponent_of(self, sid: str) -> Optional[str]:
        side = self.side_of(sid)
        if side == WHITE:
            return self.black
        if side == BLACK:
            return self.white
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'code': self.code,
            'white': self.white,
            'black': self.black,
            'last_activity': self.last_activity,
        }
