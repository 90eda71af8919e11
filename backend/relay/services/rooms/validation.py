"""Shape checks for client payloads.

These only decide whether a payload is well-formed enough to relay; they do
not know chess rules. Anything failing a check is dropped by the caller.
"""
import re

PROMOTION_PIECES = frozenset({'queen', 'rook', 'bishop', 'knight'})
MOVE_FIELDS = ('fromCol', 'fromRow', 'toCol', 'toRow')
BOARD_MIN = 0
BOARD_MAX = 7

_ROOM_CODE_RE = re.compile(r'[0-9]{4}')


def is_valid_room_code(code) -> bool:
    return isinstance(code, str) and _ROOM_CODE_RE.fullmatch(code) is not None


def is_valid_coord(value) -> bool:
    # bool is an int subclass; true/false are not coordinates
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return BOARD_MIN <= value <= BOARD_MAX


def is_valid_move(data) -> bool:
    if not isinstance(data, dict):
        return False
    return all(is_valid_coord(data.get(field)) for field in MOVE_FIELDS)


def is_valid_promotion(data) -> bool:
    return (
        is_valid_move(data)
        and isinstance(data.get('promoteTo'), str)
        and data['promoteTo'] in PROMOTION_PIECES
    )
