# engine_py/src/sequence_engine/errors.py

class GameError(Exception):
    """Base exception for game-related errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        self.kind = error_kind(code)
        super().__init__(f"[{code}] {message}")

# Error kinds
NOT_FOUND = "NotFound"
ILLEGAL_STATE = "IllegalState"
FORBIDDEN = "Forbidden"
INVALID = "Invalid"
INTERNAL = "Internal"

# Specific error codes
ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"

GAME_IN_PROGRESS = "GAME_IN_PROGRESS"
GAME_NOT_IN_PROGRESS = "GAME_NOT_IN_PROGRESS"
ALREADY_IN_ROOM = "ALREADY_IN_ROOM"
ROOM_FULL = "ROOM_FULL"
TEAM_FULL = "TEAM_FULL"
OCCUPIED = "OCCUPIED"
NO_TARGET = "NO_TARGET"
LOCKED = "LOCKED"
EXCHANGE_USED = "EXCHANGE_USED"

NOT_YOUR_TURN = "NOT_YOUR_TURN"
NOT_HOST = "NOT_HOST"
OWN_CHIP = "OWN_CHIP"

INVALID_CARD = "INVALID_CARD"
WRONG_CELL = "WRONG_CELL"
CORNER_FORBIDDEN = "CORNER_FORBIDDEN"
INVALID_CELL = "INVALID_CELL"
MISSING_TARGET = "MISSING_TARGET"
NOT_DEAD_CARD = "NOT_DEAD_CARD"
NOT_ENOUGH_PLAYERS = "NOT_ENOUGH_PLAYERS"
PLAYERS_NOT_READY = "PLAYERS_NOT_READY"
INVALID_EVENT = "INVALID_EVENT"

INTERNAL_ERROR = "INTERNAL_ERROR"

ERROR_KINDS = {
    ROOM_NOT_FOUND: NOT_FOUND,
    PLAYER_NOT_FOUND: NOT_FOUND,
    GAME_IN_PROGRESS: ILLEGAL_STATE,
    GAME_NOT_IN_PROGRESS: ILLEGAL_STATE,
    ALREADY_IN_ROOM: ILLEGAL_STATE,
    ROOM_FULL: ILLEGAL_STATE,
    TEAM_FULL: ILLEGAL_STATE,
    OCCUPIED: ILLEGAL_STATE,
    NO_TARGET: ILLEGAL_STATE,
    LOCKED: ILLEGAL_STATE,
    EXCHANGE_USED: ILLEGAL_STATE,
    NOT_YOUR_TURN: FORBIDDEN,
    NOT_HOST: FORBIDDEN,
    OWN_CHIP: FORBIDDEN,
    INVALID_CARD: INVALID,
    WRONG_CELL: INVALID,
    CORNER_FORBIDDEN: ILLEGAL_STATE,
    INVALID_CELL: INVALID,
    MISSING_TARGET: INVALID,
    NOT_DEAD_CARD: INVALID,
    NOT_ENOUGH_PLAYERS: INVALID,
    PLAYERS_NOT_READY: INVALID,
    INVALID_EVENT: INVALID,
    INTERNAL_ERROR: INTERNAL,
}


def error_kind(code: str) -> str:
    return ERROR_KINDS.get(code, INTERNAL)
