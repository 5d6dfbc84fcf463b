# engine_py/src/redthree_engine/errors.py

# Specific error codes
ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
ROOM_FULL = "ROOM_FULL"
ALREADY_STARTED = "ALREADY_STARTED"
NOT_YOUR_TURN = "NOT_YOUR_TURN"
INVALID_COMBINATION = "INVALID_COMBINATION"
MUST_CONTAIN_OPENING_CARD = "MUST_CONTAIN_OPENING_CARD"
CANNOT_BEAT_REFERENCE = "CANNOT_BEAT_REFERENCE"
MUST_PLAY = "MUST_PLAY"
STALE_DECISION = "STALE_DECISION"
OWNERSHIP_MISMATCH = "OWNERSHIP_MISMATCH"
INVALID_SEAT = "INVALID_SEAT"
WRONG_PHASE = "WRONG_PHASE"
ACTION_NOT_ALLOWED = "ACTION_NOT_ALLOWED"
INVALID_EVENT = "INVALID_EVENT"
INTERNAL_ERROR = "INTERNAL_ERROR"


class GameError(Exception):
    """Base exception for game-related errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class RoomNotFound(GameError):
    def __init__(self, message: str):
        super().__init__(ROOM_NOT_FOUND, message)


class RoomFull(GameError):
    def __init__(self, message: str):
        super().__init__(ROOM_FULL, message)


class AlreadyStarted(GameError):
    def __init__(self, message: str):
        super().__init__(ALREADY_STARTED, message)


class WrongPhase(GameError):
    def __init__(self, message: str):
        super().__init__(WRONG_PHASE, message)


# Room lifecycle failures surface as exceptions; rule violations are
# returned as failed results instead.
ERRORS_BY_CODE = {
    ROOM_NOT_FOUND: RoomNotFound,
    ROOM_FULL: RoomFull,
    ALREADY_STARTED: AlreadyStarted,
    WRONG_PHASE: WrongPhase,
}


# Helper function to raise common errors
def raise_error(code: str, message: str):
    error_class = ERRORS_BY_CODE.get(code)
    if error_class is None:
        raise GameError(code, message)
    raise error_class(message)
