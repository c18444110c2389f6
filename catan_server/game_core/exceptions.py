# catan_server/game_core/exceptions.py


class ErrorCode:
    """Шаблоны сообщений об ошибках (стабильные, клиент на них опирается)."""

    ERROR_GAME_ALREADY_OVER = "The game is already over, {} cannot make a move"
    ERROR_NOT_ACTIVE_PLAYER = "Not the active player, it is {}'s turn"
    ERROR_CANT_ROLL_IN_SETUP = "Cannot roll dice during the setup phase"
    ERROR_INVALID_DICE_ROLL = "Invalid dice roll"
    ERROR_CANT_BUILD_HERE = "Cannot build {} here"
    ERROR_NOT_ENOUGH_RESOURCES = "Not enough resources for {}"
    ERROR_UNKNOWN_MOVE = "Unknown DTO Format"
    ERROR_NO_SUCH_GAME = "Game {} does not exist"


class GameError(Exception):
    """Базовое нарушение правил. Всегда вызвано клиентом, не фатально."""

    code = "GAME_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidGameMoveError(GameError):
    code = "INVALID_GAME_MOVE"


class GameAlreadyOverError(InvalidGameMoveError):
    code = "GAME_ALREADY_OVER"


class NotActivePlayerError(GameError):
    code = "NOT_ACTIVE_PLAYER"


class UnsupportedGameMoveError(GameError):
    code = "UNSUPPORTED_GAME_MOVE"


class NoSuchGameError(GameError):
    code = "NO_SUCH_GAME"
