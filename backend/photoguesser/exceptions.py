"""Error taxonomy of the round sequencer."""


class GameError(Exception):
    """Base class for game state errors."""


class EmptyRoundSetError(GameError):
    """A game was started without any photo carrying GPS coordinates."""

    def __init__(self, message: str = "Upload at least one photo with GPS data to begin."):
        super().__init__(message)
        self.message = message


class MissingCoordinateError(GameError):
    """A photo without coordinates was handed to the sequencer."""

    def __init__(self, photo_id: str):
        self.photo_id = photo_id
        self.message = f"Photo {photo_id} has no GPS coordinates and cannot be played."
        super().__init__(self.message)


class InvalidTransitionError(GameError):
    """A transition was requested from a stage that does not allow it."""

    def __init__(self, action: str, stage: str):
        self.action = action
        self.stage = stage
        self.message = f"Cannot {action} while the game is in stage '{stage}'."
        super().__init__(self.message)
