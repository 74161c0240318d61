"""Single owner of the photo library and the current game state."""
import logging
import random
from typing import Optional, Sequence

from ..models.game import Coordinate, RoundOrder, ScoreScale, UploadSummary
from . import game
from .game import GameState, Setup
from .photos import PhotoLibrary, PhotoStore, Upload, build_photos

log = logging.getLogger("photoguesser.store")


class GameStore:
    """Applies sequencer transitions to the one game of this process."""

    def __init__(self, concurrency: int = 4, rng: Optional[random.Random] = None):
        self.concurrency = concurrency
        self.rng = rng
        self.photo_store = PhotoStore()
        self.library = PhotoLibrary(self.photo_store)
        self.state: GameState = Setup()

    async def ingest(self, uploads: Sequence[Upload]) -> UploadSummary:
        """Replace the photo set. Any game in progress is discarded."""
        photos = await build_photos(uploads, self.photo_store, self.concurrency)
        if not photos:
            log.info("Upload contained no images, keeping the current photo set")
            return self.library.summary()

        self.library.replace(photos)
        self.state = game.reset_ingestion(self.state)
        summary = self.library.summary()
        if summary.excluded:
            log.info(summary.message)
        return summary

    def start(self, order: RoundOrder, scale: ScoreScale) -> GameState:
        self.state = game.start_game(self.library.playable, order, scale, rng=self.rng)
        return self.state

    def guess(self, coordinate: Coordinate) -> GameState:
        self.state = game.submit_guess(self.state, coordinate)
        return self.state

    def confirm(self) -> GameState:
        self.state = game.confirm_guess(self.state)
        return self.state

    def advance(self) -> GameState:
        self.state = game.advance_round(self.state)
        return self.state

    def replay(self) -> GameState:
        self.state = game.replay(self.state, rng=self.rng)
        return self.state

    def reset(self) -> GameState:
        """Drop the photo set and release its display handles."""
        self.library.clear()
        self.state = game.reset_ingestion(self.state)
        return self.state

    def close(self) -> None:
        self.reset()
        self.photo_store.release_all()
