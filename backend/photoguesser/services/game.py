"""Round sequencer.

The game is an explicit state value moved along by pure transition
functions:

    Setup --start_game--> Guessing --confirm_guess--> Resolved
    Resolved --advance_round--> Guessing | Complete
    Complete --replay--> Guessing
    any --reset_ingestion--> Setup

Each stage is its own type and only carries the data valid for it.
Transitions never mutate their input.
"""
import logging
import random
from dataclasses import dataclass, replace as _replace
from typing import ClassVar, Optional, Sequence, Tuple, Union

from ..exceptions import EmptyRoundSetError, InvalidTransitionError, MissingCoordinateError
from ..models.game import Coordinate, RoundOrder, ScoreScale, Stage
from .photos import Photo
from .scoring import calculate_score, haversine_distance

log = logging.getLogger("photoguesser.game")


@dataclass(frozen=True)
class RoundResult:
    """Distance and score of a resolved round, always set together."""
    distance_km: float
    score: int


@dataclass(frozen=True)
class Round:
    """One play of one photo."""
    id: str
    photo: Photo
    guess: Optional[Coordinate] = None
    result: Optional[RoundResult] = None

    @property
    def distance_km(self) -> Optional[float]:
        return self.result.distance_km if self.result else None

    @property
    def score(self) -> Optional[int]:
        return self.result.score if self.result else None

    @property
    def is_resolved(self) -> bool:
        return self.result is not None


@dataclass(frozen=True)
class GameSession:
    rounds: Tuple[Round, ...]
    order: RoundOrder
    scale: ScoreScale
    photos: Tuple[Photo, ...]
    active_index: int = 0

    @property
    def active_round(self) -> Round:
        return self.rounds[self.active_index]

    @property
    def is_last_round(self) -> bool:
        return self.active_index + 1 >= len(self.rounds)

    @property
    def total_score(self) -> int:
        return sum(r.score or 0 for r in self.rounds)

    def with_active_round(self, round_: Round) -> "GameSession":
        rounds = list(self.rounds)
        rounds[self.active_index] = round_
        return _replace(self, rounds=tuple(rounds))


@dataclass(frozen=True)
class Setup:
    stage: ClassVar[Stage] = Stage.SETUP


@dataclass(frozen=True)
class Guessing:
    session: GameSession
    stage: ClassVar[Stage] = Stage.GUESSING


@dataclass(frozen=True)
class Resolved:
    session: GameSession
    result: RoundResult
    stage: ClassVar[Stage] = Stage.RESOLVED


@dataclass(frozen=True)
class Complete:
    session: GameSession
    stage: ClassVar[Stage] = Stage.COMPLETE


GameState = Union[Setup, Guessing, Resolved, Complete]


def start_game(
    photos: Sequence[Photo],
    order: RoundOrder = RoundOrder.SEQUENTIAL,
    scale: ScoreScale = ScoreScale.COUNTRY,
    rng: Optional[random.Random] = None,
) -> Guessing:
    """Build the round list from photos that all carry coordinates."""
    if not photos:
        raise EmptyRoundSetError()
    for photo in photos:
        if photo.coordinate is None:
            raise MissingCoordinateError(photo.id)

    ordered = list(photos)
    if order == RoundOrder.SHUFFLED:
        (rng or random).shuffle(ordered)

    session = GameSession(
        rounds=tuple(Round(id=p.id, photo=p) for p in ordered),
        order=order,
        scale=scale,
        photos=tuple(photos),
    )
    log.debug("Started %s game with %d round(s) at %s scale", order.value, len(ordered), scale.value)
    return Guessing(session=session)


def submit_guess(state: GameState, coordinate: Coordinate) -> Guessing:
    """Place or move the pin for the active round."""
    if not isinstance(state, Guessing):
        raise InvalidTransitionError("submit a guess", state.stage.value)
    session = state.session
    updated = _replace(session.active_round, guess=coordinate)
    return Guessing(session=session.with_active_round(updated))


def confirm_guess(state: GameState) -> GameState:
    """Lock in the active round's guess and score it.

    Without a guess the state is returned unchanged.
    """
    if not isinstance(state, Guessing):
        raise InvalidTransitionError("confirm a guess", state.stage.value)
    session = state.session
    current = session.active_round
    if current.guess is None or current.photo.coordinate is None:
        return state

    distance = haversine_distance(current.guess, current.photo.coordinate)
    result = RoundResult(distance_km=distance, score=calculate_score(distance, session.scale))
    log.debug(
        "Round %d resolved: %.3f km, %d points",
        session.active_index + 1, result.distance_km, result.score,
    )
    updated = _replace(current, result=result)
    return Resolved(session=session.with_active_round(updated), result=result)


def advance_round(state: GameState) -> Union[Guessing, Complete]:
    """Move to the next round, or finish after the last one."""
    if not isinstance(state, Resolved):
        raise InvalidTransitionError("advance the round", state.stage.value)
    session = state.session
    if session.is_last_round:
        log.debug("Game complete with %d points", session.total_score)
        return Complete(session=session)
    return Guessing(session=_replace(session, active_index=session.active_index + 1))


def replay(state: GameState, rng: Optional[random.Random] = None) -> Guessing:
    """Start over with the same photos, order and scale. Shuffles are redrawn."""
    if isinstance(state, Setup):
        raise InvalidTransitionError("replay", state.stage.value)
    session = state.session
    return start_game(session.photos, session.order, session.scale, rng=rng)


def reset_ingestion(state: GameState) -> Setup:
    """Discard any game in progress."""
    return Setup()
