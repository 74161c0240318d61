import logging
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from ..config import Settings, get_settings
from ..dependencies import get_store, require_map
from ..exceptions import EmptyRoundSetError, InvalidTransitionError
from ..models.game import (
    GameStartRequest, GameStateResponse, GuessRequest, GuessResponse,
    RoundResponse
)
from ..services.game import Complete, GameState, Resolved, Round, Setup
from ..services.scoring import format_distance, round_progress
from ..services.store import GameStore

router = APIRouter(prefix="/game", tags=["Game"])
log = logging.getLogger("photoguesser.api")


def _conflict(error: InvalidTransitionError) -> HTTPException:
    log.warning(error.message)
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=error.message)


def _round_response(index: int, round_: Round, reveal: bool) -> RoundResponse:
    response = RoundResponse(
        round_number=index + 1,
        photo_id=round_.photo.id,
        photo_name=round_.photo.name,
        photo_url=round_.photo.url,
    )
    if round_.guess is not None:
        response.guess_latitude = round_.guess.latitude
        response.guess_longitude = round_.guess.longitude
    # Keep the answer hidden until the round is resolved
    if reveal and round_.photo.coordinate is not None:
        response.actual_latitude = round_.photo.coordinate.latitude
        response.actual_longitude = round_.photo.coordinate.longitude
    if round_.result is not None:
        response.distance_km = round_.result.distance_km
        response.distance_label = format_distance(round_.result.distance_km)
        response.score = round_.result.score
    return response


def _state_response(state: GameState) -> GameStateResponse:
    if isinstance(state, Setup):
        return GameStateResponse(stage=state.stage)

    session = state.session
    reveal = isinstance(state, (Resolved, Complete))
    return GameStateResponse(
        stage=state.stage,
        order=session.order,
        scale=session.scale,
        round_number=session.active_index + 1,
        total_rounds=len(session.rounds),
        progress=round_progress(session.active_index, len(session.rounds)),
        total_score=session.total_score,
        reveal=reveal,
        current_round=_round_response(session.active_index, session.active_round, reveal),
    )


@router.post("/start", response_model=GameStateResponse, status_code=status.HTTP_201_CREATED)
async def start_game(
    game_data: GameStartRequest,
    store: GameStore = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Start a new game with the playable photos of the current set."""
    order = game_data.order or settings.DEFAULT_ROUND_ORDER
    scale = game_data.scale or settings.DEFAULT_SCORE_SCALE
    try:
        state = store.start(order, scale)
    except EmptyRoundSetError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    return _state_response(state)


@router.get("/current", response_model=GameStateResponse)
async def get_current_game(store: GameStore = Depends(get_store)):
    """Get the current stage and round."""
    return _state_response(store.state)


@router.post("/guess", response_model=GameStateResponse)
async def submit_guess(
    guess: GuessRequest,
    store: GameStore = Depends(get_store),
    settings: Settings = Depends(require_map)
):
    """Place or move the pin for the current round."""
    try:
        state = store.guess(guess.to_coordinate())
    except InvalidTransitionError as e:
        raise _conflict(e)
    return _state_response(state)


@router.post("/confirm", response_model=GuessResponse)
async def confirm_guess(
    store: GameStore = Depends(get_store),
    settings: Settings = Depends(require_map)
):
    """Lock in the current guess and score it."""
    try:
        state = store.confirm()
    except InvalidTransitionError as e:
        raise _conflict(e)

    if not isinstance(state, Resolved):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Place a pin on the map before locking in your guess."
        )

    actual = state.session.active_round.photo.coordinate
    return GuessResponse(
        distance_km=state.result.distance_km,
        distance_label=format_distance(state.result.distance_km),
        score=state.result.score,
        actual_latitude=actual.latitude,
        actual_longitude=actual.longitude,
        round_completed=True,
        game_completed=state.session.is_last_round
    )


@router.post("/next", response_model=GameStateResponse)
async def next_round(store: GameStore = Depends(get_store)):
    """Advance to the next round, or to the final results."""
    try:
        state = store.advance()
    except InvalidTransitionError as e:
        raise _conflict(e)
    return _state_response(state)


@router.post("/replay", response_model=GameStateResponse, status_code=status.HTTP_201_CREATED)
async def replay_game(store: GameStore = Depends(get_store)):
    """Play the same photos again. Shuffled games get a new order."""
    try:
        state = store.replay()
    except InvalidTransitionError as e:
        raise _conflict(e)
    return _state_response(state)


@router.get("/rounds", response_model=List[RoundResponse])
async def get_game_rounds(store: GameStore = Depends(get_store)):
    """Get all rounds of the current game."""
    state = store.state
    if isinstance(state, Setup):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No active game found. Start a new game."
        )

    session = state.session
    return [
        _round_response(index, round_, round_.is_resolved)
        for index, round_ in enumerate(session.rounds)
    ]
