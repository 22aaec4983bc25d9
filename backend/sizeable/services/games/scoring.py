"""Round-robin scheduling and scoring for a Sizeable game.

Every transition here is a pure function: it takes a ``GameState`` and
returns a new one. The caller owns the mutable container (the ``Game`` row)
and supplies the next question, since drawing one touches the reference
pools.
"""

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Sequence, Tuple

from .errors import GameStateError, InvalidResolution
from .pairing import INITIAL_PAIRING, Pairing, next_pairing
from .questions import NOT_READY, Question
from .roster import Player, Roster, reset_scores, validate_roster, validate_target_score

SETUP = 'setup'
IN_PROGRESS = 'in_progress'
FINISHED = 'finished'

SINGLE_WINNER = 'single_winner'
TIE = 'tie'
NO_POINTS = 'no_points'

DEFAULT_TARGET_SCORE = 3


@dataclass(frozen=True)
class RoundRecord:
    round: int
    pairing: Pairing
    question: Question
    estimates: Mapping[int, str]
    outcome: str
    awarded: Tuple[int, ...]

    def to_dict(self):
        return {
            'round': self.round,
            'pairing': list(self.pairing),
            'cohort': self.question.cohort,
            'item': self.question.item,
            'estimates': {str(k): v for k, v in self.estimates.items()},
            'outcome': self.outcome,
            'awarded': list(self.awarded),
        }

    @classmethod
    def from_dict(cls, data) -> 'RoundRecord':
        return cls(
            round=int(data['round']),
            pairing=tuple(data['pairing']),
            question=Question(cohort=data['cohort'], item=data['item']),
            estimates={int(k): v for k, v in (data.get('estimates') or {}).items()},
            outcome=data['outcome'],
            awarded=tuple(data.get('awarded') or ()),
        )


@dataclass(frozen=True)
class GameState:
    players: Roster = ()
    target_score: int = DEFAULT_TARGET_SCORE
    status: str = SETUP
    pairing: Pairing = INITIAL_PAIRING
    question: Question = NOT_READY
    estimates: Mapping[int, str] = field(default_factory=dict)
    round_number: int = 0
    history: Tuple[RoundRecord, ...] = ()

    @property
    def champion(self) -> Optional[Player]:
        return find_champion(self.players, self.target_score)

    @property
    def judges(self) -> Tuple[int, ...]:
        return tuple(i for i in range(len(self.players)) if i not in self.pairing)

    def estimate_for(self, sizer_index: int) -> str:
        return self.estimates.get(sizer_index, '')


def find_champion(players: Sequence[Player], target_score: int) -> Optional[Player]:
    """First player in seat order at or above the target, if any."""
    for player in players:
        if player.score >= target_score:
            return player
    return None


def start_game(state: GameState, player_count: int, names: Sequence[str], target_score: int,
               question: Question, min_players: int = 3, max_players: int = 10,
               max_target_score: Optional[int] = None) -> GameState:
    if state.status != SETUP:
        raise GameStateError('A game is already running; play again to return to setup')
    players = validate_roster(player_count, names, min_players=min_players, max_players=max_players)
    target = validate_target_score(target_score, max_target_score)
    return GameState(
        players=players,
        target_score=target,
        status=IN_PROGRESS,
        pairing=INITIAL_PAIRING,
        question=question,
        estimates={},
        round_number=1,
        history=(),
    )


def _require_in_progress(state: GameState) -> None:
    if state.status == FINISHED:
        champion = state.champion
        name = champion.name if champion else 'someone'
        raise GameStateError(f'The game is over; {name} is the champion')
    if state.status != IN_PROGRESS:
        raise GameStateError('The game has not started')


def submit_estimate(state: GameState, sizer_index: int, value) -> GameState:
    _require_in_progress(state)
    if sizer_index not in state.pairing:
        raise InvalidResolution(f'Player {sizer_index} is not sizing this round')
    estimates = dict(state.estimates)
    estimates[sizer_index] = '' if value is None else str(value)
    return replace(state, estimates=estimates)


def can_tie(state: GameState) -> bool:
    """Both Sizers answered and their answers match character for character."""
    first, second = state.pairing
    a = state.estimate_for(first)
    b = state.estimate_for(second)
    return bool(a) and bool(b) and a == b


def _close_round(state: GameState, outcome: str, awarded: Tuple[int, ...],
                 winner: int, loser: int, question: Question) -> GameState:
    players = tuple(
        p.scored() if seat in awarded else p
        for seat, p in enumerate(state.players)
    )
    record = RoundRecord(
        round=state.round_number,
        pairing=state.pairing,
        question=state.question,
        estimates=dict(state.estimates),
        outcome=outcome,
        awarded=awarded,
    )
    closed = replace(state, players=players, estimates={}, history=state.history + (record,))
    if find_champion(players, state.target_score) is not None:
        return replace(closed, status=FINISHED)
    return replace(
        closed,
        pairing=next_pairing(players, winner, loser),
        question=question,
        round_number=state.round_number + 1,
    )


def resolve_single_winner(state: GameState, winner_index: int, question: Question) -> GameState:
    _require_in_progress(state)
    first, second = state.pairing
    if winner_index not in state.pairing:
        raise InvalidResolution(f'Player {winner_index} is not one of this round\'s Sizers')
    loser_index = second if winner_index == first else first
    return _close_round(state, SINGLE_WINNER, (winner_index,), winner_index, loser_index, question)


def resolve_tie(state: GameState, question: Question) -> GameState:
    _require_in_progress(state)
    if not can_tie(state):
        raise InvalidResolution('Tie points need both Sizers to enter the same estimate')
    first, second = state.pairing
    return _close_round(state, TIE, (first, second), first, second, question)


def resolve_no_points(state: GameState, question: Question) -> GameState:
    _require_in_progress(state)
    first, second = state.pairing
    return _close_round(state, NO_POINTS, (), first, second, question)


def play_again(state: GameState) -> GameState:
    """Zero the scores and go back to setup, keeping the roster for reuse."""
    return replace(
        state,
        players=reset_scores(state.players),
        status=SETUP,
        pairing=INITIAL_PAIRING,
        question=NOT_READY,
        estimates={},
        round_number=0,
        history=(),
    )


def refresh_question(state: GameState, question: Question) -> GameState:
    """Swap in a real question if the current one is the loading placeholder."""
    if state.status != IN_PROGRESS or state.question.is_ready or not question.is_ready:
        return state
    return replace(state, question=question)
