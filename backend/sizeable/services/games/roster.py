from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from .errors import (
    DuplicateName,
    EmptyName,
    InvalidTargetScore,
    PlayerCountOutOfRange,
)

# Rotation needs two Sizers; configured bounds can only tighten this.
ALGORITHMIC_MIN_PLAYERS = 2


@dataclass(frozen=True)
class Player:
    name: str
    score: int = 0

    def scored(self, points: int = 1) -> 'Player':
        return replace(self, score=self.score + points)

    def to_dict(self):
        return {'name': self.name, 'score': self.score}


Roster = Tuple[Player, ...]


def validate_roster(player_count: int, names: Sequence[Optional[str]],
                    min_players: int = 3, max_players: int = 10) -> Roster:
    """Build a fresh roster from the setup form.

    One name per seat; only the first ``player_count`` seats are read and a
    missing seat counts as an empty name. Names are trimmed and must be
    unique ignoring case. Every player starts on 0.
    """
    lower = max(min_players, ALGORITHMIC_MIN_PLAYERS)
    if not isinstance(player_count, int) or isinstance(player_count, bool) \
            or not lower <= player_count <= max_players:
        raise PlayerCountOutOfRange(player_count, lower, max_players)

    seats = list(names[:player_count])
    seats += [''] * (player_count - len(seats))

    trimmed = []
    for seat, raw in enumerate(seats):
        name = (raw or '').strip()
        if not name:
            raise EmptyName(seat)
        trimmed.append(name)

    first_seen = {}
    for seat, name in enumerate(trimmed):
        key = name.casefold()
        if key in first_seen:
            raise DuplicateName(name, (first_seen[key], seat))
        first_seen[key] = seat

    return tuple(Player(name=name) for name in trimmed)


def validate_target_score(target_score: int, max_target: Optional[int] = None) -> int:
    if not isinstance(target_score, int) or isinstance(target_score, bool) or target_score < 1:
        raise InvalidTargetScore(target_score, max_target)
    if max_target is not None and target_score > max_target:
        raise InvalidTargetScore(target_score, max_target)
    return target_score


def reset_scores(roster: Roster) -> Roster:
    return tuple(replace(p, score=0) for p in roster)
