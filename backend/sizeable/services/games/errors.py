"""Domain errors raised by the Sizeable game core.

Every error carries a stable ``code`` so HTTP and socket layers can report
it without string matching on messages.
"""

from typing import Optional


class SizeableError(Exception):
    """Base class for all game-level errors."""

    code = 'sizeable_error'


# ---- Setup validation ----

class ValidationError(SizeableError):
    """Setup input was rejected; the game does not start."""

    code = 'validation_error'


class EmptyName(ValidationError):
    code = 'empty_name'

    def __init__(self, seat: int):
        self.seat = seat
        super().__init__(f'Player {seat + 1} needs a name')


class DuplicateName(ValidationError):
    code = 'duplicate_name'

    def __init__(self, name: str, seats: tuple):
        self.name = name
        self.seats = seats
        super().__init__(f'Player names must be unique: "{name}" is used more than once')


class PlayerCountOutOfRange(ValidationError):
    code = 'player_count_out_of_range'

    def __init__(self, count, min_players: int, max_players: int):
        self.count = count
        super().__init__(f'Player count must be between {min_players} and {max_players}, got {count}')


class InvalidTargetScore(ValidationError):
    code = 'invalid_target_score'

    def __init__(self, target, max_target: Optional[int] = None):
        self.target = target
        if max_target is None:
            super().__init__(f'Target score must be at least 1, got {target}')
        else:
            super().__init__(f'Target score must be between 1 and {max_target}, got {target}')


# ---- Play ----

class InsufficientPlayers(SizeableError):
    """Fewer than two players; no pairing exists."""

    code = 'insufficient_players'

    def __init__(self, size: int):
        self.size = size
        super().__init__(f'At least 2 players are needed to pair Sizers, roster has {size}')


class InvalidResolution(SizeableError):
    """A round outcome or estimate that does not fit the current pairing."""

    code = 'invalid_resolution'


class GameStateError(SizeableError):
    """The command is not accepted in the game's current status."""

    code = 'game_state'


# ---- External collaborators ----

class DataUnavailable(SizeableError):
    code = 'data_unavailable'


class OracleUnavailable(SizeableError):
    code = 'oracle_unavailable'


class OracleError(SizeableError):
    code = 'oracle_error'
