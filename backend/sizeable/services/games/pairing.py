from typing import Sequence, Tuple

from .errors import InsufficientPlayers, InvalidResolution

Pairing = Tuple[int, int]

INITIAL_PAIRING: Pairing = (0, 1)


def next_pairing(roster: Sequence, winner_index: int, loser_index: int) -> Pairing:
    """Pick the Sizers for the next round.

    The winner stays on. The partner is the first seat after the loser,
    wrapping around the roster, that is not the winner. Rotation is strictly
    by seat order, so some players can wait longer than others.
    """
    size = len(roster)
    if size < 2:
        raise InsufficientPlayers(size)
    for index in (winner_index, loser_index):
        if not 0 <= index < size:
            raise InvalidResolution(f'Seat {index} is not in a roster of {size}')

    partner = (loser_index + 1) % size
    while partner == winner_index:
        partner = (partner + 1) % size
    return (winner_index, partner)
