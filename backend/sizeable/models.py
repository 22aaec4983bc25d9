from sizeable import db
from sizeable.services.games.pairing import INITIAL_PAIRING
from sizeable.services.games.questions import LOADING_PLACEHOLDER, Question
from sizeable.services.games.roster import Player as RosterPlayer
from sizeable.services.games.scoring import (
    DEFAULT_TARGET_SCORE,
    SETUP,
    GameState,
    RoundRecord,
    can_tie,
)
import json
import string
import random


class Player(db.Model):
    __tablename__ = 'player'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False)
    seat = db.Column(db.Integer, nullable=False)
    score = db.Column(db.Integer, default=0, nullable=False)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False)
    game = db.relationship('Game', back_populates='players')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'seat': self.seat,
            'score': self.score,
            'game_id': self.game_id,
        }


def generate_game_code(length=4):
    """Generate a unique, short game code."""
    while True:
        code = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))
        if not Game.query.filter_by(game_code=code).first():
            return code


class Game(db.Model):
    __tablename__ = 'game'
    id = db.Column(db.Integer, primary_key=True)
    game_code = db.Column(db.String(4), unique=True, index=True)
    status = db.Column(db.String(64), default=SETUP, nullable=False)  # setup, in_progress, finished
    target_score = db.Column(db.Integer, default=DEFAULT_TARGET_SCORE, nullable=False)
    players = db.relationship(
        'Player', back_populates='game', order_by='Player.seat', cascade='all, delete-orphan'
    )
    # Current round
    sizer_a = db.Column(db.Integer, default=INITIAL_PAIRING[0], nullable=False)
    sizer_b = db.Column(db.Integer, default=INITIAL_PAIRING[1], nullable=False)
    cohort = db.Column(db.String(255), default=LOADING_PLACEHOLDER, nullable=False)
    item = db.Column(db.String(255), default=LOADING_PLACEHOLDER, nullable=False)
    estimates = db.Column(db.Text, nullable=True)  # JSON object: seat -> estimate string
    round_number = db.Column(db.Integer, default=0, nullable=False)
    round_history = db.Column(db.Text, nullable=True)  # JSON list of round summaries
    oracle_answer = db.Column(db.Text, nullable=True)

    def __init__(self, **kwargs):
        super(Game, self).__init__(**kwargs)
        if not self.game_code:
            self.game_code = generate_game_code()

    def to_state(self) -> GameState:
        try:
            raw_estimates = json.loads(self.estimates) if self.estimates else {}
        except ValueError:
            raw_estimates = {}
        try:
            raw_history = json.loads(self.round_history) if self.round_history else []
        except ValueError:
            raw_history = []
        return GameState(
            players=tuple(RosterPlayer(name=p.name, score=p.score) for p in self.players),
            target_score=self.target_score if self.target_score is not None else DEFAULT_TARGET_SCORE,
            status=self.status or SETUP,
            pairing=(
                self.sizer_a if self.sizer_a is not None else INITIAL_PAIRING[0],
                self.sizer_b if self.sizer_b is not None else INITIAL_PAIRING[1],
            ),
            question=Question(
                cohort=self.cohort or LOADING_PLACEHOLDER,
                item=self.item or LOADING_PLACEHOLDER,
            ),
            estimates={int(k): v for k, v in raw_estimates.items()},
            round_number=self.round_number or 0,
            history=tuple(RoundRecord.from_dict(r) for r in raw_history),
        )

    def apply_state(self, state: GameState) -> None:
        """Write a state value back onto this row and its players.

        Seats present in both keep their Player row; a changed roster length
        adds or removes rows.
        """
        current = list(self.players)
        for seat, rp in enumerate(state.players):
            if seat < len(current):
                row = current[seat]
                row.name = rp.name
                row.score = rp.score
                row.seat = seat
            else:
                self.players.append(Player(name=rp.name, score=rp.score, seat=seat))
        for row in current[len(state.players):]:
            self.players.remove(row)

        self.status = state.status
        self.target_score = state.target_score
        self.sizer_a, self.sizer_b = state.pairing
        self.cohort = state.question.cohort
        self.item = state.question.item
        self.estimates = json.dumps({str(k): v for k, v in state.estimates.items()})
        self.round_number = state.round_number
        self.round_history = json.dumps([r.to_dict() for r in state.history])

    def to_dict(self):
        state = self.to_state()
        champion = state.champion if state.players else None
        sizers = []
        if len(state.players) >= 2:
            for seat in state.pairing:
                sizers.append({
                    'seat': seat,
                    'name': state.players[seat].name,
                    'estimate': state.estimate_for(seat),
                })
        return {
            'id': self.id,
            'game_code': self.game_code,
            'status': state.status,
            'target_score': state.target_score,
            'players': [p.to_dict() for p in self.players],
            'pairing': list(state.pairing),
            'sizers': sizers,
            'judges': list(state.judges) if len(state.players) >= 2 else [],
            'question': state.question.to_dict(),
            'estimates': {str(k): v for k, v in state.estimates.items()},
            'can_tie': state.status != SETUP and len(state.players) >= 2 and can_tie(state),
            'champion': champion.to_dict() if champion else None,
            'current_round': state.round_number,
            'round_history': [r.to_dict() for r in state.history],
            'oracle_answer': self.oracle_answer or '',
        }
