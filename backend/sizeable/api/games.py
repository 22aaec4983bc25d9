from flask import Blueprint, jsonify, request, current_app
from sizeable import db, socketio
from sizeable.models import Game
from sizeable.services.games import scoring
from sizeable.services.games.errors import (
    DataUnavailable,
    OracleError,
    OracleUnavailable,
    SizeableError,
)
from sizeable.services.games.oracle import ask_oracle
from sizeable.services.games.reference_data import get_pools, start_pool_fetch


games = Blueprint('games', __name__)

_ERROR_STATUS = {
    DataUnavailable: 503,
    OracleUnavailable: 503,
    OracleError: 502,
}


@games.errorhandler(SizeableError)
def handle_game_error(exc):
    status = next((code for cls, code in _ERROR_STATUS.items() if isinstance(exc, cls)), 400)
    current_app.logger.info(f"[rejected] path={request.path} code={exc.code} message={exc}")
    return jsonify({'error': str(exc), 'code': exc.code}), status


def _get_game(game_code: str) -> Game:
    return Game.query.filter_by(game_code=game_code.upper()).first_or_404()


def _save(game: Game, state: scoring.GameState) -> None:
    game.apply_state(state)
    db.session.add(game)
    db.session.commit()
    socketio.emit('state_update', {'game_code': game.game_code}, to=f"game:{game.game_code}", namespace='/ws')


def _draw_question():
    return get_pools(current_app).draw()


def _as_int(value):
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _log_round(tag: str, game: Game, before: scoring.GameState, after: scoring.GameState, **fields) -> None:
    extra = ' '.join(f"{k}={v}" for k, v in fields.items())
    current_app.logger.info(
        f"[{tag}] game={game.game_code} round={before.round_number} pairing={list(before.pairing)} {extra}".rstrip()
    )
    if after.status == scoring.FINISHED:
        champion = after.champion
        current_app.logger.info(
            f"[champion] game={game.game_code} name={champion.name} score={champion.score} target={after.target_score}"
        )


@games.route('/options', methods=['GET'])
def setup_options():
    cfg = current_app.config
    return jsonify({
        'min_players': int(cfg.get('MIN_PLAYERS', 3)),
        'max_players': int(cfg.get('MAX_PLAYERS', 10)),
        'default_target_score': int(cfg.get('DEFAULT_TARGET_SCORE', scoring.DEFAULT_TARGET_SCORE)),
        'max_target_score': int(cfg.get('MAX_TARGET_SCORE', 10)),
        'oracle_enabled': bool(cfg.get('OPENAI_API_KEY')),
    })


@games.route('/pools', methods=['GET'])
def pool_status():
    return jsonify(get_pools(current_app).to_dict())


@games.route('/pools/refresh', methods=['POST'])
def refresh_pools():
    background = not current_app.config.get('TESTING')
    pools = start_pool_fetch(current_app._get_current_object(), background=background)
    return jsonify(pools.to_dict()), 202


@games.route('/create', methods=['POST'])
def create_game():
    data = request.get_json(silent=True) or {}
    target = _as_int(data.get('target_score'))
    new_game = Game(target_score=target or int(current_app.config.get('DEFAULT_TARGET_SCORE', 3)))
    db.session.add(new_game)
    db.session.commit()
    current_app.logger.info(f"[create] game={new_game.game_code}")
    return jsonify({
        'message': 'New game created!',
        'game_code': new_game.game_code
    }), 201


@games.route('/<string:game_code>/state', methods=['GET'])
def get_game_state(game_code):
    game = _get_game(game_code)
    state = game.to_state()
    # Pools may have finished loading since the placeholder was drawn
    if state.status == scoring.IN_PROGRESS and not state.question.is_ready:
        refreshed = scoring.refresh_question(state, _draw_question())
        if refreshed is not state:
            current_app.logger.info(f"[question-ready] game={game.game_code} round={state.round_number}")
            _save(game, refreshed)
    return jsonify(game.to_dict())


@games.route('/<string:game_code>/start', methods=['POST'])
def start_game(game_code):
    data = request.get_json(silent=True) or {}
    names = data.get('names')
    if not isinstance(names, list):
        return jsonify({'error': 'names must be a list with one entry per seat'}), 400
    player_count = _as_int(data.get('player_count')) if data.get('player_count') is not None else len(names)
    if player_count is None:
        return jsonify({'error': 'player_count must be a number'}), 400
    cfg = current_app.config
    target = data.get('target_score', cfg.get('DEFAULT_TARGET_SCORE', scoring.DEFAULT_TARGET_SCORE))
    if _as_int(target) is None:
        return jsonify({'error': 'target_score must be a number'}), 400

    game = _get_game(game_code)
    state = scoring.start_game(
        game.to_state(),
        player_count=player_count,
        names=[n if isinstance(n, str) else '' for n in names],
        target_score=int(target),
        question=_draw_question(),
        min_players=int(cfg.get('MIN_PLAYERS', 3)),
        max_players=int(cfg.get('MAX_PLAYERS', 10)),
        max_target_score=int(cfg.get('MAX_TARGET_SCORE', 10)),
    )
    game.oracle_answer = None
    _save(game, state)
    current_app.logger.info(
        f"[start] game={game.game_code} players={len(state.players)} target={state.target_score} "
        f"question_ready={state.question.is_ready}"
    )
    return jsonify(game.to_dict())


@games.route('/<string:game_code>/estimates', methods=['POST'])
def submit_estimate(game_code):
    data = request.get_json(silent=True) or {}
    sizer_index = _as_int(data.get('sizer_index'))
    if sizer_index is None:
        return jsonify({'error': 'sizer_index is required'}), 400
    value = data.get('value', '')
    if value is not None and not isinstance(value, (str, int, float)):
        return jsonify({'error': 'value must be a string or number'}), 400

    game = _get_game(game_code)
    state = scoring.submit_estimate(game.to_state(), sizer_index, value)
    _save(game, state)
    return jsonify(game.to_dict())


@games.route('/<string:game_code>/vote', methods=['POST'])
def vote(game_code):
    data = request.get_json(silent=True) or {}
    winner_index = _as_int(data.get('winner_index'))
    if winner_index is None:
        return jsonify({'error': 'winner_index is required'}), 400

    game = _get_game(game_code)
    before = game.to_state()
    after = scoring.resolve_single_winner(before, winner_index, _draw_question())
    game.oracle_answer = None
    _save(game, after)
    _log_round('vote', game, before, after, winner=winner_index)
    return jsonify(game.to_dict())


@games.route('/<string:game_code>/tie', methods=['POST'])
def tie_vote(game_code):
    game = _get_game(game_code)
    before = game.to_state()
    after = scoring.resolve_tie(before, _draw_question())
    game.oracle_answer = None
    _save(game, after)
    _log_round('tie', game, before, after)
    return jsonify(game.to_dict())


@games.route('/<string:game_code>/no-points', methods=['POST'])
def no_points_vote(game_code):
    game = _get_game(game_code)
    before = game.to_state()
    after = scoring.resolve_no_points(before, _draw_question())
    game.oracle_answer = None
    _save(game, after)
    _log_round('no-points', game, before, after)
    return jsonify(game.to_dict())


@games.route('/<string:game_code>/play-again', methods=['POST'])
def play_again(game_code):
    game = _get_game(game_code)
    state = scoring.play_again(game.to_state())
    game.oracle_answer = None
    _save(game, state)
    current_app.logger.info(f"[play-again] game={game.game_code} players={len(state.players)}")
    return jsonify(game.to_dict())


@games.route('/<string:game_code>/oracle', methods=['POST'])
def ask_the_oracle(game_code):
    game = _get_game(game_code)
    state = game.to_state()
    if state.status != scoring.IN_PROGRESS:
        return jsonify({'error': 'The oracle can only be asked during a round'}), 400
    try:
        answer = ask_oracle(current_app.config, state.question)
    except OracleError as exc:
        current_app.logger.warning(f"[oracle-failed] game={game.game_code} error={exc}")
        game.oracle_answer = f'Error: {exc}'
        _save(game, state)
        raise
    game.oracle_answer = answer
    _save(game, state)
    current_app.logger.info(f"[oracle] game={game.game_code} round={state.round_number}")
    return jsonify({'answer': answer, 'question': state.question.prompt})
