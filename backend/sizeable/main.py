from flask import Blueprint, current_app, jsonify

from sizeable.services.games.reference_data import get_pools

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Sizeable game server!'})


@main.route('/health')
def health():
    pools = get_pools(current_app)
    return jsonify({'status': 'ok', 'pools_ready': pools.ready})
