import os
import sys
import pytest

# Ensure the backend root (containing the `sizeable` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from sizeable import create_app, db, socketio
from sizeable.services.games.reference_data import COHORTS, ITEMS, get_pools


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = ['http://localhost:5173']
    MIN_PLAYERS = 3
    MAX_PLAYERS = 10
    DEFAULT_TARGET_SCORE = 3
    MAX_TARGET_SCORE = 10
    GEO_URL = 'http://reference.test/cohorts.csv'
    SIZABLE_URL = 'http://reference.test/items.csv'
    REFERENCE_FETCH_ON_STARTUP = False
    REFERENCE_FETCH_TIMEOUT_SEC = 5
    OPENAI_API_KEY = ''
    ORACLE_URL = 'http://oracle.test/v1/chat/completions'
    ORACLE_MODEL = 'gpt-3.5-turbo'
    ORACLE_MAX_TOKENS = 200
    ORACLE_TEMPERATURE = 0.7
    ORACLE_TIMEOUT_SEC = 5


COHORT_ENTRIES = ['"Ohio"', 'Texas', 'New York City']
ITEM_ENTRIES = ['Dentists', '"Golden retrievers"', 'Pizza places']


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import sizeable.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def pools(flask_app):
    reference = get_pools(flask_app)
    reference.publish(COHORTS, COHORT_ENTRIES)
    reference.publish(ITEMS, ITEM_ENTRIES)
    return reference


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def started_game(client, pools):
    """A three-player game (Alice, Bob, Carol) racing to 3 points."""
    code = client.post('/api/games/create').get_json()['game_code']
    res = client.post(f'/api/games/{code}/start', json={
        'player_count': 3,
        'names': ['Alice', 'Bob', 'Carol'],
        'target_score': 3,
    })
    assert res.status_code == 200
    return code
