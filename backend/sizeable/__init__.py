from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Import and register blueprints here
    from sizeable.main import main
    flask_app.register_blueprint(main)

    from sizeable.api.games import games
    # Mount game routes under /api to match frontend API client
    flask_app.register_blueprint(games, url_prefix='/api/games')

    # Register Socket.IO event handlers
    from sizeable.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    # Reference pools load in the background; questions show a placeholder until then
    from sizeable.services.games.reference_data import get_pools, start_pool_fetch
    get_pools(flask_app)
    if flask_app.config.get('REFERENCE_FETCH_ON_STARTUP') and not flask_app.config.get('TESTING'):
        start_pool_fetch(flask_app)

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the database tables."""
        import sizeable.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    @click.command('fetch-pools')
    def fetch_pools_command():
        """Fetches both reference pools now and draws a sample question."""
        from sizeable.services.games.errors import DataUnavailable
        pools = start_pool_fetch(flask_app, background=False)
        click.echo(f"cohorts: {len(pools.cohorts)} entries")
        click.echo(f"items: {len(pools.items)} entries")
        try:
            pools.require()
        except DataUnavailable as exc:
            raise click.ClickException(str(exc))
        click.echo(f"sample: {pools.draw().prompt}")

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(fetch_pools_command)

    return flask_app
