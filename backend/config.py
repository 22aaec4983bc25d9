import os

_SHEET = 'https://docs.google.com/spreadsheets/d/1zeW6OCKSnpCKt6o1VRGZ2yR3mTCH1OmPY7m_zHVURHI/export?format=csv'


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///sizeable.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Comma-separated frontend origins allowed by CORS and Socket.IO
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,http://127.0.0.1:3000'
    ).split(',') if o.strip()]
    # Setup bounds
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '3'))
    MAX_PLAYERS = int(os.environ.get('MAX_PLAYERS', '10'))
    DEFAULT_TARGET_SCORE = int(os.environ.get('DEFAULT_TARGET_SCORE', '3'))
    MAX_TARGET_SCORE = int(os.environ.get('MAX_TARGET_SCORE', '10'))
    # Reference pools (newline-delimited text)
    GEO_URL = os.environ.get('GEO_URL') or f'{_SHEET}&gid=768712458'
    SIZABLE_URL = os.environ.get('SIZABLE_URL') or f'{_SHEET}&gid=0'
    REFERENCE_FETCH_ON_STARTUP = os.environ.get('REFERENCE_FETCH_ON_STARTUP', '1') not in ('0', 'false', 'False')
    REFERENCE_FETCH_TIMEOUT_SEC = float(os.environ.get('REFERENCE_FETCH_TIMEOUT_SEC', '30'))
    # Advisory oracle. Anyone who can reach this server can spend this key.
    OPENAI_API_KEY = os.environ.get('OPENAI_API_KEY', '')
    ORACLE_URL = os.environ.get('ORACLE_URL', 'https://api.openai.com/v1/chat/completions')
    ORACLE_MODEL = os.environ.get('ORACLE_MODEL', 'gpt-3.5-turbo')
    ORACLE_MAX_TOKENS = int(os.environ.get('ORACLE_MAX_TOKENS', '200'))
    ORACLE_TEMPERATURE = float(os.environ.get('ORACLE_TEMPERATURE', '0.7'))
    ORACLE_TIMEOUT_SEC = float(os.environ.get('ORACLE_TIMEOUT_SEC', '30'))
