"""Advisory oracle: asks a chat-completion service for a single-number estimate.

Purely advisory. Nothing in scoring reads the answer. The API key travels
with every request, so it is not a secret from whoever runs this server.
"""

import requests

from .errors import OracleError, OracleUnavailable
from .questions import Question

PROMPT_TEMPLATE = (
    'Answer the following question as simply as possible, giving me a single number. '
    'Use any data built into your model or on the internet. It is okay to make guesses '
    'or assumptions in order to get to a specific number.\n\n{question}'
)
EMPTY_ANSWER = 'No response from AI.'


def build_prompt(question: Question) -> str:
    return PROMPT_TEMPLATE.format(question=question.prompt)


def ask_oracle(config, question: Question) -> str:
    """Send the question and return the trimmed answer text.

    ``config`` is any mapping with the ``OPENAI_API_KEY`` and ``ORACLE_*``
    keys, normally ``app.config``.
    """
    api_key = config.get('OPENAI_API_KEY')
    if not api_key:
        raise OracleUnavailable('No OpenAI API key found. Set OPENAI_API_KEY in the environment.')
    if not question.is_ready:
        raise OracleUnavailable('The question is still loading')

    payload = {
        'model': config.get('ORACLE_MODEL', 'gpt-3.5-turbo'),
        'messages': [{'role': 'user', 'content': build_prompt(question)}],
        'max_tokens': int(config.get('ORACLE_MAX_TOKENS', 200)),
        'temperature': float(config.get('ORACLE_TEMPERATURE', 0.7)),
    }
    headers = {
        'Content-Type': 'application/json',
        'Authorization': f'Bearer {api_key}',
    }
    try:
        response = requests.post(
            config.get('ORACLE_URL', 'https://api.openai.com/v1/chat/completions'),
            json=payload,
            headers=headers,
            timeout=config.get('ORACLE_TIMEOUT_SEC') or None,
        )
    except requests.RequestException as exc:
        raise OracleError(f'OpenAI API error: {exc}') from exc
    if not response.ok:
        raise OracleError(f'OpenAI API error: {response.reason}')

    try:
        data = response.json()
    except ValueError as exc:
        raise OracleError('OpenAI API returned a body that is not JSON') from exc
    try:
        text = data['choices'][0]['message']['content']
    except (KeyError, IndexError, TypeError):
        text = None
    return (text or EMPTY_ANSWER).strip()
