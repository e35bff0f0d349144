"""Access token generation.

Tokens are 32 characters of [a-zA-Z0-9] drawn with the secrets module.
"""

import secrets
import string

from flask import current_app

EXTENSION_KEY = "token_generator"

TOKEN_LENGTH = 32
TOKEN_ALPHABET = string.ascii_letters + string.digits


class TokenGenerator:
    """Cryptographically secure random token source."""

    def __init__(self, length=TOKEN_LENGTH, alphabet=TOKEN_ALPHABET):
        self.length = length
        self.alphabet = alphabet

    def new_token(self) -> str:
        return "".join(secrets.choice(self.alphabet) for _ in range(self.length))


def init_token_generator(app, generator=None):
    app.extensions[EXTENSION_KEY] = generator or TokenGenerator()
    return app.extensions[EXTENSION_KEY]


def make_token() -> str:
    """Mint a token with the current app's generator."""
    return current_app.extensions[EXTENSION_KEY].new_token()


def token_preview(token) -> str:
    """Short prefix for log lines; never log a full token."""
    return f"{(token or '')[:8]}..."
