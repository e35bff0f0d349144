"""Image service — prompt preparation and the OpenAI Images call.

The user's text is cleaned (HTML stripped, trademarked game names swapped
for a neutral phrase) and embedded in a fixed app-icon template before a
single request goes to the image API.
"""

import html
import logging
import re

import bleach
import requests
from flask import current_app

logger = logging.getLogger(__name__)

# Trademarked terms the image API tends to refuse.
BLOCKED_TERMS = re.compile(r"minecraft|skywars", re.IGNORECASE)
NEUTRAL_PHRASE = "pixel fantasy"

PROMPT_TEMPLATE = """
Crie um ícone de app (logo) para um jogo RPG de aventura.
Estilo: detalhado, dramático, alto contraste, ícone central, visual premium.
Elementos: {elements}.
Fundo: cor chapada (flat), sem textura, sem papel, sem mockup.
Sem texto, sem letras, sem marca d'água.
Formato: app icon, cantos arredondados.
Paleta: azul meia-noite, cinza aço, laranja fogo.
""".strip()


def sanitize_prompt(prompt: str) -> str:
    """Strip HTML and replace blocked terms with the neutral phrase."""
    # bleach escapes the &, < and > it keeps; the image API wants plain text
    text = html.unescape(bleach.clean(prompt, tags=[], strip=True))
    return BLOCKED_TERMS.sub(NEUTRAL_PHRASE, text).strip()


def render_prompt(elements: str) -> str:
    """Embed already-sanitized text in the app-icon template."""
    return PROMPT_TEMPLATE.format(elements=elements)


def request_image(prompt: str) -> requests.Response:
    """POST the composed prompt to the image API. One attempt, no retry.

    Returns the raw response; the caller decides what a failure means.
    Raises requests.exceptions.RequestException on network errors/timeouts.
    """
    config = current_app.config
    logger.info(f"Requesting image from {config['OPENAI_IMAGE_MODEL']}")
    return requests.post(
        config["OPENAI_IMAGES_URL"],
        headers={
            "Content-Type": "application/json",
            "Authorization": f"Bearer {config['OPENAI_API_KEY']}",
        },
        json={
            "model": config["OPENAI_IMAGE_MODEL"],
            "prompt": prompt,
            "size": config["OPENAI_IMAGE_SIZE"],
        },
        timeout=config["OPENAI_TIMEOUT"],
    )


def extract_image(payload):
    """Pull the image out of an Images API response body.

    Returns a data URI for base64 payloads, the hosted URL otherwise,
    or None when neither is present.
    """
    if not isinstance(payload, dict):
        return None
    data = payload.get("data")
    if not isinstance(data, list) or not data or not isinstance(data[0], dict):
        return None

    b64 = data[0].get("b64_json")
    if b64:
        return f"data:image/png;base64,{b64}"
    return data[0].get("url") or None
