"""Generate blueprint — POST /api/generate

Token-gated proxy to the image API. One paid token buys one successful
upstream call.

Known gap: the membership check and the removal are two separate store
operations, so two concurrent requests with the same token can both get
through before either removes it.
"""

import logging

from flask import Blueprint, jsonify, request

from logofive.services.image_service import (
    extract_image,
    render_prompt,
    request_image,
    sanitize_prompt,
)
from logofive.services.token_service import token_preview
from logofive.services.token_store import get_token_store

logger = logging.getLogger(__name__)

generate_bp = Blueprint("generate", __name__, url_prefix="/api")


def _request_fields():
    """Read token/prompt from a JSON body, falling back to form fields."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    return data.get("token"), data.get("prompt")


@generate_bp.route("/generate", methods=["POST"])
def generate():
    """Validate the token, call the image API, consume the token.

    - 403 if the token is missing or not paid/already used
    - 400 if the prompt is missing, not a string, or empty once sanitized
    - 500 with the upstream text if the image API refuses
    - token is removed as soon as the image API answers 2xx, even if the
      body turns out to have no usable image
    """
    try:
        token, prompt = _request_fields()
        store = get_token_store()

        if not token or not isinstance(token, str) or not store.contains(token):
            return jsonify({"error": "Pagamento não confirmado."}), 403
        if not prompt or not isinstance(prompt, str):
            return jsonify({"error": "Prompt inválido."}), 400

        # A prompt made only of markup or spaces is empty once cleaned
        elements = sanitize_prompt(prompt)
        if not elements:
            return jsonify({"error": "Prompt inválido."}), 400

        resp = request_image(render_prompt(elements))

        if not 200 <= resp.status_code < 300:
            logger.warning(
                f"Image API returned {resp.status_code} for token {token_preview(token)}"
            )
            return jsonify({"error": "Falha ao gerar imagem.", "details": resp.text}), 500

        # One generation per payment
        store.remove(token)
        logger.info(f"Token {token_preview(token)} consumed")

        try:
            payload = resp.json()
        except ValueError:
            payload = None

        image = extract_image(payload)
        if image:
            return jsonify({"image": image})

        logger.error("Image API response had neither b64_json nor url")
        return jsonify({"error": "Resposta inesperada da API."}), 500

    except Exception as e:
        logger.error(f"Generate error: {e}", exc_info=True)
        return jsonify({"error": "Erro interno.", "details": str(e)}), 500
