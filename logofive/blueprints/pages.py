"""Pages blueprint — public HTML pages and checkout start.

Routes:
- GET  /           — landing page with the pay button
- POST /pagar      — create Checkout Session, return its URL as JSON
- GET  /sucesso    — post-checkout page, links to /criar once paid
- GET  /cancelado  — user cancelled checkout
- GET  /criar      — creation page, only with a paid token
- GET  /health     — liveness probe
"""

import logging

from flask import Blueprint, abort, jsonify, render_template, request, url_for

from logofive.services.stripe_service import create_checkout_session, get_session_token
from logofive.services.token_store import get_token_store

logger = logging.getLogger(__name__)

pages_bp = Blueprint("pages", __name__)


@pages_bp.route("/")
def home():
    return render_template("home.html")


# ──────────────────────────────────────────────
# POST /pagar
# ──────────────────────────────────────────────

@pages_bp.route("/pagar", methods=["POST"])
def pay():
    """Create a Stripe Checkout Session and hand its URL to the browser.

    The landing page calls this with fetch() and redirects itself.
    """
    try:
        checkout_url, _token = create_checkout_session()
    except Exception as e:
        logger.error(f"Checkout error: {e}", exc_info=True)
        return jsonify({"error": "Erro ao criar pagamento", "details": str(e)}), 500

    return jsonify({"url": checkout_url})


@pages_bp.route("/sucesso")
def success():
    """Post-checkout landing page.

    Stripe appends ?session_id=... to the success URL. If the webhook has
    already granted that session's token, link straight to /criar;
    otherwise the page asks the buyer to reload in a moment.
    """
    create_url = None
    session_id = request.args.get("session_id")

    if session_id:
        try:
            token = get_session_token(session_id)
            if token and get_token_store().contains(token):
                create_url = url_for("pages.create_page", token=token)
        except Exception as e:
            logger.warning(f"Failed to look up checkout session {session_id}: {e}")

    return render_template("sucesso.html", create_url=create_url)


@pages_bp.route("/cancelado")
def cancelled():
    return render_template("cancelado.html")


# ──────────────────────────────────────────────
# GET /criar?token=...
# ──────────────────────────────────────────────

@pages_bp.route("/criar")
def create_page():
    """Creation page. 403 unless the token is paid and unused.

    Viewing the page does not consume the token; only /api/generate does.
    """
    token = request.args.get("token")
    if not token or not get_token_store().contains(token):
        abort(403)

    return render_template("criar.html", token=token)


@pages_bp.route("/health")
def health():
    return jsonify({"status": "ok"})
