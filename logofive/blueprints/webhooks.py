"""Webhooks blueprint — /webhook

Receives Stripe webhook events.
Raw body is required for signature verification.
"""

import logging

from flask import Blueprint, request, jsonify

from logofive.services.stripe_service import verify_webhook_signature, handle_webhook_event

logger = logging.getLogger(__name__)

webhooks_bp = Blueprint("webhooks", __name__)


@webhooks_bp.route("/webhook", methods=["POST"])
def stripe_webhook():
    """Receive and process Stripe webhook events.

    1. Get raw body (required for signature verification)
    2. Verify signature with STRIPE_WEBHOOK_SECRET
    3. Pass to handle_webhook_event (grants the token on a completed checkout)
    4. Return 200 to acknowledge receipt

    Nothing touches the token store before the signature checks out.
    """
    payload = request.get_data(as_text=True)
    sig_header = request.headers.get("Stripe-Signature")

    if not sig_header:
        logger.warning("Webhook received without Stripe-Signature header")
        return jsonify({"error": "Webhook Error: missing signature"}), 400

    # --- Verify signature ---
    try:
        event = verify_webhook_signature(payload, sig_header)
    except Exception as e:
        logger.warning(f"Webhook signature verification failed: {e}")
        return jsonify({"error": f"Webhook Error: {e}"}), 400

    status = handle_webhook_event(event)
    logger.info(f"Webhook {event['type']}: {status}")

    return jsonify({"received": True})
