"""Stripe service — checkout creation and webhook handling.

Responsible for:
- Creating a one-off Stripe Checkout Session with a fresh token in metadata
- Verifying webhook signatures
- Granting the token when checkout.session.completed arrives

Webhook replays are NOT deduplicated: a replayed completed event puts the
token back into the store, even after it was consumed.
"""

import logging

import stripe
from flask import current_app

from logofive.services.token_service import make_token, token_preview
from logofive.services.token_store import get_token_store

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Checkout Session
# ──────────────────────────────────────────────

def create_checkout_session():
    """Create a Stripe Checkout Session for one logo generation.

    Mints a token and embeds it in the session metadata. The token only
    becomes valid once the webhook confirms the payment.

    Returns (session_url, token).
    Raises stripe.StripeError on API failures.
    """
    stripe.api_key = current_app.config["STRIPE_SECRET_KEY"]
    base_url = current_app.config["BASE_URL"]

    token = make_token()

    session = stripe.checkout.Session.create(
        mode="payment",
        line_items=[
            {
                "price_data": {
                    "currency": current_app.config["PRICE_CURRENCY"],
                    "unit_amount": current_app.config["PRICE_UNIT_AMOUNT"],
                    "product_data": {
                        "name": current_app.config["PRODUCT_NAME"],
                        "description": current_app.config["PRODUCT_DESCRIPTION"],
                    },
                },
                "quantity": 1,
            }
        ],
        success_url=f"{base_url}/sucesso?session_id={{CHECKOUT_SESSION_ID}}",
        cancel_url=f"{base_url}/cancelado",
        metadata={"token": token},
    )

    logger.info(f"Checkout session created for token {token_preview(token)}")
    return session.url, token


def get_session_token(session_id):
    """Return the token stored in a Checkout Session's metadata, or None.

    Read-only: finding the token here does not make it valid. Only the
    webhook puts tokens in the store.
    Raises stripe.StripeError on API failures.
    """
    stripe.api_key = current_app.config["STRIPE_SECRET_KEY"]
    session = stripe.checkout.Session.retrieve(session_id)
    return _lookup(_lookup(session, "metadata"), "token")


# ──────────────────────────────────────────────
# Webhook Handling
# ──────────────────────────────────────────────

def verify_webhook_signature(payload, sig_header):
    """Verify Stripe webhook signature and construct the event.

    Returns the verified Stripe event object.
    Raises stripe.SignatureVerificationError on invalid signature.
    """
    webhook_secret = current_app.config["STRIPE_WEBHOOK_SECRET"]
    return stripe.Webhook.construct_event(payload, sig_header, webhook_secret)


def handle_webhook_event(event):
    """Process a verified Stripe webhook event.

    Returns a short status string. Unknown event types are accepted
    and ignored.
    """
    event_type = event["type"]

    handlers = {
        "checkout.session.completed": _handle_checkout_completed,
    }

    handler = handlers.get(event_type)
    if not handler:
        logger.debug(f"Ignoring webhook event {event_type}")
        return "ignored"

    return handler(event)


def _lookup(obj, key):
    """obj[key] or None; works for dicts and StripeObjects alike."""
    try:
        return obj[key]
    except (KeyError, TypeError):
        return None


def _handle_checkout_completed(event):
    """Move the token from the session metadata into the store."""
    session = event["data"]["object"]
    token = _lookup(_lookup(session, "metadata"), "token")

    if not token:
        logger.warning("checkout.session.completed without metadata.token")
        return "ignored"

    get_token_store().insert(token)
    logger.info(f"Payment confirmed, token {token_preview(token)} granted")
    return "token_granted"
