import os
import logging

import click
from flask import Flask, render_template

from logofive.config import config_by_name
from logofive.services.token_service import init_token_generator, make_token
from logofive.services.token_store import get_token_store, init_token_store


def create_app(config_name=None):
    """Application factory."""

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # --- Logging ---
    if not app.debug:
        logging.basicConfig(level=logging.INFO)

    # --- Report missing secrets, keep booting ---
    for name in config_by_name[config_name].missing():
        app.logger.error(f"Missing {name} in environment variables.")

    # --- Token store + generator ---
    init_token_store(app)
    init_token_generator(app)

    # --- Register blueprints ---
    from logofive.blueprints.pages import pages_bp
    from logofive.blueprints.generate import generate_bp
    from logofive.blueprints.webhooks import webhooks_bp

    app.register_blueprint(pages_bp)
    app.register_blueprint(generate_bp)
    app.register_blueprint(webhooks_bp)

    # --- Error handlers ---
    @app.errorhandler(403)
    def forbidden(e):
        return render_template("errors/403.html"), 403

    @app.errorhandler(404)
    def not_found(e):
        return render_template("errors/404.html"), 404

    @app.errorhandler(500)
    def server_error(e):
        return render_template("errors/500.html"), 500

    # --- CLI commands ---
    register_cli(app)

    # --- Security headers ---
    @app.after_request
    def add_security_headers(response):
        """Add security headers to every response."""
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Generated images come back as data: URIs or hosted https URLs
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "script-src 'self' 'unsafe-inline'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data: https:; "
            "connect-src 'self'; "
            "base-uri 'self'; "
            "form-action 'self' https://checkout.stripe.com; "
            "frame-ancestors 'none';"
        )
        if not app.debug:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response

    base_url = app.config["BASE_URL"]
    app.logger.info(f"Running at {base_url}")
    app.logger.info(f"Webhook at {base_url}/webhook")

    return app


def register_cli(app):
    """Register custom CLI commands with the Flask app."""

    @app.cli.command("grant-token")
    @click.argument("token", required=False)
    def grant_token(token):
        """Mark a token as paid by hand (e.g. the webhook never arrived).

        Usage:
            flask grant-token
            flask grant-token AbC123...
        """
        token = token or make_token()
        get_token_store().insert(token)

        base_url = app.config["BASE_URL"]
        click.echo(f"Token granted: {token}")
        click.echo(f"  Link: {base_url}/criar?token={token}")

    @app.cli.command("revoke-token")
    @click.argument("token")
    def revoke_token(token):
        """Remove a token from the store."""
        store = get_token_store()
        if not store.contains(token):
            click.echo(f"Token not found: {token}")
            return
        store.remove(token)
        click.echo(f"Token revoked: {token}")

    @app.cli.command("check-config")
    def check_config():
        """Show which required settings are missing."""
        missing = [name for name in app.config["REQUIRED"] if not app.config.get(name)]

        click.echo(f"Base URL:    {app.config['BASE_URL']}")
        click.echo(f"Port:        {app.config['PORT']}")
        click.echo(f"Token store: {type(get_token_store()).__name__}")
        click.echo("")
        if missing:
            click.echo(f"MISSING: {', '.join(missing)}")
        else:
            click.echo("All required settings present.")
