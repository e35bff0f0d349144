"""Local development entry point.

Usage:
    python run.py

Reads .env, builds the app and listens on PORT (default 3000).
"""

from dotenv import load_dotenv

load_dotenv()  # Load .env before anything else

from logofive import create_app  # noqa: E402

app = create_app()

if __name__ == "__main__":
    app.run(debug=app.debug, host="0.0.0.0", port=app.config["PORT"])
