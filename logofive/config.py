import os


class Config:
    """Base configuration. Shared across all environments."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-logofive")

    # --- Server ---
    PORT = int(os.environ.get("PORT", 3000))
    # On Render, BASE_URL looks like https://yoursite.onrender.com
    BASE_URL = os.environ.get("BASE_URL", f"http://localhost:{PORT}")

    # --- Stripe ---
    STRIPE_SECRET_KEY = os.environ.get("STRIPE_SECRET_KEY")
    STRIPE_WEBHOOK_SECRET = os.environ.get("STRIPE_WEBHOOK_SECRET")

    # --- Fixed price (one logo generation) ---
    PRICE_CURRENCY = os.environ.get("PRICE_CURRENCY", "brl")
    PRICE_UNIT_AMOUNT = int(os.environ.get("PRICE_UNIT_AMOUNT", 500))  # R$ 5,00
    PRODUCT_NAME = "Geração de Logotipo (1x)"
    PRODUCT_DESCRIPTION = "Libera 1 geração de logo no site"

    # --- OpenAI Images ---
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
    OPENAI_IMAGES_URL = os.environ.get(
        "OPENAI_IMAGES_URL", "https://api.openai.com/v1/images/generations"
    )
    OPENAI_IMAGE_MODEL = os.environ.get("OPENAI_IMAGE_MODEL", "gpt-image-1")
    OPENAI_IMAGE_SIZE = os.environ.get("OPENAI_IMAGE_SIZE", "1024x1024")
    OPENAI_TIMEOUT = float(os.environ.get("OPENAI_TIMEOUT", 120))

    # --- Token store ---
    # Empty means process memory; a redis:// URL shares tokens across instances.
    TOKEN_STORE_URL = os.environ.get("TOKEN_STORE_URL", "")

    # --- JSON bodies ---
    MAX_CONTENT_LENGTH = 2 * 1024 * 1024

    REQUIRED = [
        "STRIPE_SECRET_KEY",
        "STRIPE_WEBHOOK_SECRET",
        "OPENAI_API_KEY",
    ]

    @classmethod
    def missing(cls):
        """Return the names of required settings that are not set."""
        return [name for name in cls.REQUIRED if not getattr(cls, name, None)]


class DevConfig(Config):
    """Local development."""

    DEBUG = True


class TestConfig(Config):
    """Testing — memory token store, fake keys."""

    TESTING = True
    DEBUG = True
    SECRET_KEY = "test-secret-key-not-for-production"
    STRIPE_SECRET_KEY = "sk_test_fake"
    STRIPE_WEBHOOK_SECRET = "whsec_test_fake"
    OPENAI_API_KEY = "sk-openai-test-fake"
    BASE_URL = "http://localhost:3000"
    PRICE_CURRENCY = "brl"
    PRICE_UNIT_AMOUNT = 500
    OPENAI_IMAGES_URL = "https://api.openai.com/v1/images/generations"
    OPENAI_IMAGE_MODEL = "gpt-image-1"
    OPENAI_IMAGE_SIZE = "1024x1024"
    OPENAI_TIMEOUT = 5
    TOKEN_STORE_URL = ""


class ProdConfig(Config):
    """Production on Render."""

    DEBUG = False


config_by_name = {
    "development": DevConfig,
    "production": ProdConfig,
    "testing": TestConfig,
}
