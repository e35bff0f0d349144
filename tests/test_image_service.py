"""Tests for prompt preparation and image extraction."""

from logofive.services.image_service import extract_image, render_prompt, sanitize_prompt


class TestSanitizePrompt:

    def test_replaces_minecraft(self):
        assert sanitize_prompt("minecraft castle") == "pixel fantasy castle"

    def test_case_insensitive(self):
        assert sanitize_prompt("MineCraft and SKYWARS") == "pixel fantasy and pixel fantasy"

    def test_trims(self):
        assert sanitize_prompt("  dragon  ") == "dragon"

    def test_strips_html(self):
        assert sanitize_prompt("<b>dragon</b> & sword") == "dragon & sword"

    def test_plain_text_untouched(self):
        assert sanitize_prompt("dragão de fogo") == "dragão de fogo"


class TestRenderPrompt:

    def test_embeds_sanitized_text(self):
        prompt = render_prompt(sanitize_prompt("minecraft castle"))
        assert "Elementos: pixel fantasy castle." in prompt
        assert "minecraft" not in prompt.lower()

    def test_template_constraints(self):
        prompt = render_prompt("dragon")
        assert prompt.startswith("Crie um ícone de app (logo)")
        assert "Sem texto, sem letras, sem marca d'água." in prompt
        assert prompt.endswith("Paleta: azul meia-noite, cinza aço, laranja fogo.")


class TestExtractImage:

    def test_b64_becomes_data_uri(self):
        assert extract_image({"data": [{"b64_json": "QUJD"}]}) == "data:image/png;base64,QUJD"

    def test_b64_preferred_over_url(self):
        payload = {"data": [{"b64_json": "QUJD", "url": "https://x/y.png"}]}
        assert extract_image(payload).startswith("data:image/png;base64,")

    def test_url(self):
        assert extract_image({"data": [{"url": "https://x/y.png"}]}) == "https://x/y.png"

    def test_unexpected_shapes(self):
        assert extract_image(None) is None
        assert extract_image({}) is None
        assert extract_image({"data": []}) is None
        assert extract_image({"data": [{}]}) is None
        assert extract_image({"data": "oops"}) is None
