"""
Tests for pngminify.services.messages module.
"""

import pytest

from pngminify.services.messages import MESSAGES, available_locales, get_message


@pytest.mark.unit
class TestMessages:
    """Tests for the localized message table."""

    def test_available_locales(self):
        assert available_locales() == ["en", "ja"]

    def test_every_locale_has_every_english_key(self):
        for locale, table in MESSAGES.items():
            assert set(table) == set(MESSAGES["en"]), locale

    def test_lookup(self):
        assert get_message("tool_not_found") == "Compatible pngquant not found"
        assert get_message("tool_not_found", "ja") == "互換性のある pngquant が見つかりません"

    def test_placeholders(self):
        assert get_message("found_files", "en", count=3) == "Found 3 PNG file(s) to process..."

    def test_unknown_locale_falls_back_to_english(self):
        assert get_message("running", "fr") == "Running..."

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            get_message("does_not_exist")
