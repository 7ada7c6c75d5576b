import pytest

from healthbot.utils.language_utils import SUPPORTED_LANGUAGES, TEXTS, get_text, normalize_language


@pytest.mark.parametrize("key", sorted(TEXTS))
def test_every_string_is_translated(key):
    assert set(TEXTS[key]) == set(SUPPORTED_LANGUAGES)


def test_get_text_formats_and_falls_back():
    assert "108" in get_text("emergency", "hi", number="108")
    assert get_text("welcome", "fr") == get_text("welcome", "en")
    assert get_text("no_such_key", "en") == "no_such_key"


def test_normalize_language():
    assert normalize_language("TE") == "te"
    assert normalize_language(None) == "en"
    assert normalize_language("de") == "en"
