"""Unit tests for the language instruction policy."""

import pytest

from voxroute.intent.language import AUTO_INSTRUCTION, resolve_language_instruction

POLISH_META = {"nupi.lang.english": "Polish", "nupi.lang.iso1": "pl"}


def test_client_mode_with_metadata():
    assert resolve_language_instruction("client", POLISH_META) == "Always respond in Polish."


@pytest.mark.parametrize("metadata", [None, {}, {"nupi.lang.english": ""}, {"nupi.lang.english": "   "}])
def test_client_mode_without_usable_metadata(metadata):
    assert resolve_language_instruction("client", metadata) == ""


def test_client_mode_trims_name():
    assert resolve_language_instruction("client", {"nupi.lang.english": "  Polish  "}) == "Always respond in Polish."


@pytest.mark.parametrize("metadata", [POLISH_META, None])
def test_auto_mode_always_detects(metadata):
    assert resolve_language_instruction("auto", metadata) == AUTO_INSTRUCTION
    assert AUTO_INSTRUCTION == "Detect the language of the user's message and respond in the same language."


def test_known_language_code():
    assert resolve_language_instruction("de", None) == "Always respond in German regardless of the input language."


def test_language_code_ignores_metadata():
    assert resolve_language_instruction("ja", POLISH_META) == (
        "Always respond in Japanese regardless of the input language."
    )


def test_regional_code_uses_base_language():
    assert resolve_language_instruction("pt-br", {}) == (
        "Always respond in Portuguese regardless of the input language."
    )


def test_unknown_language_code_is_uppercased():
    assert resolve_language_instruction("xx", None) == "Always respond in XX regardless of the input language."


def test_operator_value_passes_through():
    assert resolve_language_instruction("polish", {}) == (
        "Always respond in polish regardless of the input language."
    )
    assert resolve_language_instruction("formal english", POLISH_META) == (
        "Always respond in formal english regardless of the input language."
    )
