"""Language policy appended to the system prompt.

Modes:
- ``client``: use ``nupi.lang.english`` from request metadata.
- ``auto``: ask the model to mirror the user's language.
- a language code (``de``, ``pt-br``): respond in that language.
- anything else: an operator-defined value passed through as-is.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

CLIENT_MODE = "client"
AUTO_MODE = "auto"
METADATA_LANGUAGE_KEY = "nupi.lang.english"

AUTO_INSTRUCTION = "Detect the language of the user's message and respond in the same language."

_LANGUAGE_CODE_RE = re.compile(r"^[a-z]{2,3}(?:[-_][a-z0-9]{2,4})?$", re.IGNORECASE)

LANGUAGE_NAMES: dict[str, str] = {
    "ar": "Arabic",
    "cs": "Czech",
    "da": "Danish",
    "de": "German",
    "el": "Greek",
    "en": "English",
    "es": "Spanish",
    "fi": "Finnish",
    "fr": "French",
    "he": "Hebrew",
    "hi": "Hindi",
    "hu": "Hungarian",
    "it": "Italian",
    "ja": "Japanese",
    "ko": "Korean",
    "nl": "Dutch",
    "no": "Norwegian",
    "pl": "Polish",
    "pt": "Portuguese",
    "ro": "Romanian",
    "ru": "Russian",
    "sk": "Slovak",
    "sv": "Swedish",
    "tr": "Turkish",
    "uk": "Ukrainian",
    "vi": "Vietnamese",
    "zh": "Chinese",
}


def language_name(value: str) -> str:
    """Resolve a configured language value to the name used in the prompt."""
    if not _LANGUAGE_CODE_RE.match(value):
        return value
    base = re.split(r"[-_]", value.lower(), maxsplit=1)[0]
    return LANGUAGE_NAMES.get(base, value.upper())


def resolve_language_instruction(
    config_lang: str,
    metadata: Mapping[str, str] | None,
) -> str:
    """Return the instruction to append, or ``""`` when none applies."""
    if config_lang == CLIENT_MODE:
        english_name = ((metadata or {}).get(METADATA_LANGUAGE_KEY) or "").strip()
        if english_name:
            return f"Always respond in {english_name}."
        # No metadata: the model answers without a language constraint.
        return ""

    if config_lang == AUTO_MODE:
        return AUTO_INSTRUCTION

    if not config_lang.strip():
        return ""

    return f"Always respond in {language_name(config_lang.strip())} regardless of the input language."
