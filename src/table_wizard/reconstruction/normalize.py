"""Token text normalization.

Decoders hand over text with a mix of exotic spaces, stray control
characters and placeholder boxes for glyphs that had no Unicode mapping.
"""

import re

from table_wizard.schema import Token

# No-break, ogham, en/em/thin/hair, narrow no-break, math, ideographic and zero-width no-break spaces
UNICODE_SPACES_RE = re.compile(r"[\u00a0\u1680\u2000-\u200a\u202f\u205f\u3000\ufeff]")

# C0 and C1 control characters, plus DEL
CONTROL_CHARS_RE = re.compile(r"[\u0000-\u001f\u007f-\u009f]")

# Box drawn for unrenderable glyphs
PLACEHOLDER_GLYPH = "\u25a1"

WHITESPACE_RUN_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Return *text* with spaces unified, control characters dropped, and whitespace collapsed."""
    cleaned = UNICODE_SPACES_RE.sub(" ", text)
    cleaned = CONTROL_CHARS_RE.sub("", cleaned)
    cleaned = cleaned.replace(PLACEHOLDER_GLYPH, " ")
    cleaned = WHITESPACE_RUN_RE.sub(" ", cleaned)
    return cleaned.strip()


def normalize_token(token: Token) -> Token:
    """Return a copy of *token* with normalized text; the input is left untouched."""
    cleaned = normalize_text(token.text)
    if cleaned == token.text:
        return token
    return token.model_copy(update={"text": cleaned})
