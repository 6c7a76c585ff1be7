"""Display colors for category color tokens."""

from typing import Optional

from fintrack.models.category import ColorToken

FALLBACK_TOKEN = "gray"

PALETTE = {
    ColorToken.blue.value: (59, 130, 246),
    ColorToken.green.value: (16, 185, 129),
    ColorToken.orange.value: (245, 158, 11),
    ColorToken.indigo.value: (99, 102, 241),
    ColorToken.pink.value: (236, 72, 153),
    ColorToken.purple.value: (139, 92, 246),
    ColorToken.red.value: (239, 68, 68),
    ColorToken.yellow.value: (245, 158, 11),
    FALLBACK_TOKEN: (107, 114, 128),
}


def normalize_token(token: Optional[str]) -> str:
    """Known palette token, or gray for anything unrecognized."""
    if token and token in PALETTE:
        return token
    return FALLBACK_TOKEN


def resolve_color(token: Optional[str], alpha: float = 0.7) -> str:
    """RGBA string for a color token."""
    r, g, b = PALETTE[normalize_token(token)]
    return f"rgba({r}, {g}, {b}, {alpha:g})"
