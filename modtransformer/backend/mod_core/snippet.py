# mod_core/snippet.py
PLACEHOLDER_SYMBOL = "$"


def escape_snippet(text: str) -> str:
    """Escapes every snippet placeholder symbol so editors insert it literally."""
    return text.replace(PLACEHOLDER_SYMBOL, "\\" + PLACEHOLDER_SYMBOL)
