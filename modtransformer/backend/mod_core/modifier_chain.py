# mod_core/modifier_chain.py
import logging
from typing import Dict, List, Any, Optional

from .config import MAX_CHAIN_DEPTH, DEFAULT_TAIL_CHILD, validate_tail_child
from .snippet import escape_snippet
from .widget_parser import Widget, parse_widget

logger = logging.getLogger(__name__)


class ModifierChain:
    """
    Widgets linked through their ``child`` property, outermost first.

    The terminal call (the first one without a child) is not part of
    ``widgets``; its source text is kept in ``leaf``. When flattening stops
    at the depth bound, ``truncated`` is set and ``leaf`` is ``None``.
    """

    def __init__(self, widgets: List[Widget], leaf: Optional[str] = None, truncated: bool = False):
        self.widgets = widgets
        self.leaf = leaf
        self.truncated = truncated

    def __len__(self) -> int:
        return len(self.widgets)

    def __iter__(self):
        return iter(self.widgets)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "widgets": [widget.to_dict() for widget in self.widgets],
            "leaf": self.leaf,
            "truncated": self.truncated,
        }

    def __repr__(self) -> str:
        return f"<ModifierChain(widgets={len(self.widgets)}, truncated={self.truncated})>"


def parse_chain(raw: str, max_depth: int = MAX_CHAIN_DEPTH) -> ModifierChain:
    """Parses ``raw`` and each successive child text until a call has no child."""
    widgets: List[Widget] = []
    source = raw

    for _ in range(max_depth):
        widget = parse_widget(source)
        if not widget.has_child():
            return ModifierChain(widgets, leaf=source.strip())
        widgets.append(widget)
        source = widget.get_child()

    logger.warning(f"Stopped flattening after {max_depth} nested calls; chain is truncated")
    return ModifierChain(widgets, leaf=None, truncated=True)


def chain_to_modifier(chain: ModifierChain, tail_child: str = DEFAULT_TAIL_CHILD) -> str:
    """
    Renders the chain as a single ``Modifier(...)`` call.

    ``tail_child="last"`` takes the trailing child from the last widget in
    the chain, ``"leaf"`` takes the terminal call's source text. Both give
    the same text unless the chain was truncated or is empty.
    """
    validate_tail_child(tail_child)
    modifiers = ",".join(widget.get_modifier() for widget in chain.widgets)

    if tail_child == "leaf":
        child = chain.leaf
    else:
        child = chain.widgets[-1].get_child() if chain.widgets else None

    if child is None:
        return f"Modifier( modifiers: [{modifiers}], )"
    return f"Modifier( modifiers: [{modifiers}], child: {child} )"


def convert(raw: str, tail_child: str = DEFAULT_TAIL_CHILD, escape: bool = False,
            max_depth: int = MAX_CHAIN_DEPTH) -> str:
    """Converts a nested widget expression into its modifier form."""
    if escape:
        raw = escape_snippet(raw)
    chain = parse_chain(raw, max_depth=max_depth)
    logger.debug(f"Flattened {len(chain)} widgets")
    return chain_to_modifier(chain, tail_child=tail_child)


def validate_widget_text(raw: str) -> bool:
    """Checks whether the text parses to a named call expression."""
    try:
        return bool(parse_widget(raw).name.strip())
    except Exception:
        return False
