# mod_core/widget_parser.py
import logging
from enum import Enum
from typing import Dict, List, Any, NamedTuple, Optional

logger = logging.getLogger(__name__)

CHILD_PROPERTY = "child"
BUILDER_PROPERTY = "builder"
# Appended to a child value so the nested call ends on a terminator
CHILD_TERMINATOR = ","
VALUE_TERMINATORS = (",", ")")


class Property(NamedTuple):
    name: str
    value: str


class ScanPhase(Enum):
    NAME = "name"
    PROPERTY_NAME = "property_name"
    PROPERTY_VALUE = "property_value"


class Widget:
    """
    One parsed widget invocation, e.g. ``Padding(padding: x, child: Text(y))``.

    ``child`` and ``builder`` are pulled out of ``properties``. ``key`` is
    reserved and never assigned by the parser.
    """

    def __init__(self, name: str, properties: List[Property],
                 key: Optional[Property] = None,
                 child: Optional[Property] = None,
                 builder: Optional[Property] = None):
        self.name = name
        self.properties = properties
        self.key = key
        self.child = child
        self.builder = builder

    def get_modifier(self) -> str:
        """Renders this widget as one element of a modifier list."""
        pairs = ",".join(f"{name}: {value}," for name, value in self.properties)
        return f"{self.name}Modifier( {pairs} )"

    def get_child(self) -> Optional[str]:
        return self.child.value if self.child is not None else None

    def has_child(self) -> bool:
        return self.child is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "properties": [{"name": p.name, "value": p.value} for p in self.properties],
            "child": self.get_child(),
            "builder": self.builder.value if self.builder is not None else None,
            "key": self.key.value if self.key is not None else None,
        }

    def __repr__(self) -> str:
        return f"<Widget(name='{self.name}', properties={len(self.properties)}, has_child={self.has_child()})>"


def get_bracket_state(text: str) -> int:
    """Net paren depth of ``text``: +1 per '(' and -1 per ')'."""
    total_bracket = 0
    for char in text:
        if char == "(":
            total_bracket += 1
        elif char == ")":
            total_bracket -= 1
    return total_bracket


class _WidgetScanner:
    """Single-pass scanner; ``feed`` is the transition function over ScanPhase."""

    def __init__(self):
        self.phase = ScanPhase.NAME
        self.name = ""
        self.term_text = ""
        self.property_name = ""
        self.properties: List[Property] = []
        self.child: Optional[Property] = None
        self.builder: Optional[Property] = None

    def feed(self, char: str):
        if char == "\n":
            return
        if self.phase is ScanPhase.NAME:
            self._scan_name(char)
        elif self.phase is ScanPhase.PROPERTY_NAME:
            self._scan_property_name(char)
        else:
            self._scan_property_value(char)

    def _scan_name(self, char: str):
        if char != "(":
            self.term_text += char
            return
        self.name = self.term_text
        self.term_text = ""
        self.phase = ScanPhase.PROPERTY_NAME

    def _scan_property_name(self, char: str):
        # Stray separators between arguments are skipped
        if char in VALUE_TERMINATORS:
            return
        if char != ":":
            self.term_text += char
            return
        property_name = self.term_text.strip()
        self.term_text = ""
        if property_name:
            self.property_name = property_name
            self.phase = ScanPhase.PROPERTY_VALUE

    def _scan_property_value(self, char: str):
        if char in VALUE_TERMINATORS:
            bracket_state = get_bracket_state(self.term_text)
            if bracket_state == 0:
                self._classify(Property(self.property_name, self.term_text.strip()))
                self._reset_property()
                return
            if bracket_state < 0:
                # The call's own closing paren: the pending property is dropped
                logger.debug("Dropping unterminated property '%s'", self.property_name)
                self._reset_property()
                return
        self.term_text += char

    def _classify(self, prop: Property):
        if prop.name == CHILD_PROPERTY:
            self.child = Property(prop.name, prop.value + CHILD_TERMINATOR)
        elif prop.name == BUILDER_PROPERTY:
            self.builder = prop
        else:
            self.properties.append(prop)

    def _reset_property(self):
        self.property_name = ""
        self.term_text = ""
        self.phase = ScanPhase.PROPERTY_NAME

    def build(self) -> Widget:
        return Widget(self.name, self.properties, key=None, child=self.child, builder=self.builder)


def parse_widget(raw: str) -> Widget:
    """
    Parses one call expression into a Widget.

    Never raises: malformed text yields a best-effort record. A value still
    open when the text ends is discarded along with its property name.
    """
    scanner = _WidgetScanner()
    for char in raw.strip():
        scanner.feed(char)
    widget = scanner.build()
    logger.debug("Parsed %r", widget)
    return widget
