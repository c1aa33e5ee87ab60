from .modifier_chain import ModifierChain, parse_chain, chain_to_modifier, convert, validate_widget_text
from .widget_parser import Property, Widget, parse_widget, get_bracket_state
