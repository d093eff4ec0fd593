from shadowshim.parser.errors import ParseError
from shadowshim.parser.transformer import parse_selector, parse_selector_list

__all__ = ["ParseError", "parse_selector", "parse_selector_list"]
