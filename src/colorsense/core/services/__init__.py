from colorsense.core.services.color_resolver import ColorResolver
from colorsense.core.services.input_parser import parse
from colorsense.core.services.query_validator import QueryValidator
from colorsense.core.services.request_handler import handle_request

__all__ = [
    "ColorResolver",
    "QueryValidator",
    "handle_request",
    "parse",
]
