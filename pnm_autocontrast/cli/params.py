"""Strict numeric command-line parameters."""

import re

import click

from pnm_autocontrast.errors import InvalidArgument

_INT_PREFIX = re.compile(r'\s*[+-]?\d+')
_FLOAT_PREFIX = re.compile(r'\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def parse_number(text: str, kind: type = float):
    """
    Parse a whole string as an int or float.

    Leading whitespace is allowed; anything after the number is not.

    Raises:
        InvalidArgument: "Invalid number" if no number starts the string,
            "Trailing characters after number" if something follows it
    """
    pattern = _INT_PREFIX if kind is int else _FLOAT_PREFIX
    match = pattern.match(text)
    if match is None:
        raise InvalidArgument(f"Invalid number: {text}")
    if match.end() != len(text):
        raise InvalidArgument(f"Trailing characters after number: {text}")
    return kind(match.group().strip())


class StrictNumber(click.ParamType):
    """Click parameter type backed by parse_number."""

    def __init__(self, kind: type = float):
        self.kind = kind
        self.name = kind.__name__

    def convert(self, value, param, ctx):
        if isinstance(value, self.kind) and not isinstance(value, bool):
            return value
        try:
            return parse_number(str(value), self.kind)
        except InvalidArgument as e:
            self.fail(str(e), param, ctx)


STRICT_INT = StrictNumber(int)
STRICT_FLOAT = StrictNumber(float)
