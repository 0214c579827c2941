"""Scanner primitives for raga. Every primitive takes the remaining input and either returns a tuple of (remainder,
matched text) or raises a ParseError. Strings are immutable, so a failed primitive never consumes input: the caller
can simply retry a different rule on the same slice.

The `pure` directory contains only text scanning- the grammar built on top of it lives in `lang`.
"""

from raga.lang.error import ParseError


def take_while(predicate, s):
    """Splits s at the end of the longest prefix whose characters all satisfy predicate. Always succeeds."""
    end = len(s)
    for idx, char in enumerate(s):
        if not predicate(char):
            end = idx
            break

    return s[end:], s[:end]


def take_while_nonempty(predicate, s, error_msg):
    """take_while, but raises a ParseError with error_msg if nothing matched."""
    remainder, matched = take_while(predicate, s)
    if not matched:
        raise ParseError(error_msg)
    return remainder, matched


def is_ascii_digit(char):
    return "0" <= char <= "9"


def is_ascii_alpha(char):
    return "a" <= char <= "z" or "A" <= char <= "Z"


def is_ascii_alnum(char):
    return is_ascii_alpha(char) or is_ascii_digit(char)


def extract_digits(s):
    return take_while_nonempty(is_ascii_digit, s, "expected digits")


def extract_ident(s):
    """Identifiers start with an ASCII letter and continue with ASCII letters or digits."""
    if not s or not is_ascii_alpha(s[0]):
        raise ParseError("expected identifier")

    remainder, rest = take_while(is_ascii_alnum, s[1:])
    return remainder, s[0] + rest


def extract_whitespace(s):
    """Mandatory whitespace: one or more space characters."""
    return take_while_nonempty(lambda char: char == " ", s, "expected a space")


def skip_whitespace(s):
    """Optional whitespace: any (unicode) whitespace, including newlines."""
    return take_while(str.isspace, s)


def tag(literal, s):
    """Returns s without literal if s starts with literal."""
    if s.startswith(literal):
        return s[len(literal):]
    raise ParseError("expected {}", literal)


def alternatives(parsers, s):
    """Tries each parser on the same s, in order, and returns the first success. If none succeed, the error raised by
    the last parser is raised.
    """
    error = ParseError("expected one of no alternatives", internal=True)
    for parser in parsers:
        try:
            return parser(s)
        except ParseError as exc:
            error = exc
    raise error


def sequence(parser, s):
    """Applies parser to s until it fails, skipping whitespace after each success. Returns remainder and list of
    parsed items. Never fails: a first attempt that doesn't parse just gives an empty list.
    """
    items = []
    while True:
        try:
            s, item = parser(s)
        except ParseError:
            break

        items.append(item)
        s, __ = skip_whitespace(s)

    return s, items
