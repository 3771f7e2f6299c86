"""
Path Combinators

Small parser combinators over path strings. A parser is any callable
taking the remaining input and returning either a Step (success, with the
unconsumed rest and a value) or a Failure. Alternation is an ordered list
of parsers where the first success wins; nothing in here raises.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Union


@dataclass(frozen=True)
class Step:
    """Successful parse: the unconsumed input and the produced value."""
    rest: str
    value: Any


@dataclass(frozen=True)
class Failure:
    """
    Failed parse.

    expected/actual are set only when the failure came from two repeated
    ids disagreeing, which callers report differently from a plain
    grammar miss.
    """
    rest: str
    reason: str
    expected: Optional[int] = None
    actual: Optional[int] = None

    @property
    def is_mismatch(self) -> bool:
        return self.expected is not None


Result = Union[Step, Failure]
Parser = Callable[[str], Result]


def failed(result: Result) -> bool:
    return isinstance(result, Failure)


# =============================================================================
# Primitives
# =============================================================================

def tag(literal: str) -> Parser:
    """Match an exact literal."""
    def parse(text: str) -> Result:
        if text.startswith(literal):
            return Step(text[len(literal):], literal)
        return Failure(text, f"expected {literal!r}")
    return parse


def take(count: int) -> Parser:
    """Take exactly `count` characters."""
    def parse(text: str) -> Result:
        if len(text) < count:
            return Failure(text, f"expected {count} characters")
        return Step(text[count:], text[:count])
    return parse


def take_till(stop: str) -> Parser:
    """Take characters up to (not including) any character in `stop`. May be empty."""
    def parse(text: str) -> Result:
        for i, ch in enumerate(text):
            if ch in stop:
                return Step(text[i:], text[:i])
        return Step("", text)
    return parse


def take_until(literal: str) -> Parser:
    """Take characters up to the first occurrence of `literal`, which must exist."""
    def parse(text: str) -> Result:
        index = text.find(literal)
        if index < 0:
            return Failure(text, f"expected {literal!r} somewhere ahead")
        return Step(text[index:], text[:index])
    return parse


def one_of(chars: str) -> Parser:
    """Match a single character from `chars`."""
    def parse(text: str) -> Result:
        if text and text[0] in chars:
            return Step(text[1:], text[0])
        return Failure(text, f"expected one of {chars!r}")
    return parse


def digits(text: str) -> Result:
    """One or more ASCII digits, as an int."""
    end = 0
    while end < len(text) and text[end] in "0123456789":
        end += 1
    if end == 0:
        return Failure(text, "expected digits")
    return Step(text[end:], int(text[:end]))


def n_digit_id(count: int) -> Parser:
    """Exactly `count` ASCII digits, as an int."""
    def parse(text: str) -> Result:
        chunk = text[:count]
        if len(chunk) != count or not all(ch in "0123456789" for ch in chunk):
            return Failure(text, f"expected a {count} digit id")
        return Step(text[count:], int(chunk))
    return parse


def path_id(prefix: str) -> Parser:
    """A prefix letter(s) followed by a 4 digit id, e.g. `m0133`."""
    return preceded(tag(prefix), n_digit_id(4))


def part(text: str) -> Result:
    """One path component: everything up to the next '/' (or the end)."""
    return take_till("/")(text)


def end_of_input(text: str) -> Result:
    if text:
        return Failure(text, "trailing characters")
    return Step(text, None)


# =============================================================================
# Combinators
# =============================================================================

def seq(*parsers: Parser) -> Parser:
    """Run parsers in order, collecting their values in a tuple."""
    def parse(text: str) -> Result:
        values = []
        rest = text
        for parser in parsers:
            result = parser(rest)
            if isinstance(result, Failure):
                return result
            values.append(result.value)
            rest = result.rest
        return Step(rest, tuple(values))
    return parse


def alt(*parsers: Parser) -> Parser:
    """
    Ordered choice: the first parser to succeed wins.

    If every alternative fails, a repeated-id mismatch is preferred over a
    plain grammar failure so the caller can report it.
    """
    def parse(text: str) -> Result:
        mismatch = None
        for parser in parsers:
            result = parser(text)
            if isinstance(result, Step):
                return result
            if mismatch is None and result.is_mismatch:
                mismatch = result
        if mismatch is not None:
            return mismatch
        return Failure(text, "no alternative matched")
    return parse


def opt(parser: Parser) -> Parser:
    """Optional: value is None when the inner parser fails."""
    def parse(text: str) -> Result:
        result = parser(text)
        if isinstance(result, Failure):
            return Step(text, None)
        return result
    return parse


def preceded(first: Parser, second: Parser) -> Parser:
    def parse(text: str) -> Result:
        result = seq(first, second)(text)
        if isinstance(result, Failure):
            return result
        return Step(result.rest, result.value[1])
    return parse


def terminated(first: Parser, second: Parser) -> Parser:
    def parse(text: str) -> Result:
        result = seq(first, second)(text)
        if isinstance(result, Failure):
            return result
        return Step(result.rest, result.value[0])
    return parse


def delimited(left: Parser, inner: Parser, right: Parser) -> Parser:
    def parse(text: str) -> Result:
        result = seq(left, inner, right)(text)
        if isinstance(result, Failure):
            return result
        return Step(result.rest, result.value[1])
    return parse


def map_value(parser: Parser, func: Callable[[Any], Any]) -> Parser:
    """Transform a successful value."""
    def parse(text: str) -> Result:
        result = parser(text)
        if isinstance(result, Failure):
            return result
        return Step(result.rest, func(result.value))
    return parse


def map_checked(parser: Parser, func: Callable[[Any], Any]) -> Parser:
    """
    Transform a successful value with a function that may itself fail.

    `func` returns either the new value or a Failure; a returned Failure is
    re-anchored at the start of this parser's input.
    """
    def parse(text: str) -> Result:
        result = parser(text)
        if isinstance(result, Failure):
            return result
        value = func(result.value)
        if isinstance(value, Failure):
            return Failure(text, value.reason, value.expected, value.actual)
        return Step(result.rest, value)
    return parse


def lookup(parser: Parser, table: Callable[[str], Any], what: str) -> Parser:
    """Parse raw text and map it through `table`; a None result fails."""
    def convert(raw: str):
        value = table(raw)
        if value is None:
            return Failure(raw, f"unknown {what} {raw!r}")
        return value
    return map_checked(parser, convert)


def check_repeat_ids(expected: Iterable[int], actual: Iterable[int]) -> Optional[Failure]:
    """Compare ids parsed from a directory with the ids repeated in a filename."""
    for want, got in zip(expected, actual):
        if want != got:
            return Failure("", "mismatched path ids", want, got)
    return None


def repeat_of(parser: Parser, *expected: int) -> Parser:
    """
    Parse the ids repeated in a filename and require them to equal `expected`.

    `parser` must produce an int or a tuple of ints in the same order.
    """
    def check(value):
        actual = value if isinstance(value, tuple) else (value,)
        mismatch = check_repeat_ids(expected, actual)
        if mismatch is not None:
            return mismatch
        return value
    return map_checked(parser, check)
