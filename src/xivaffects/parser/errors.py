"""
Path parse errors.

Raised by parse_path() when a path string does not belong to any known
family, or when a family matched but the ids repeated inside the path
disagree with each other.
"""


class PathParseError(Exception):
    """Base class for failures to parse an archive path."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{message}: {path!r}")


class GrammarError(PathParseError):
    """No path family matched, or characters were left over after a match."""

    def __init__(self, path: str, reason: str = "unrecognised path"):
        self.reason = reason
        super().__init__(path, reason)


class MismatchedPathIds(PathParseError):
    """An id embedded in a filename differs from the id in its directory."""

    def __init__(self, path: str, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(path, f"mismatched path ids (expected {expected}, got {actual})")
