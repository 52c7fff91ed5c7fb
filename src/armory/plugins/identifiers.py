"""Plugin identifiers.

An identifier is one or more lowercase ``[a-z0-9_-]+`` segments joined by
``/``, e.g. ``base64`` or ``cmd/bind_shell``. The grammar excludes ``.``,
so traversal segments and file extensions can never appear, and segments
can be joined into a relative path without further checks.
"""

import re
from dataclasses import dataclass
from pathlib import PurePosixPath

from armory.contracts import InvalidIdentifier

_SEGMENT = r"[a-z0-9_-]+"
IDENTIFIER_PATTERN = re.compile(rf"{_SEGMENT}(?:/{_SEGMENT})*")

# Identifiers are short; anything longer is rejected before matching
MAX_IDENTIFIER_LENGTH = 256


@dataclass(frozen=True)
class PluginIdentifier:
    """A parsed, validated plugin identifier."""

    segments: tuple[str, ...]

    @classmethod
    def parse(cls, raw: str, kind: str = "plugin") -> "PluginIdentifier":
        """Parse ``raw`` without any case or separator normalisation.

        Raises:
            InvalidIdentifier: If ``raw`` does not match the grammar.
        """
        if (
            not isinstance(raw, str)
            or len(raw) > MAX_IDENTIFIER_LENGTH
            or IDENTIFIER_PATTERN.fullmatch(raw) is None
        ):
            raise InvalidIdentifier(str(raw), kind)
        return cls(segments=tuple(raw.split("/")))

    @property
    def name(self) -> str:
        """Last segment."""
        return self.segments[-1]

    def relative_path(self, suffix: str = ".py") -> PurePosixPath:
        """Path of the defining file relative to a kind directory."""
        return PurePosixPath(*self.segments[:-1], self.segments[-1] + suffix)

    def __str__(self) -> str:
        return "/".join(self.segments)
