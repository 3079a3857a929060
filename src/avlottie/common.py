"""Central module containing command definitions and exceptions for SVG path conversion."""

from __future__ import annotations

from enum import Enum, auto
from typing import Literal, Optional

###############################################################################
# Types
###############################################################################


AvSvgPathCmds = Literal[  # Type-Definition for SvgPath-Commands; uppercase = absolute, lowercase = relative
    # MoveTo (2) - start a new subpath and move the current point to (x,y)
    "M",
    "m",
    # LineTo (2) - draw a straight line from the current point to (x,y)
    "L",
    "l",
    # Horizontal LineTo (1) - draw a horizontal line to the given x coordinate
    "H",
    "h",
    # Vertical LineTo (1) - draw a vertical line to the given y coordinate
    "V",
    "v",
    # Cubic Bezier To (6) - two control points and an endpoint (x,y)
    "C",
    "c",
    # Smooth cubic Bezier To (4) - first control point is the reflection of the previous one
    "S",
    "s",
    # Quadratic Bezier To (4) - recognized but not converted
    "Q",
    "q",
    # Smooth quadratic Bezier To (2) - recognized but not converted
    "T",
    "t",
    # Arc (7) - recognized but not converted
    "A",
    "a",
    # ClosePath (0)
    "Z",
    "z",
]


###############################################################################
# Enums
###############################################################################


class AvCommandKind(Enum):
    """Enum to define the variants of SVG path commands (case-insensitive)."""

    MOVE = auto()
    LINE = auto()
    HORIZONTAL = auto()
    VERTICAL = auto()
    CUBIC = auto()
    SMOOTH_CUBIC = auto()
    QUADRATIC = auto()
    SMOOTH_QUADRATIC = auto()
    ARC = auto()
    CLOSE = auto()


###############################################################################
# Exceptions
###############################################################################


class AvPathError(ValueError):
    """Base class for errors raised while converting path data in strict mode.

    Attributes:
        offset: character offset into the path string where the problem was detected
        command: the command letter being processed, if any
    """

    def __init__(self, message: str, offset: Optional[int] = None, command: Optional[str] = None):
        self.offset = offset
        self.command = command
        details = []
        if command is not None:
            details.append(f"command '{command}'")
        if offset is not None:
            details.append(f"offset {offset}")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


class MalformedPathError(AvPathError):
    """Raised for unparseable characters or truncated argument lists."""


class UnsupportedCommandError(AvPathError):
    """Raised for commands that are recognized but cannot be converted (Q, T, A)."""
