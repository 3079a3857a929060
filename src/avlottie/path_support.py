"""Supporting utilities for the path interpreter.

This module contains command metadata and argument-grouping helpers
that are used by the core interpreter implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from avlottie.common import AvCommandKind, AvSvgPathCmds
from avlottie.svgpath import AvPathToken

###############################################################################
# PathCommandInfo
###############################################################################


@dataclass(frozen=True)
class PathCommandInfo:
    """Metadata for SVG path commands.

    Attributes:
        kind: The command variant
        arity: Number of numeric values one instance of this command consumes
        is_supported: Whether this command can be converted into shape geometry
        is_drawing: Whether this command draws (vs. move)
    """

    kind: AvCommandKind
    arity: int
    is_supported: bool = True
    is_drawing: bool = True


# Command registry with metadata, keyed by the absolute (uppercase) letter
COMMAND_INFO = {
    "M": PathCommandInfo(AvCommandKind.MOVE, 2, True, False),  # MoveTo - not drawing
    "L": PathCommandInfo(AvCommandKind.LINE, 2),
    "H": PathCommandInfo(AvCommandKind.HORIZONTAL, 1),
    "V": PathCommandInfo(AvCommandKind.VERTICAL, 1),
    "C": PathCommandInfo(AvCommandKind.CUBIC, 6),
    "S": PathCommandInfo(AvCommandKind.SMOOTH_CUBIC, 4),
    "Q": PathCommandInfo(AvCommandKind.QUADRATIC, 4, False),  # recognized, not converted
    "T": PathCommandInfo(AvCommandKind.SMOOTH_QUADRATIC, 2, False),  # recognized, not converted
    "A": PathCommandInfo(AvCommandKind.ARC, 7, False),  # recognized, not converted
    "Z": PathCommandInfo(AvCommandKind.CLOSE, 0),
}


###############################################################################
# PathCommandProcessor
###############################################################################


class PathCommandProcessor:
    """Handles command look-ups and argument grouping."""

    @staticmethod
    def get_info(cmd: AvSvgPathCmds) -> PathCommandInfo:
        """Return the metadata of the given command letter (either case)."""
        return COMMAND_INFO[cmd.upper()]

    @staticmethod
    def get_arity(cmd: AvSvgPathCmds) -> int:
        """Return number of values consumed by one instance of the command."""
        return PathCommandProcessor.get_info(cmd).arity

    @staticmethod
    def get_kind(cmd: AvSvgPathCmds) -> AvCommandKind:
        """Return the variant of the command."""
        return PathCommandProcessor.get_info(cmd).kind

    @staticmethod
    def is_supported_command(cmd: AvSvgPathCmds) -> bool:
        """Return True if the command contributes geometry."""
        return PathCommandProcessor.get_info(cmd).is_supported

    @staticmethod
    def is_drawing_command(cmd: AvSvgPathCmds) -> bool:
        """Return True if command draws (vs. move)."""
        return PathCommandProcessor.get_info(cmd).is_drawing

    @staticmethod
    def is_relative_command(cmd: AvSvgPathCmds) -> bool:
        """Return True if the command uses coordinates relative to the cursor."""
        return cmd.islower()

    @staticmethod
    def split_argument_groups(
        args: Sequence[AvPathToken], arity: int
    ) -> Tuple[List[List[float]], List[AvPathToken]]:
        """Split numeric tokens into complete argument groups of the given arity.

        Args:
            args: Numeric tokens following a command letter
            arity: Number of values per command instance

        Returns:
            Tuple of the complete groups (as floats) and the tokens left over
            that do not fill a whole group.
        """
        if arity == 0:
            return [], list(args)

        complete = len(args) - len(args) % arity
        groups = [[token.number for token in args[i : i + arity]] for i in range(0, complete, arity)]
        return groups, list(args[complete:])
