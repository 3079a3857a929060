"""SVG path interpretation into subpaths with relative bezier handles."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from avlottie.common import AvCommandKind, MalformedPathError, UnsupportedCommandError
from avlottie.consts import CLOSE_TOLERANCE
from avlottie.path_support import PathCommandProcessor
from avlottie.svgpath import AvPathToken, AvSvgPath

logger = logging.getLogger(__name__)

###############################################################################
# AvSubpath
###############################################################################


@dataclass
class AvSubpath:
    """One contour of a path: vertices with tangents relative to their vertex.

    Every vertex owns exactly one in-tangent and one out-tangent. A tangent is
    stored as ``control_point - vertex``; the zero vector means a straight corner.

    Attributes:
        vertices: anchor points [x, y]
        in_tangents: incoming handle per vertex
        out_tangents: outgoing handle per vertex
        closed: True once a close command was applied
    """

    vertices: List[List[float]] = field(default_factory=list)
    in_tangents: List[List[float]] = field(default_factory=list)
    out_tangents: List[List[float]] = field(default_factory=list)
    closed: bool = False

    def __post_init__(self):
        if not len(self.vertices) == len(self.in_tangents) == len(self.out_tangents):
            raise ValueError(
                f"Vertices ({len(self.vertices)}), in-tangents ({len(self.in_tangents)}) "
                f"and out-tangents ({len(self.out_tangents)}) must have the same length"
            )

    @classmethod
    def start_at(cls, x: float, y: float) -> AvSubpath:
        """Create a subpath holding a single corner vertex at (x, y)."""
        return cls([[x, y]], [[0.0, 0.0]], [[0.0, 0.0]])

    def __len__(self) -> int:
        return len(self.vertices)

    @property
    def last_in_tangent(self) -> List[float]:
        """Return the in-tangent of the most recently appended vertex."""
        return self.in_tangents[-1]

    def add_line(self, x: float, y: float) -> None:
        """Append a vertex joined by a straight segment (no handles on either side)."""
        self.out_tangents[-1] = [0.0, 0.0]
        self.vertices.append([x, y])
        self.in_tangents.append([0.0, 0.0])
        self.out_tangents.append([0.0, 0.0])

    def add_curve(
        self,
        start: Tuple[float, float],
        cp1: Tuple[float, float],
        cp2: Tuple[float, float],
        end: Tuple[float, float],
    ) -> None:
        """Append a vertex joined by a cubic bezier segment.

        Args:
            start: absolute start point of the segment (the cursor)
            cp1: absolute first control point
            cp2: absolute second control point
            end: absolute end point, becomes the new vertex
        """
        self.out_tangents[-1] = [cp1[0] - start[0], cp1[1] - start[1]]
        self.vertices.append([end[0], end[1]])
        self.in_tangents.append([cp2[0] - end[0], cp2[1] - end[1]])
        self.out_tangents.append([0.0, 0.0])

    def close(self, tolerance: float = CLOSE_TOLERANCE) -> List[float]:
        """Mark the subpath closed and merge a closing vertex that revisits the start.

        The merged vertex hands its in-tangent over to vertex 0.

        Returns:
            List[float]: the first vertex, where the cursor continues
        """
        self.closed = True
        first = self.vertices[0]
        last = self.vertices[-1]
        if len(self.vertices) > 1 and abs(first[0] - last[0]) < tolerance and abs(first[1] - last[1]) < tolerance:
            self.in_tangents[0] = self.in_tangents[-1]
            self.vertices.pop()
            self.in_tangents.pop()
            self.out_tangents.pop()
        return first

    def as_arrays(self) -> Tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
        """Return vertices, in-tangents and out-tangents as arrays of shape (n, 2)."""
        return (
            np.asarray(self.vertices, dtype=np.float64).reshape(-1, 2),
            np.asarray(self.in_tangents, dtype=np.float64).reshape(-1, 2),
            np.asarray(self.out_tangents, dtype=np.float64).reshape(-1, 2),
        )

    def is_straight(self) -> bool:
        """Return True if no vertex carries a handle."""
        _, in_tangents, out_tangents = self.as_arrays()
        return not np.any(in_tangents) and not np.any(out_tangents)

    @classmethod
    def from_dict(cls, data: dict) -> AvSubpath:
        """Create an AvSubpath instance from a dictionary."""
        return cls(
            vertices=[list(map(float, p)) for p in data.get("vertices", [])],
            in_tangents=[list(map(float, p)) for p in data.get("in_tangents", [])],
            out_tangents=[list(map(float, p)) for p in data.get("out_tangents", [])],
            closed=bool(data.get("closed", False)),
        )

    def to_dict(self) -> dict:
        """Convert the AvSubpath instance to a dictionary."""
        return {
            "vertices": [list(p) for p in self.vertices],
            "in_tangents": [list(p) for p in self.in_tangents],
            "out_tangents": [list(p) for p in self.out_tangents],
            "closed": self.closed,
        }


###############################################################################
# AvPathState
###############################################################################


@dataclass
class AvPathState:
    """Interpreter state threaded through every command application.

    Attributes:
        x: cursor x-coordinate
        y: cursor y-coordinate
        subpaths: all subpaths started so far, in first-seen order
        current_index: index of the subpath receiving new segments, None before the first move
    """

    x: float = 0.0
    y: float = 0.0
    subpaths: List[AvSubpath] = field(default_factory=list)
    current_index: Optional[int] = None

    @property
    def current(self) -> Optional[AvSubpath]:
        """Return the subpath receiving new segments."""
        if self.current_index is None:
            return None
        return self.subpaths[self.current_index]

    @property
    def cursor(self) -> Tuple[float, float]:
        """Return the cursor as (x, y)."""
        return (self.x, self.y)

    def move_to(self, x: float, y: float) -> AvSubpath:
        """Start a new subpath at (x, y) and make it current."""
        self.x, self.y = x, y
        self.subpaths.append(AvSubpath.start_at(x, y))
        self.current_index = len(self.subpaths) - 1
        logger.debug("Started subpath %d at (%g, %g)", self.current_index + 1, x, y)
        return self.subpaths[self.current_index]


###############################################################################
# AvPathInterpreter
###############################################################################


class AvPathInterpreter:
    """Interprets SVG path data into a list of AvSubpath.

    Supported commands: M, m, L, l, H, h, V, v, C, c, S, s, Z, z.
    Q, q, T, t, A, a are recognized but carry no conversion:
        lenient mode skips them (and their numbers), strict mode raises UnsupportedCommandError.

    In lenient mode the interpreter never raises. Incomplete argument groups are
    dropped and numbers without a preceding command are skipped. In strict mode
    each of these conditions raises a MalformedPathError carrying the offset.
    """

    def __init__(self, strict: bool = False, close_tolerance: float = CLOSE_TOLERANCE):
        self.strict = strict
        self.close_tolerance = close_tolerance

    def parse(self, path_string: str) -> List[AvSubpath]:
        """Tokenize and interpret the given SVG path string."""
        return self.interpret(AvSvgPath.tokenize(path_string, strict=self.strict))

    def interpret(self, tokens: Sequence[AvPathToken]) -> List[AvSubpath]:
        """Interpret the given tokens and return the resulting subpaths."""
        state = AvPathState()
        index = 0
        while index < len(tokens):
            token = tokens[index]
            if not token.is_command:
                if self.strict:
                    raise MalformedPathError("Number without preceding command", token.offset)
                index += 1
                continue

            if not PathCommandProcessor.is_supported_command(token.text):
                if self.strict:
                    raise UnsupportedCommandError("Command cannot be converted", token.offset, token.text)
                # The arguments are left to the outer loop, which skips them one by one.
                logger.warning("Skipping unsupported command '%s' at offset %d", token.text, token.offset)
                index += 1
                continue

            end = index + 1
            while end < len(tokens) and not tokens[end].is_command:
                end += 1
            self._apply_command(state, token, tokens[index + 1 : end])
            index = end

        logger.debug("Interpreted %d tokens into %d subpaths", len(tokens), len(state.subpaths))
        return state.subpaths

    def _apply_command(self, state: AvPathState, token: AvPathToken, args: Sequence[AvPathToken]) -> None:
        """Apply one command letter with all of its (implicitly repeated) argument groups."""
        cmd = token.text
        arity = PathCommandProcessor.get_arity(cmd)
        groups, leftover = PathCommandProcessor.split_argument_groups(args, arity)

        if leftover or (arity and not groups):
            offset = leftover[0].offset if leftover else token.offset
            if self.strict:
                raise MalformedPathError("Truncated or surplus arguments", offset, cmd)
            logger.warning("Ignoring %d trailing argument(s) of command '%s' at offset %d", len(leftover), cmd, offset)

        kind = PathCommandProcessor.get_kind(cmd)
        if PathCommandProcessor.is_drawing_command(cmd) and state.current is None:
            if self.strict:
                raise MalformedPathError("Path data must begin with a move command", token.offset, cmd)
            if kind is AvCommandKind.CLOSE or not groups:
                return
            state.move_to(state.x, state.y)

        if kind is AvCommandKind.CLOSE:
            first = state.current.close(self.close_tolerance)
            state.x, state.y = first[0], first[1]
            return

        relative = PathCommandProcessor.is_relative_command(cmd)
        for group_index, values in enumerate(groups):
            if kind is AvCommandKind.MOVE and group_index == 0:
                dx, dy = (state.x, state.y) if relative else (0.0, 0.0)
                state.move_to(dx + values[0], dy + values[1])
            elif kind is AvCommandKind.MOVE:
                # Further pairs after a move are implicit line-tos
                self._line_to(state, values, relative)
            elif kind is AvCommandKind.LINE:
                self._line_to(state, values, relative)
            elif kind is AvCommandKind.HORIZONTAL:
                x = state.x + values[0] if relative else values[0]
                self._append_line(state, x, state.y)
            elif kind is AvCommandKind.VERTICAL:
                y = state.y + values[0] if relative else values[0]
                self._append_line(state, state.x, y)
            elif kind is AvCommandKind.CUBIC:
                cp1, cp2, end = self._resolve_points(state, values, relative)
                self._append_curve(state, cp1, cp2, end)
            elif kind is AvCommandKind.SMOOTH_CUBIC:
                # Reflect the incoming handle of the current vertex about the cursor
                prev_in = state.current.last_in_tangent
                cp1 = (state.x - prev_in[0], state.y - prev_in[1])
                cp2, end = self._resolve_points(state, values, relative)
                self._append_curve(state, cp1, cp2, end)

    @staticmethod
    def _resolve_points(state: AvPathState, values: Sequence[float], relative: bool) -> List[Tuple[float, float]]:
        """Turn flat coordinate values into absolute points (relative to the cursor if requested)."""
        dx, dy = state.cursor if relative else (0.0, 0.0)
        return [(dx + values[i], dy + values[i + 1]) for i in range(0, len(values), 2)]

    def _line_to(self, state: AvPathState, values: Sequence[float], relative: bool) -> None:
        ((x, y),) = self._resolve_points(state, values, relative)
        self._append_line(state, x, y)

    @staticmethod
    def _append_line(state: AvPathState, x: float, y: float) -> None:
        state.current.add_line(x, y)
        state.x, state.y = x, y

    @staticmethod
    def _append_curve(
        state: AvPathState,
        cp1: Tuple[float, float],
        cp2: Tuple[float, float],
        end: Tuple[float, float],
    ) -> None:
        state.current.add_curve(state.cursor, cp1, cp2, end)
        state.x, state.y = end


def parse_svg_path(path_string: str, strict: bool = False) -> List[AvSubpath]:
    """Interpret the given SVG path string into subpaths.

    Args:
        path_string (str): SVG path data (the ``d`` attribute)
        strict (bool, optional): raise on malformed or unsupported input. Defaults to False.

    Returns:
        List[AvSubpath]: the subpaths in first-seen order
    """
    return AvPathInterpreter(strict=strict).parse(path_string)
