"""Tokenizing SVG path data"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import ClassVar, List

from avlottie.common import MalformedPathError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvPathToken:
    """A single lexeme of SVG path data.

    Attributes:
        text: the matched characters, either one command letter or one number
        offset: position of the first character in the source string
    """

    text: str
    offset: int

    @property
    def is_command(self) -> bool:
        """Return True if the token is a command letter."""
        return self.text in AvSvgPath.SVG_CMDS

    @property
    def number(self) -> float:
        """Return the numeric value of the token."""
        return float(self.text)


class AvSvgPath:
    """
    This class provides static methods for lexing SVG-path data.
    A SVG-path is characterized by a string describing a sequence of commands and numbers.
    Commands (command : number of values : command-character):
        MoveTo:           2: Mm
        LineTo:           2: Ll   1: Hh(x)   1:Vv(y)
        CubicBezier:      6: Cc   4: Ss
        QuadraticBezier:  4: Qq   2: Tt
        ArcCurve:         7: Aa
        ClosePath:        0: Zz
    """

    # Command letters:
    SVG_CMDS: ClassVar[str] = "MmCcSsLlHhVvQqTtAaZz"
    # Definition of a number:
    SVG_ARGS: ClassVar[str] = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
    # Characters that separate tokens without being one:
    SVG_SEPARATORS: ClassVar[str] = " \t\r\n\f,"

    TOKEN_PATTERN: ClassVar[re.Pattern] = re.compile(f"[{SVG_CMDS}]|{SVG_ARGS}")

    @staticmethod
    def tokenize(path_string: str, strict: bool = False) -> List[AvPathToken]:
        """
        Split the given _path_string_ into command letters and numbers in source order.

        In lenient mode every character that is neither part of a command letter nor of
        a number is dropped silently, as is a number too large to be represented as a
        finite float. In strict mode only whitespace and commas may be dropped;
        anything else raises a MalformedPathError.

        Args:
            path_string (str): a SVG path string
            strict (bool, optional): reject unparseable characters. Defaults to False.

        Returns:
            List[AvPathToken]: the tokens
        """
        tokens: List[AvPathToken] = []
        position = 0
        for match in AvSvgPath.TOKEN_PATTERN.finditer(path_string):
            if strict:
                AvSvgPath._check_gap(path_string, position, match.start())
            token = AvPathToken(match.group(), match.start())
            if not token.is_command and not math.isfinite(token.number):
                if strict:
                    raise MalformedPathError(f"Numeric literal '{token.text}' is out of range", token.offset)
                logger.warning("Skipping out of range number '%s' at offset %d", token.text, token.offset)
            else:
                tokens.append(token)
            position = match.end()
        if strict:
            AvSvgPath._check_gap(path_string, position, len(path_string))

        logger.debug("Tokenized path data of length %d into %d tokens", len(path_string), len(tokens))
        return tokens

    @staticmethod
    def _check_gap(path_string: str, start: int, end: int) -> None:
        """Raise if the characters between two tokens are not plain separators."""
        for offset in range(start, end):
            if path_string[offset] not in AvSvgPath.SVG_SEPARATORS:
                raise MalformedPathError(f"Unexpected character '{path_string[offset]}' in path data", offset)
