"""Configuration of the Lottie output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from avlottie.consts import (
    DEFAULT_FRAME_RATE,
    DEFAULT_HEIGHT,
    DEFAULT_STROKE_COLOR,
    DEFAULT_STROKE_WIDTH,
    DEFAULT_WIDTH,
)

###############################################################################
# LottieConfig
###############################################################################


@dataclass(frozen=True)
class LottieConfig:
    """Layout and style options consumed by the serializer.

    Attributes:
        width: Canvas width.
        height: Canvas height.
        stroke_width: Width of the stroke applied to all shapes.
        stroke_color: RGBA stroke color, each component in [0, 1].
        frame_rate: Frames per second; the animation lasts exactly one second.
        shapes_only: If True, convert() returns the shapes listing instead of a document.
        strict: If True, malformed or unsupported path data raises instead of being skipped.
    """

    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    stroke_width: float = DEFAULT_STROKE_WIDTH
    stroke_color: Tuple[float, float, float, float] = field(default=DEFAULT_STROKE_COLOR)
    frame_rate: float = DEFAULT_FRAME_RATE
    shapes_only: bool = False
    strict: bool = False

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas size must be positive, got {self.width}x{self.height}")
        if self.stroke_width < 0:
            raise ValueError(f"Stroke width must not be negative, got {self.stroke_width}")
        if self.frame_rate <= 0:
            raise ValueError(f"Frame rate must be positive, got {self.frame_rate}")

        color = tuple(self.stroke_color)
        if len(color) != 4:
            raise ValueError(f"Stroke color must have 4 components (RGBA), got {len(color)}")
        if any(c < 0 or c > 1 for c in color):
            raise ValueError(f"Stroke color components must be within [0, 1], got {color}")
        # frozen: bypass __setattr__ to store the normalized tuple
        object.__setattr__(self, "stroke_color", color)

    def to_dict(self) -> dict:
        """Convert the configuration to a dictionary using the external option names."""
        return {
            "width": self.width,
            "height": self.height,
            "strokeWidth": self.stroke_width,
            "strokeColor": list(self.stroke_color),
            "frameRate": self.frame_rate,
            "shapesOnly": self.shapes_only,
            "strict": self.strict,
        }

    @classmethod
    def from_dict(cls, data: dict) -> LottieConfig:
        """Create a LottieConfig from a dictionary; missing options take their defaults."""
        return cls(
            width=data.get("width", DEFAULT_WIDTH),
            height=data.get("height", DEFAULT_HEIGHT),
            stroke_width=data.get("strokeWidth", DEFAULT_STROKE_WIDTH),
            stroke_color=tuple(data.get("strokeColor", DEFAULT_STROKE_COLOR)),
            frame_rate=data.get("frameRate", DEFAULT_FRAME_RATE),
            shapes_only=data.get("shapesOnly", False),
            strict=data.get("strict", False),
        )


DEFAULT_CONFIG = LottieConfig()
