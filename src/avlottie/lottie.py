"""Serialization of subpaths into Lottie shape items and documents."""

from __future__ import annotations

import json
import logging
from typing import List, Optional, Sequence, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from avlottie.config import DEFAULT_CONFIG, LottieConfig
from avlottie.consts import LOTTIE_DOCUMENT_NAME, LOTTIE_VERSION, ROUND_SCALE
from avlottie.path import AvSubpath, parse_svg_path

logger = logging.getLogger(__name__)


###############################################################################
# AvLottieSerializer
###############################################################################
class AvLottieSerializer:
    """Collection of static methods building Lottie structures from subpaths.

    All coordinates and tangents are rounded to 4 decimal places, half away from zero.
    Every call builds new dictionaries; nothing is shared between results.
    """

    @staticmethod
    def round_array(values: ArrayLike) -> NDArray[np.float64]:
        """Round half away from zero on the value scaled by ROUND_SCALE.

        Negative zero is normalized to zero.
        """
        arr = np.asarray(values, dtype=np.float64)
        rounded = np.sign(arr) * np.floor(np.abs(arr) * ROUND_SCALE + 0.5) / ROUND_SCALE
        return rounded + 0.0

    @staticmethod
    def round_value(value: float) -> float:
        """Round a single number like round_array()."""
        return float(AvLottieSerializer.round_array(value))

    @staticmethod
    def shape_payload(subpath: AvSubpath) -> dict:
        """Return the rounded geometry {v, i, o, c} of a subpath."""
        vertices, in_tangents, out_tangents = subpath.as_arrays()
        return {
            "v": AvLottieSerializer.round_array(vertices).tolist(),
            "i": AvLottieSerializer.round_array(in_tangents).tolist(),
            "o": AvLottieSerializer.round_array(out_tangents).tolist(),
            "c": subpath.closed,
        }

    @staticmethod
    def shape_item(subpath: AvSubpath, name: str, index: int) -> dict:
        """Return the Lottie path shape item ("sh") for a subpath."""
        return {
            "ind": index,
            "ty": "sh",
            "ix": index + 1,
            "ks": {"a": 0, "k": AvLottieSerializer.shape_payload(subpath), "ix": 2},
            "nm": name,
            "mn": "ADBE Vector Shape - Group",
        }

    @staticmethod
    def stroke_item(config: LottieConfig) -> dict:
        """Return the stroke style item ("st") with round caps and joins."""
        return {
            "ty": "st",
            "c": {"a": 0, "k": list(config.stroke_color), "ix": 3},
            "o": {"a": 0, "k": 100, "ix": 4},
            "w": {"a": 0, "k": config.stroke_width, "ix": 5},
            "lc": 2,
            "lj": 2,
            "bm": 0,
            "nm": "Stroke",
            "mn": "ADBE Vector Graphic - Stroke",
        }

    @staticmethod
    def transform_item() -> dict:
        """Return a group transform item ("tr") with identity values."""
        return {
            "ty": "tr",
            "p": {"a": 0, "k": [0, 0], "ix": 2},
            "a": {"a": 0, "k": [0, 0], "ix": 1},
            "s": {"a": 0, "k": [100, 100], "ix": 3},
            "r": {"a": 0, "k": 0, "ix": 6},
            "o": {"a": 0, "k": 100, "ix": 7},
            "sk": {"a": 0, "k": 0, "ix": 4},
            "sa": {"a": 0, "k": 0, "ix": 5},
            "nm": "Transform",
        }

    @staticmethod
    def subpath_name(index: int) -> str:
        """Return the display name of the subpath at the given 0-based index."""
        return f"Path {index + 1}"

    @staticmethod
    def build_document(subpaths: Sequence[AvSubpath], config: LottieConfig = DEFAULT_CONFIG) -> dict:
        """Wrap the subpaths into a single-layer Lottie document.

        The layer holds one group with a shape item per subpath, followed by
        the stroke and the group transform. Layer anchor and position both sit
        at the canvas centre.
        """
        width, height, frame_rate = config.width, config.height, config.frame_rate
        shapes = [
            AvLottieSerializer.shape_item(subpath, AvLottieSerializer.subpath_name(i), i)
            for i, subpath in enumerate(subpaths)
        ]
        center = [width / 2, height / 2, 0]

        group = {
            "ty": "gr",
            "it": [*shapes, AvLottieSerializer.stroke_item(config), AvLottieSerializer.transform_item()],
            "nm": "Group",
            "np": len(shapes) + 1,
            "cix": 2,
            "bm": 0,
            "ix": 1,
            "mn": "ADBE Vector Group",
        }
        layer = {
            "ddd": 0,
            "ind": 0,
            "ty": 4,
            "nm": "Shape",
            "sr": 1,
            "ks": {
                "o": {"a": 0, "k": 100, "ix": 11},
                "r": {"a": 0, "k": 0, "ix": 10},
                "p": {"a": 0, "k": list(center), "ix": 2},
                "a": {"a": 0, "k": list(center), "ix": 1},
                "s": {"a": 0, "k": [100, 100, 100], "ix": 6},
            },
            "ao": 0,
            "shapes": [group],
            "ip": 0,
            "op": frame_rate,
            "st": 0,
            "bm": 0,
        }
        return {
            "v": LOTTIE_VERSION,
            "fr": frame_rate,
            "ip": 0,
            "op": frame_rate,
            "w": width,
            "h": height,
            "nm": LOTTIE_DOCUMENT_NAME,
            "ddd": 0,
            "assets": [],
            "markers": [],
            "layers": [layer],
        }

    @staticmethod
    def build_shapes(subpaths: Sequence[AvSubpath]) -> List[dict]:
        """Return the lightweight listing {name, vertices, closed, shape} per subpath."""
        return [
            {
                "name": AvLottieSerializer.subpath_name(i),
                "vertices": len(subpath),
                "closed": subpath.closed,
                "shape": AvLottieSerializer.shape_payload(subpath),
            }
            for i, subpath in enumerate(subpaths)
        ]


###############################################################################
# Conversion entry points
###############################################################################


def convert(path_data: str, config: Optional[LottieConfig] = None) -> Union[dict, List[dict]]:
    """Convert SVG path data into a Lottie document.

    Args:
        path_data (str): SVG path data (the ``d`` attribute)
        config (Optional[LottieConfig], optional): output options. Defaults to LottieConfig().

    Returns:
        dict: the Lottie document, or the shapes listing if config.shapes_only is set

    Raises:
        MalformedPathError, UnsupportedCommandError: only if config.strict is set
    """
    config = config if config is not None else DEFAULT_CONFIG
    subpaths = parse_svg_path(path_data, strict=config.strict)
    logger.debug("Converting %d subpaths (shapes_only=%s)", len(subpaths), config.shapes_only)
    if config.shapes_only:
        return AvLottieSerializer.build_shapes(subpaths)
    return AvLottieSerializer.build_document(subpaths, config)


def convert_shapes_only(path_data: str, config: Optional[LottieConfig] = None) -> List[dict]:
    """Convert SVG path data into the shapes listing, without the document envelope."""
    strict = config.strict if config is not None else False
    return AvLottieSerializer.build_shapes(parse_svg_path(path_data, strict=strict))


###############################################################################
# Main
###############################################################################


def main():
    """Print the shapes of a sample path"""
    print(json.dumps(convert_shapes_only("M0 0 C10 0 10 10 20 10 S30 0 40 10 L40 20 Z")))


if __name__ == "__main__":
    main()
