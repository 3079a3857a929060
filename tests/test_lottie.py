"""Tests for the Lottie serializer and the conversion entry points."""

from __future__ import annotations

import json

import numpy as np
import pytest

from avlottie.common import UnsupportedCommandError
from avlottie.config import LottieConfig
from avlottie.lottie import AvLottieSerializer, convert, convert_shapes_only
from avlottie.path import AvSubpath, parse_svg_path


class TestRounding:
    """Tests for the 4-decimal rounding rule."""

    def test_round_value(self):
        """1.23456789 becomes 1.2346."""
        assert AvLottieSerializer.round_value(1.23456789) == 1.2346

    def test_half_away_from_zero(self):
        """Exact halves round away from zero on both signs."""
        np.testing.assert_array_equal(AvLottieSerializer.round_array([0.03125, -0.03125]), [0.0313, -0.0313])

    def test_negative_zero_is_normalized(self):
        """Tiny negative values do not serialize as -0.0."""
        assert json.dumps(AvLottieSerializer.round_value(-0.00001)) == "0.0"

    def test_round_array_keeps_shape(self):
        """Rounding works element-wise on (n, 2) arrays."""
        result = AvLottieSerializer.round_array([[1.00004, -2.99996], [3.33333, 0]])
        assert result.shape == (2, 2)
        np.testing.assert_array_equal(result, [[1.0, -3.0], [3.3333, 0.0]])


class TestShapeItems:
    """Tests for per-subpath items."""

    def test_shape_payload(self):
        """The payload carries rounded vertices, tangents and the closed flag."""
        subpath = AvSubpath([[1.23456789, 0]], [[0, -0.33333]], [[0.66666, 0]], True)
        assert AvLottieSerializer.shape_payload(subpath) == {
            "v": [[1.2346, 0.0]],
            "i": [[0.0, -0.3333]],
            "o": [[0.6667, 0.0]],
            "c": True,
        }

    def test_empty_subpath_payload(self):
        """An empty subpath serializes to empty lists."""
        assert AvLottieSerializer.shape_payload(AvSubpath()) == {"v": [], "i": [], "o": [], "c": False}

    def test_shape_item(self):
        """Shape items follow the Lottie 'sh' schema."""
        (subpath,) = parse_svg_path("M0 0 C10 0 10 10 0 10")
        item = AvLottieSerializer.shape_item(subpath, "Path 1", 0)
        assert item["ty"] == "sh"
        assert (item["ind"], item["ix"], item["nm"]) == (0, 1, "Path 1")
        assert item["mn"] == "ADBE Vector Shape - Group"
        assert item["ks"]["a"] == 0
        assert item["ks"]["k"] == {
            "v": [[0.0, 0.0], [0.0, 10.0]],
            "i": [[0.0, 0.0], [10.0, 0.0]],
            "o": [[10.0, 0.0], [0.0, 0.0]],
            "c": False,
        }

    def test_stroke_item(self):
        """The stroke uses the configured color and width."""
        item = AvLottieSerializer.stroke_item(LottieConfig(stroke_width=3.5, stroke_color=(1, 0, 0, 1)))
        assert item["ty"] == "st"
        assert item["c"]["k"] == [1, 0, 0, 1]
        assert item["w"]["k"] == 3.5

    def test_transform_item_is_identity(self):
        """The group transform has neutral values."""
        item = AvLottieSerializer.transform_item()
        assert item["ty"] == "tr"
        assert item["p"]["k"] == [0, 0]
        assert item["s"]["k"] == [100, 100]
        assert item["r"]["k"] == 0
        assert item["o"]["k"] == 100


class TestDocument:
    """Tests for the full document."""

    def test_envelope(self):
        """Top-level fields reflect the configuration."""
        document = convert("M0 0 L10 10", LottieConfig(width=100, height=50, frame_rate=30))
        assert document["v"] == "5.5.2"
        assert (document["fr"], document["ip"], document["op"]) == (30, 0, 30)
        assert (document["w"], document["h"]) == (100, 50)
        assert document["assets"] == [] and document["markers"] == []
        assert len(document["layers"]) == 1

    def test_layer_is_centered(self):
        """Layer anchor and position are the canvas center."""
        layer = convert("M0 0 L10 10", LottieConfig(width=100, height=50))["layers"][0]
        assert layer["ty"] == 4
        assert layer["ks"]["p"]["k"] == [50, 25, 0]
        assert layer["ks"]["a"]["k"] == [50, 25, 0]
        assert (layer["ip"], layer["op"]) == (0, 24)

    def test_group_contents(self):
        """The group holds the shapes in order, then stroke and transform."""
        group = convert("M0 0 L1 1 M2 2 L3 3 M4 4 L5 5")["layers"][0]["shapes"][0]
        assert group["ty"] == "gr"
        assert [item["ty"] for item in group["it"]] == ["sh", "sh", "sh", "st", "tr"]
        assert [item["nm"] for item in group["it"][:3]] == ["Path 1", "Path 2", "Path 3"]
        assert group["np"] == 4

    def test_empty_path(self):
        """Empty path data still gives a valid envelope."""
        group = convert("")["layers"][0]["shapes"][0]
        assert [item["ty"] for item in group["it"]] == ["st", "tr"]

    def test_json_serializable(self):
        """The document contains only JSON types."""
        document = convert("M0 0 C10 0 10 10 20 10 S30 0 40 10 Z")
        assert json.loads(json.dumps(document, allow_nan=False)) == document

    def test_repeated_serialization_is_identical(self):
        """Serializing the same subpaths twice gives equal, unshared results."""
        subpaths = parse_svg_path("M0.123456 0 C10 0 10 10 0 10 Z")
        first = AvLottieSerializer.build_document(subpaths)
        second = AvLottieSerializer.build_document(subpaths)
        assert first == second
        assert first["layers"][0] is not second["layers"][0]

    def test_shapes_only_option(self):
        """convert() returns the listing when shapes_only is set."""
        path_string = "M0 0 L10 0 L10 10 L0 0 Z"
        assert convert(path_string, LottieConfig(shapes_only=True)) == convert_shapes_only(path_string)

    def test_strict_option(self):
        """convert() honours the strict option."""
        with pytest.raises(UnsupportedCommandError):
            convert("M0 0 Q1 1 2 2", LottieConfig(strict=True))


class TestShapesOnly:
    """Tests for the shapes-only listing."""

    def test_listing(self):
        """Each entry names the subpath and reports its vertex count."""
        shapes = convert_shapes_only("M0 0 L10 0 L10 10 L0 0 Z M20 20 L30 30")
        assert [(s["name"], s["vertices"], s["closed"]) for s in shapes] == [
            ("Path 1", 3, True),
            ("Path 2", 2, False),
        ]
        assert shapes[0]["shape"] == {
            "v": [[0.0, 0.0], [10.0, 0.0], [10.0, 10.0]],
            "i": [[0.0, 0.0], [0.0, 0.0], [0.0, 0.0]],
            "o": [[0.0, 0.0], [0.0, 0.0], [0.0, 0.0]],
            "c": True,
        }

    def test_listing_matches_document_payload(self):
        """The listing payload equals the shape item geometry of the document."""
        path_string = "M1.11111 2 C3 4 5 6 7.77777 8 s1 1 2 2"
        document = convert(path_string)
        shapes = convert_shapes_only(path_string)
        assert shapes[0]["shape"] == document["layers"][0]["shapes"][0]["it"][0]["ks"]["k"]

    def test_out_of_range_number_gives_valid_json(self):
        """Overflowing literals never reach the output as infinity."""
        shapes = convert_shapes_only("M0 0 L1e400 0 L1 1")
        assert shapes[0]["shape"]["v"] == [[0.0, 0.0], [1.0, 1.0]]
        json.dumps(shapes, allow_nan=False)

    def test_unsupported_command_is_dropped(self):
        """The quadratic segment is missing from the output."""
        shapes = convert_shapes_only("M0 0 L10 0 Q15 5 20 0 L20 10 Z")
        assert shapes[0]["vertices"] == 3
