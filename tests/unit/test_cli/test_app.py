"""Unit tests for the geofence CLI."""

from __future__ import annotations

import json
import re
from pathlib import Path

import pytest
from typer.testing import CliRunner

from geofence.cli.app import app

runner = CliRunner()

EIFFEL = {"type": "Point", "coordinates": [2.2945, 48.8584]}
OPERA_BLOCK = {
    "type": "Polygon",
    "coordinates": [[[2.31, 48.87], [2.314, 48.87], [2.314, 48.868], [2.31, 48.868], [2.31, 48.87]]],
}


def _strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep CLI settings independent of the developer environment."""
    for key in ("LOG_LEVEL", "LOG_DIR", "LOG_JSON", "DEFAULT_RADIUS_METERS", "COORDINATE_PRECISION"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def places_file(tmp_path: Path) -> Path:
    """A places file with one Point and one Polygon."""
    path = tmp_path / "places.json"
    path.write_text(json.dumps([EIFFEL, OPERA_BLOCK]), encoding="utf-8")
    return path


class TestCheck:
    """Tests for the check command."""

    def test_inside_polygon(self, places_file: Path) -> None:
        """A point inside a polygon exits 0."""
        result = runner.invoke(app, ["check", "48.8692,2.312", "--places", str(places_file)])
        assert result.exit_code == 0
        assert "inside" in result.output
        assert "48.869200,2.312000" in result.output

    def test_outside_exits_one(self, places_file: Path) -> None:
        """A point outside every place exits 1."""
        result = runner.invoke(app, ["check", "48.871,2.312", "--places", str(places_file)])
        assert result.exit_code == 1
        assert "outside" in result.output

    def test_radius_option(self, places_file: Path) -> None:
        """--radius widens Point places."""
        args = ["check", "48.8585,2.2945", "--places", str(places_file)]
        assert runner.invoke(app, args).exit_code == 1
        assert runner.invoke(app, [*args, "--radius", "12"]).exit_code == 0
        assert runner.invoke(app, [*args, "--radius", "5"]).exit_code == 1

    def test_default_radius_from_settings(self, places_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """DEFAULT_RADIUS_METERS applies when --radius is omitted."""
        monkeypatch.setenv("DEFAULT_RADIUS_METERS", "12")
        result = runner.invoke(app, ["check", "48.8585,2.2945", "--places", str(places_file)])
        assert result.exit_code == 0

    def test_json_output(self, places_file: Path) -> None:
        """--json emits a PlaceCheckResponse."""
        result = runner.invoke(
            app, ["check", "48.8585;2.2945", "--places", str(places_file), "--radius", "12", "--json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data == {
            "point": {"latitude": 48.8585, "longitude": 2.2945},
            "radius_meters": 12.0,
            "places_count": 2,
            "inside": True,
        }

    def test_invalid_places_are_skipped(self, tmp_path: Path) -> None:
        """Malformed entries in the places file do not abort the check."""
        path = tmp_path / "mixed.json"
        path.write_text(json.dumps([{"type": "Point"}, "garbage", EIFFEL]), encoding="utf-8")
        result = runner.invoke(app, ["check", "48.8584,2.2945", "--places", str(path)])
        assert result.exit_code == 0

    def test_invalid_point_exits_two(self, places_file: Path) -> None:
        """An unparseable point exits 2."""
        result = runner.invoke(app, ["check", "invalid", "--places", str(places_file)])
        assert result.exit_code == 2
        assert "Invalid coordinates" in result.output

    def test_missing_places_file_exits_two(self, tmp_path: Path) -> None:
        """A missing places file exits 2."""
        result = runner.invoke(app, ["check", "0,0", "--places", str(tmp_path / "nope.json")])
        assert result.exit_code == 2
        assert "Cannot read places file" in result.output

    def test_places_file_not_array_exits_two(self, tmp_path: Path) -> None:
        """A places file that is not a JSON array exits 2."""
        path = tmp_path / "object.json"
        path.write_text(json.dumps(EIFFEL), encoding="utf-8")
        result = runner.invoke(app, ["check", "0,0", "--places", str(path)])
        assert result.exit_code == 2
        assert "JSON array" in result.output

    def test_non_utf8_places_file_exits_two(self, tmp_path: Path) -> None:
        """A places file that is not UTF-8 is bad input, not an outside verdict."""
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe[]")
        result = runner.invoke(app, ["check", "0,0", "--places", str(path)])
        assert result.exit_code == 2
        assert "Cannot read places file" in result.output

    def test_unreadable_json_places_file_exits_two(self, tmp_path: Path) -> None:
        """Truncated or over-nested JSON exits 2."""
        truncated = tmp_path / "truncated.json"
        truncated.write_text("[{", encoding="utf-8")
        nested = tmp_path / "nested.json"
        nested.write_text("[" * 200_000 + "]" * 200_000, encoding="utf-8")
        for path in (truncated, nested):
            result = runner.invoke(app, ["check", "0,0", "--places", str(path)])
            assert result.exit_code == 2

    def test_negative_radius_rejected(self, places_file: Path) -> None:
        """--radius must be non-negative."""
        result = runner.invoke(app, ["check", "0,0", "--places", str(places_file), "--radius", "-1"])
        assert result.exit_code == 2


class TestDistance:
    """Tests for the distance command."""

    def test_plain_output(self) -> None:
        """One degree of longitude on the equator is about 111 km."""
        result = runner.invoke(app, ["distance", "0,0", "0,1"])
        assert result.exit_code == 0
        assert result.output.strip().startswith("111194.9")
        assert "mi)" in result.output

    def test_json_output(self) -> None:
        """--json emits a DistanceResponse."""
        result = runner.invoke(app, ["distance", "48.8584,2.2945", "48.8584,2.2945", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["meters"] == 0.0
        assert data["miles"] == 0.0
        assert data["origin"] == {"latitude": 48.8584, "longitude": 2.2945}

    def test_invalid_destination(self) -> None:
        """An unparseable destination exits 2."""
        result = runner.invoke(app, ["distance", "0,0", "north"])
        assert result.exit_code == 2


class TestNormalize:
    """Tests for the normalize command."""

    def test_point(self) -> None:
        """A Point is printed latitude first."""
        result = runner.invoke(app, ["normalize", json.dumps(EIFFEL)])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"type": "Point", "point": {"latitude": 48.8584, "longitude": 2.2945}}

    def test_polygon(self) -> None:
        """A Polygon is printed ring by ring in (lat, lon) order."""
        result = runner.invoke(app, ["normalize", json.dumps(OPERA_BLOCK)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["type"] == "Polygon"
        assert len(data["rings"]) == 1
        assert data["rings"][0][0] == {"latitude": 48.87, "longitude": 2.31}
        assert len(data["rings"][0]) == 5

    def test_invalid_payload(self) -> None:
        """Anything other than a valid Point or Polygon exits 2."""
        result = runner.invoke(app, ["normalize", '{"type":"LineString","coordinates":[[0,0],[1,1]]}'])
        assert result.exit_code == 2
        assert "not a valid GeoJSON" in _strip_ansi(result.output)


class TestFormat:
    """Tests for the format command."""

    def test_default_precision(self) -> None:
        """Six decimals by default."""
        result = runner.invoke(app, ["format", "48.858400", "2.294500"])
        assert result.exit_code == 0
        assert result.output.strip() == "48.858400,2.294500"

    def test_precision_option(self) -> None:
        """--precision controls rounding."""
        result = runner.invoke(app, ["format", "--precision", "2", "--", "-33.868820", "151.209296"])
        assert result.exit_code == 0
        assert result.output.strip() == "-33.87,151.21"

    def test_precision_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """COORDINATE_PRECISION applies when --precision is omitted."""
        monkeypatch.setenv("COORDINATE_PRECISION", "1")
        result = runner.invoke(app, ["format", "48.8584", "2.2945"])
        assert result.exit_code == 0
        assert result.output.strip() == "48.9,2.3"

    def test_high_precision(self) -> None:
        """Precision above the default decimal context still renders."""
        result = runner.invoke(app, ["format", "180", "180", "--precision", "26"])
        assert result.exit_code == 0
        zeros = "0" * 26
        assert result.output.strip() == f"180.{zeros},180.{zeros}"

    def test_non_finite_exits_two(self) -> None:
        """Infinite or NaN input is rejected with exit code 2."""
        result = runner.invoke(app, ["format", "inf", "0"])
        assert result.exit_code == 2
        assert "Cannot format coordinates" in result.output
