"""
Tests for the streaming GPX parser.

Covers the happy path, field defaults, track index assignment and the
degrade-to-empty policy for unreadable or malformed input.
"""

import logging
import math
from datetime import datetime, timezone

import pytest

from gpxexplore.config import settings
from gpxexplore.features.elevation import map_visualization, process_segment
from gpxexplore.features.gpx.models import GPXFile, NOMINAL_ACCURACY_M
from gpxexplore.features.gpx.parser import GPXParser, ParserState


FIXED_NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

SIMPLE_GPX = (
    b'<gpx><trk><trkseg>'
    b'<trkpt lat="1" lon="1"><ele>10</ele></trkpt>'
    b'<trkpt lat="1" lon="1.001"><ele>50</ele></trkpt>'
    b'</trkseg></trk></gpx>'
)

FULL_GPX = b"""<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <metadata>
    <name>Weekend</name>
    <time>2024-05-04T07:00:00Z</time>
  </metadata>
  <wpt lat="43.1" lon="76.9">
    <ele>1800</ele>
    <name>Trailhead Parking</name>
    <desc>Lower lot</desc>
    <sym>Parking</sym>
  </wpt>
  <wpt lat="43.2" lon="76.8"/>
  <trk>
    <name>Morning Run</name>
    <type>running</type>
    <trkseg>
      <trkpt lat="43.000" lon="76.000"><ele>1000</ele><time>2024-05-04T08:00:00Z</time></trkpt>
      <trkpt lat="43.001" lon="76.000"><ele>1005</ele><time>2024-05-04T08:01:00Z</time></trkpt>
      <trkpt lat="43.002" lon="76.000"><ele>1010</ele><time>2024-05-04T08:02:00Z</time></trkpt>
    </trkseg>
    <trkseg>
      <trkpt lat="43.003" lon="76.000"><ele>1012</ele></trkpt>
    </trkseg>
  </trk>
  <trk>
    <type>hiking</type>
    <time>2024-05-05T06:00:00Z</time>
    <trkseg>
      <trkpt lat="44.000" lon="77.000"><ele>2000</ele></trkpt>
      <trkpt lat="44.001" lon="77.000"><ele>2010</ele></trkpt>
    </trkseg>
  </trk>
</gpx>
"""


@pytest.fixture
def full_file():
    """Parse the full namespaced document."""
    return GPXParser.parse_bytes(FULL_GPX, filename="weekend", now=FIXED_NOW)


# =============================================================================
# Test Basic Parsing
# =============================================================================

class TestBasicParsing:
    """Tests for well-formed documents."""

    def test_simple_scenario(self):
        """Two points in one segment of one unnamed track."""
        gpx = GPXParser.parse_bytes(SIMPLE_GPX, now=FIXED_NOW)

        assert len(gpx.tracks) == 1
        track = gpx.tracks[0]
        assert track.name == "Track 1"
        assert len(track.segments) == 1
        assert [p.elevation for p in track.segments[0].points] == [10.0, 50.0]

    def test_filename_recorded(self):
        gpx = GPXParser.parse_bytes(SIMPLE_GPX, filename="ride", now=FIXED_NOW)
        assert gpx.filename == "ride"

    def test_point_coordinates(self):
        gpx = GPXParser.parse_bytes(SIMPLE_GPX, now=FIXED_NOW)
        points = gpx.tracks[0].segments[0].points
        assert (points[1].latitude, points[1].longitude) == (1.0, 1.001)

    def test_point_count_and_order_preserved(self, full_file):
        first = full_file.tracks[0].segments[0].points
        assert len(first) == 3
        assert [p.latitude for p in first] == [43.000, 43.001, 43.002]

    def test_namespaced_document(self, full_file):
        """GPX 1.1 default namespace is stripped from element names."""
        assert len(full_file.tracks) == 2
        assert len(full_file.waypoints) == 2

    def test_namespace_and_plain_identical(self):
        plain = FULL_GPX.replace(b' xmlns="http://www.topografix.com/GPX/1/1"', b"")
        a = GPXParser.parse_bytes(FULL_GPX, filename="x", now=FIXED_NOW)
        b = GPXParser.parse_bytes(plain, filename="x", now=FIXED_NOW)
        assert a == b

    def test_track_name_and_type(self, full_file):
        track = full_file.tracks[0]
        assert track.name == "Morning Run"
        assert track.type == "running"

    def test_default_track_name_uses_position(self, full_file):
        assert full_file.tracks[1].name == "Track 2"

    def test_timestamps_parsed_as_utc(self, full_file):
        point = full_file.tracks[0].segments[0].points[0]
        assert point.timestamp == datetime(2024, 5, 4, 8, 0, tzinfo=timezone.utc)

    def test_accuracy_placeholders(self, full_file):
        point = full_file.tracks[0].segments[0].points[0]
        assert point.horizontal_accuracy == NOMINAL_ACCURACY_M
        assert point.vertical_accuracy == NOMINAL_ACCURACY_M

    def test_small_chunks_give_same_result(self, monkeypatch):
        """Splitting the input across many feeds does not change the result."""
        expected = GPXParser.parse_bytes(FULL_GPX, now=FIXED_NOW)
        monkeypatch.setattr(settings, "read_chunk_size", 7)
        assert GPXParser.parse_bytes(FULL_GPX, now=FIXED_NOW) == expected

    def test_deterministic(self):
        a = GPXParser.parse_bytes(FULL_GPX, filename="w", now=FIXED_NOW)
        b = GPXParser.parse_bytes(FULL_GPX, filename="w", now=FIXED_NOW)
        assert a == b


# =============================================================================
# Test Track Index Assignment
# =============================================================================

class TestTrackIndex:
    """Segments carry the position of their track."""

    def test_indices_match_track_position(self, full_file):
        for i, track in enumerate(full_file.tracks):
            assert track.segments
            assert all(s.track_index == i for s in track.segments)

    def test_many_tracks(self):
        body = b"".join(
            b'<trk><trkseg><trkpt lat="0" lon="%d"/></trkseg>'
            b'<trkseg><trkpt lat="1" lon="%d"/></trkseg></trk>' % (i, i)
            for i in range(5)
        )
        gpx = GPXParser.parse_bytes(b"<gpx>" + body + b"</gpx>", now=FIXED_NOW)
        assert len(gpx.tracks) == 5
        assert [s.track_index for s in gpx.all_segments] == [0, 0, 1, 1, 2, 2, 3, 3, 4, 4]


# =============================================================================
# Test Defaults
# =============================================================================

class TestFieldDefaults:
    """Missing or unparseable optional fields are defaulted, never errors."""

    def test_missing_elevation_is_zero(self):
        gpx = GPXParser.parse_bytes(
            b'<gpx><trk><trkseg><trkpt lat="1" lon="2"/></trkseg></trk></gpx>',
            now=FIXED_NOW
        )
        assert gpx.tracks[0].segments[0].points[0].elevation == 0.0

    def test_bad_coordinates_default_to_zero(self):
        gpx = GPXParser.parse_bytes(
            b'<gpx><trk><trkseg><trkpt lat="north" lon=""><ele>abc</ele></trkpt>'
            b'<trkpt><ele>5</ele></trkpt></trkseg></trk></gpx>',
            now=FIXED_NOW
        )
        points = gpx.tracks[0].segments[0].points
        assert (points[0].latitude, points[0].longitude, points[0].elevation) == (0.0, 0.0, 0.0)
        assert (points[1].latitude, points[1].longitude, points[1].elevation) == (0.0, 0.0, 5.0)

    def test_missing_timestamp_is_none(self):
        gpx = GPXParser.parse_bytes(SIMPLE_GPX, now=FIXED_NOW)
        assert gpx.tracks[0].segments[0].points[0].timestamp is None

    def test_unparseable_timestamp_is_none(self):
        gpx = GPXParser.parse_bytes(
            b'<gpx><trk><trkseg><trkpt lat="1" lon="2"><time>yesterday</time></trkpt>'
            b'</trkseg></trk></gpx>',
            now=FIXED_NOW
        )
        assert gpx.tracks[0].segments[0].points[0].timestamp is None

    def test_non_finite_numbers_default(self):
        """float() accepts nan and inf; they are treated as unparseable."""
        gpx = GPXParser.parse_bytes(
            b'<gpx><wpt lat="1" lon="2"><ele>NaN</ele></wpt>'
            b'<trk><trkseg><trkpt lat="inf" lon="-Infinity"><ele>nan</ele></trkpt>'
            b'</trkseg></trk></gpx>',
            now=FIXED_NOW
        )
        point = gpx.tracks[0].segments[0].points[0]
        assert (point.latitude, point.longitude, point.elevation) == (0.0, 0.0, 0.0)
        assert gpx.waypoints[0].elevation is None

    def test_nan_elevation_keeps_analysis_finite(self):
        points = b"".join(
            b'<trkpt lat="%.3f" lon="0"><ele>%s</ele></trkpt>' % (i * 0.001, ele)
            for i, ele in enumerate([b"10", b"nan", b"30", b"40", b"50", b"60", b"70"])
        )
        gpx = GPXParser.parse_bytes(
            b"<gpx><trk><trkseg>" + points + b"</trkseg></trk></gpx>", now=FIXED_NOW
        )
        segment = gpx.all_segments[0]
        analysis = process_segment(segment)
        result = map_visualization(analysis, "gradient")

        assert segment.points[1].elevation == 0.0
        assert all(math.isfinite(p.grade) for p in analysis.points)
        assert all(0.0 <= v <= 1.0 for v in result.values)
        assert math.isfinite(segment.distance_m)

    def test_waypoint_defaults(self, full_file):
        wpt = full_file.waypoints[1]
        assert wpt.name == "POI"
        assert wpt.description is None
        assert wpt.elevation is None
        assert wpt.symbol is None

    def test_waypoint_fields(self, full_file):
        wpt = full_file.waypoints[0]
        assert wpt.name == "Trailhead Parking"
        assert wpt.description == "Lower lot"
        assert wpt.elevation == 1800.0
        assert wpt.symbol == "Parking"

    def test_empty_segment_skipped(self):
        gpx = GPXParser.parse_bytes(
            b'<gpx><trk><name>Empty</name><trkseg></trkseg></trk></gpx>',
            now=FIXED_NOW
        )
        assert len(gpx.tracks) == 1
        assert gpx.tracks[0].segments == ()


# =============================================================================
# Test Track Date Fallback
# =============================================================================

class TestTrackDate:
    """Track date falls back through track, metadata, first point, now."""

    def test_own_time_wins(self, full_file):
        assert full_file.tracks[1].date == datetime(2024, 5, 5, 6, 0, tzinfo=timezone.utc)

    def test_metadata_time(self, full_file):
        assert full_file.tracks[0].date == datetime(2024, 5, 4, 7, 0, tzinfo=timezone.utc)

    def test_first_point_time(self):
        gpx = GPXParser.parse_bytes(
            b'<gpx><trk><trkseg><trkpt lat="1" lon="2"/>'
            b'<trkpt lat="1" lon="2"><time>2023-03-01T10:00:00Z</time></trkpt>'
            b'</trkseg></trk></gpx>',
            now=FIXED_NOW
        )
        assert gpx.tracks[0].date == datetime(2023, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_now_when_no_time_anywhere(self):
        gpx = GPXParser.parse_bytes(SIMPLE_GPX, now=FIXED_NOW)
        assert gpx.tracks[0].date == FIXED_NOW


# =============================================================================
# Test Degrade To Empty
# =============================================================================

class TestMalformedInput:
    """Bad input yields an empty or partial GPXFile, never an exception."""

    def test_empty_gpx(self):
        gpx = GPXParser.parse_bytes(b"<gpx></gpx>", filename="empty")
        assert gpx.tracks == ()
        assert gpx.waypoints == ()
        assert gpx.is_empty

    def test_empty_bytes(self):
        assert GPXParser.parse_bytes(b"").is_empty

    def test_not_xml(self, caplog):
        with caplog.at_level(logging.WARNING):
            gpx = GPXParser.parse_bytes(b"this is not xml at all", filename="junk")
        assert gpx.is_empty
        assert gpx.filename == "junk"
        assert "missing <gpx> tag" in caplog.text

    def test_unclosed_root_keeps_closed_tracks(self):
        content = (
            b'<gpx><wpt lat="5" lon="6"><name>Camp</name></wpt>'
            b'<trk><trkseg><trkpt lat="1" lon="1"/></trkseg></trk>'
            b'<trk><trkseg><trkpt lat="2" lon="2"/>'
        )
        gpx = GPXParser.parse_bytes(content, now=FIXED_NOW)
        assert len(gpx.tracks) == 1
        assert gpx.tracks[0].segments[0].points[0].latitude == 1.0
        assert [w.name for w in gpx.waypoints] == ["Camp"]

    def test_mismatched_tag_stops_parsing(self, caplog):
        content = (
            b'<gpx><trk><trkseg><trkpt lat="1" lon="1"/></trkseg></trk>'
            b'<trk><trkseg></trk></gpx>'
            b'<wpt lat="1" lon="1"/>'
        )
        with caplog.at_level(logging.ERROR):
            gpx = GPXParser.parse_bytes(content, now=FIXED_NOW)
        assert len(gpx.tracks) == 1
        assert gpx.waypoints == ()
        assert "line 1" in caplog.text

    def test_invalid_utf8_keeps_closed_waypoint(self):
        content = (
            b'<gpx><wpt lat="1" lon="2"><name>A</name></wpt>'
            b'<trk><name>\xff\xfe</name><trkseg><trkpt lat="1" lon="1"/></trkseg></trk></gpx>'
        )
        gpx = GPXParser.parse_bytes(content, now=FIXED_NOW)
        assert gpx.tracks == ()
        assert [w.name for w in gpx.waypoints] == ["A"]

    def test_unknown_encoding(self):
        content = b'<?xml version="1.0" encoding="no-such-codec"?><gpx></gpx>'
        assert GPXParser.parse_bytes(content).is_empty


# =============================================================================
# Test parse_file
# =============================================================================

class TestParseFile:
    """Tests for reading from disk."""

    def test_reads_file(self, tmp_path):
        path = tmp_path / "morning.gpx"
        path.write_bytes(SIMPLE_GPX)
        gpx = GPXParser.parse_file(path)
        assert gpx.filename == "morning"
        assert len(gpx.tracks) == 1

    def test_missing_file(self, tmp_path):
        gpx = GPXParser.parse_file(tmp_path / "nowhere.gpx")
        assert isinstance(gpx, GPXFile)
        assert gpx.is_empty
        assert gpx.filename == "nowhere"

    def test_accepts_str_path(self, tmp_path):
        path = tmp_path / "str.gpx"
        path.write_bytes(b"<gpx></gpx>")
        assert GPXParser.parse_file(str(path)).filename == "str"


class TestParserState:

    def test_states(self):
        assert {s.value for s in ParserState} == {
            "idle", "metadata", "track", "segment", "point", "waypoint"
        }
