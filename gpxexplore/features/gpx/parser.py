"""
GPX Parser

Streams GPX bytes through an event-driven XML parser and builds the
GPXFile model. Bad input never raises: unreadable or malformed
documents degrade to an empty (or partially filled) GPXFile.
"""

import logging
import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

import gpxpy.gpx
from gpxpy.gpxfield import parse_time

from gpxexplore.config import settings
from gpxexplore.features.gpx.models import (
    GPXFile,
    Point,
    Track,
    TrackSegment,
    Waypoint,
)

logger = logging.getLogger(__name__)


class ParserState(str, Enum):
    """Which GPX element the parser is currently inside."""
    IDLE = "idle"
    METADATA = "metadata"
    TRACK = "track"
    SEGMENT = "segment"
    POINT = "point"
    WAYPOINT = "waypoint"


# State entered when a container element closes
_PARENT_STATE = {
    ParserState.POINT: ParserState.SEGMENT,
    ParserState.SEGMENT: ParserState.TRACK,
    ParserState.TRACK: ParserState.IDLE,
    ParserState.METADATA: ParserState.IDLE,
    ParserState.WAYPOINT: ParserState.IDLE,
}

# Element that opens each state
_STATE_ELEMENT = {
    ParserState.METADATA: "metadata",
    ParserState.TRACK: "trk",
    ParserState.SEGMENT: "trkseg",
    ParserState.POINT: "trkpt",
    ParserState.WAYPOINT: "wpt",
}


def _local_name(tag: str) -> str:
    """Strip the XML namespace: '{http://...}trkpt' -> 'trkpt'."""
    return tag.rsplit("}", 1)[-1]


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        result = float(value)
    except ValueError:
        return None
    # float() accepts "nan" and "inf"
    if not math.isfinite(result):
        return None
    return result


def _parse_timestamp(value: str) -> Optional[datetime]:
    """Decode an ISO-8601 timestamp; naive values are taken as UTC."""
    try:
        parsed = parse_time(value)
    except (gpxpy.gpx.GPXException, ValueError):
        return None
    if parsed is not None and parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class _PointScratch:
    """Fields of the trkpt/wpt being accumulated."""
    latitude: float
    longitude: float
    elevation: Optional[float] = None
    timestamp: Optional[datetime] = None
    name: str = ""
    description: Optional[str] = None
    symbol: Optional[str] = None

    @classmethod
    def from_attributes(cls, attrib: Dict[str, str]) -> "_PointScratch":
        lat = _parse_float(attrib.get("lat"))
        lon = _parse_float(attrib.get("lon"))
        return cls(
            latitude=lat if lat is not None else 0.0,
            longitude=lon if lon is not None else 0.0,
        )


@dataclass
class _TrackScratch:
    """Fields of the trk being accumulated."""
    name: str = ""
    type: str = ""
    date: Optional[datetime] = None
    segments: List[TrackSegment] = field(default_factory=list)


@dataclass
class _ParseState:
    """
    All mutable state of one parse invocation.

    `state` is the innermost GPX container we are in and `state_depth`
    the element depth that opened it; child fields are only read when
    they are direct children of that container.
    """
    state: ParserState = ParserState.IDLE
    state_depth: int = 0
    depth: int = 0
    metadata_date: Optional[datetime] = None
    track: Optional[_TrackScratch] = None
    segment_points: List[Point] = field(default_factory=list)
    point: Optional[_PointScratch] = None
    tracks: List[Track] = field(default_factory=list)
    waypoints: List[Waypoint] = field(default_factory=list)


class _GPXEventHandler:
    """Turns start/end element events into model objects."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or datetime.now(timezone.utc)
        self.ps = _ParseState()

    def _enter(self, state: ParserState) -> None:
        self.ps.state = state
        self.ps.state_depth = self.ps.depth

    def start(self, tag: str, attrib: Dict[str, str]) -> None:
        ps = self.ps
        ps.depth += 1
        is_direct_child = ps.depth == ps.state_depth + 1

        if tag == "trk":
            # Tracks are never interleaved
            self._finalize_track()
            ps.track = _TrackScratch()
            self._enter(ParserState.TRACK)
        elif tag == "metadata" and ps.state == ParserState.IDLE:
            self._enter(ParserState.METADATA)
        elif tag == "wpt" and ps.state == ParserState.IDLE:
            ps.point = _PointScratch.from_attributes(attrib)
            self._enter(ParserState.WAYPOINT)
        elif tag == "trkseg" and ps.state == ParserState.TRACK and is_direct_child:
            ps.segment_points = []
            self._enter(ParserState.SEGMENT)
        elif tag == "trkpt" and ps.state == ParserState.SEGMENT and is_direct_child:
            ps.point = _PointScratch.from_attributes(attrib)
            self._enter(ParserState.POINT)

    def end(self, tag: str, text: Optional[str]) -> None:
        ps = self.ps
        value = text.strip() if text else ""

        if ps.depth == ps.state_depth and tag == _STATE_ELEMENT.get(ps.state):
            self._close_container()
        elif ps.depth == ps.state_depth + 1 and value:
            self._read_field(tag, value)

        if ps.depth == 1:
            # End of the root element
            self._finalize_track()
            ps.state = ParserState.IDLE
            ps.state_depth = 0

        ps.depth -= 1

    def _read_field(self, tag: str, value: str) -> None:
        ps = self.ps

        if ps.state in (ParserState.POINT, ParserState.WAYPOINT):
            if tag == "ele":
                ps.point.elevation = _parse_float(value)
            elif tag == "time":
                ps.point.timestamp = _parse_timestamp(value)
            elif ps.state == ParserState.WAYPOINT:
                if tag == "name":
                    ps.point.name = value
                elif tag == "desc":
                    ps.point.description = value
                elif tag == "sym":
                    ps.point.symbol = value
        elif ps.state == ParserState.TRACK:
            if tag == "name":
                ps.track.name = value
            elif tag == "type":
                ps.track.type = value
            elif tag == "time":
                ps.track.date = _parse_timestamp(value) or ps.track.date
        elif ps.state == ParserState.METADATA:
            if tag == "time":
                ps.metadata_date = _parse_timestamp(value) or ps.metadata_date

    def _close_container(self) -> None:
        ps = self.ps
        closing = ps.state

        if closing == ParserState.POINT:
            p = ps.point
            ps.segment_points.append(Point(
                latitude=p.latitude,
                longitude=p.longitude,
                elevation=p.elevation if p.elevation is not None else 0.0,
                timestamp=p.timestamp,
            ))
            ps.point = None
        elif closing == ParserState.WAYPOINT:
            p = ps.point
            ps.waypoints.append(Waypoint(
                latitude=p.latitude,
                longitude=p.longitude,
                name=p.name or "POI",
                description=p.description,
                elevation=p.elevation,
                timestamp=p.timestamp,
                symbol=p.symbol,
            ))
            ps.point = None
        elif closing == ParserState.SEGMENT:
            if ps.segment_points:
                # Real track index is assigned when the track is finalized
                ps.track.segments.append(TrackSegment(points=tuple(ps.segment_points)))
            ps.segment_points = []
        elif closing == ParserState.TRACK:
            self._finalize_track()

        ps.state = _PARENT_STATE[closing]
        ps.state_depth -= 1

    def _finalize_track(self) -> None:
        ps = self.ps
        track = ps.track
        if track is None:
            return

        index = len(ps.tracks)
        segments = tuple(
            replace(segment, track_index=index) for segment in track.segments
        )
        first_timestamp = next(
            (p.timestamp for s in segments for p in s.points if p.timestamp),
            None
        )

        ps.tracks.append(Track(
            name=track.name or f"Track {index + 1}",
            type=track.type,
            date=track.date or ps.metadata_date or first_timestamp or self.now,
            segments=segments,
        ))
        ps.track = None

    def result(self, filename: str, complete: bool) -> GPXFile:
        """
        Build the GPXFile.

        An incomplete parse keeps only tracks and waypoints whose
        elements were fully closed.
        """
        if complete:
            self._finalize_track()
        return GPXFile(
            filename=filename,
            tracks=tuple(self.ps.tracks),
            waypoints=tuple(self.ps.waypoints),
        )


def _dispatch(pull: ET.XMLPullParser, handler: _GPXEventHandler) -> None:
    for event, elem in pull.read_events():
        tag = _local_name(elem.tag)
        if event == "start":
            handler.start(tag, elem.attrib)
        else:
            handler.end(tag, elem.text)
            if tag in ("trkpt", "wpt"):
                elem.clear()


class GPXParser:
    """Parser for GPX 1.0/1.1 documents."""

    @staticmethod
    def parse_bytes(
        content: bytes,
        filename: str = "",
        now: Optional[datetime] = None
    ) -> GPXFile:
        """
        Parse GPX content.

        Args:
            content: GPX file content as bytes
            filename: Name recorded on the resulting GPXFile
            now: Clock used for track dates when the file carries no
                time at all (defaults to the current UTC time)

        Returns:
            GPXFile; empty when nothing could be parsed
        """
        handler = _GPXEventHandler(now=now)
        pull = ET.XMLPullParser(events=("start", "end"))
        chunk_size = settings.read_chunk_size

        try:
            for offset in range(0, len(content), chunk_size):
                pull.feed(content[offset:offset + chunk_size])
                _dispatch(pull, handler)
            pull.close()
            _dispatch(pull, handler)
        except (ET.ParseError, LookupError) as e:
            position = getattr(e, "position", None)
            if position:
                logger.error(
                    f"Failed to parse GPX data {filename!r}: {e} "
                    f"(line {position[0]}, column {position[1]})"
                )
            else:
                logger.error(f"Failed to parse GPX data {filename!r}: {e}")
            if b"<gpx" not in content[:4096]:
                logger.warning(f"{filename!r} does not appear to be a GPX file (missing <gpx> tag)")
            return handler.result(filename, complete=False)

        result = handler.result(filename, complete=True)

        if result.is_empty:
            logger.warning(f"GPX file {filename!r} parsed but no tracks or waypoints found")
        elif result.tracks and not any(s.points for s in result.all_segments):
            logger.warning(f"GPX file {filename!r} has {len(result.tracks)} tracks but no location points")

        logger.info(
            f"Parsed GPX file {filename!r}: {len(result.tracks)} tracks, "
            f"{len(result.all_segments)} segments, {len(result.waypoints)} waypoints"
        )
        return result

    @staticmethod
    def parse_file(path: Union[str, Path]) -> GPXFile:
        """
        Read and parse a GPX file.

        Args:
            path: Path to the GPX file

        Returns:
            GPXFile named after the file stem; empty if the file
            cannot be read or parsed
        """
        path = Path(path)
        filename = path.stem

        try:
            content = path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read GPX file {path}: {e}")
            return GPXFile(filename=filename)

        return GPXParser.parse_bytes(content, filename=filename)
