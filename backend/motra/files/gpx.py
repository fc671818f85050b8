"""GPX import/export for workout routes (gpxpy)."""

from __future__ import annotations

import gpxpy
import gpxpy.gpx

from motra.core.exceptions import FileImportError
from motra.core.time_utils import datetime_to_epoch_ms
from motra.tracking.records import WorkoutRecord
from motra.tracking.samples import GeoSample


def parse_gpx_samples(text: str) -> list[GeoSample]:
    """Track points of every track/segment as GeoSamples.

    Points without a timestamp cannot be replayed and are rejected; a missing
    elevation becomes 0 and a missing speed the unknown sentinel.
    """
    try:
        gpx = gpxpy.parse(text)
    except gpxpy.gpx.GPXException as exc:
        raise FileImportError(f"Invalid GPX file: {exc}") from exc

    samples: list[GeoSample] = []
    for track in gpx.tracks:
        for segment in track.segments:
            for p in segment.points:
                if p.time is None:
                    raise FileImportError("GPX track points must carry timestamps")
                samples.append(
                    GeoSample(
                        latitude=p.latitude,
                        longitude=p.longitude,
                        altitude_m=float(p.elevation) if p.elevation is not None else 0.0,
                        timestamp_ms=datetime_to_epoch_ms(p.time),
                        speed_mps=float(p.speed) if p.speed is not None else -1.0,
                    )
                )
    if not samples:
        raise FileImportError("GPX file has no track points")
    return samples


def workout_to_gpx(record: WorkoutRecord) -> str:
    """GPX 1.1 document with the workout route as a single track segment."""
    gpx = gpxpy.gpx.GPX()
    gpx.creator = "motra"
    track = gpxpy.gpx.GPXTrack(
        name=f"{record.exercise_type.value} {record.start_time.date().isoformat()}",
        description=record.notes,
    )
    track.type = record.exercise_type.value
    gpx.tracks.append(track)

    segment = gpxpy.gpx.GPXTrackSegment()
    track.segments.append(segment)
    for p in record.route:
        segment.points.append(
            gpxpy.gpx.GPXTrackPoint(
                p.latitude,
                p.longitude,
                elevation=p.altitude_m,
                time=p.sample.timestamp,
                speed=p.speed_mps if p.speed_mps >= 0 else None,
            )
        )
    return gpx.to_xml()
