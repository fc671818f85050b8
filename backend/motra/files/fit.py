"""FIT import (fitparse): device record messages -> GeoSamples."""

from __future__ import annotations

import io

from fitparse import FitFile
from fitparse.utils import FitParseError

from motra.core.constants import SEMICIRCLES_PER_DEGREE
from motra.core.exceptions import FileImportError
from motra.core.time_utils import datetime_to_epoch_ms
from motra.tracking.samples import GeoSample


def _semicircles_to_degrees(val):
    return val / SEMICIRCLES_PER_DEGREE if val is not None else None


def parse_fit_samples(data: bytes) -> list[GeoSample]:
    """Positioned 'record' messages as GeoSamples.

    Records without a position (treadmill, GPS warm-up) are skipped. Enhanced
    altitude/speed fields win over the plain ones when both are present.
    """
    try:
        ff = FitFile(io.BytesIO(data))
        records = [{f.name: f.value for f in record} for record in ff.get_messages("record")]
    except FitParseError as exc:
        raise FileImportError(f"Invalid FIT file: {exc}") from exc

    samples: list[GeoSample] = []
    for fields in records:
        lat = _semicircles_to_degrees(fields.get("position_lat"))
        lon = _semicircles_to_degrees(fields.get("position_long"))
        ts = fields.get("timestamp")
        if lat is None or lon is None or ts is None:
            continue
        ele = fields.get("enhanced_altitude")
        if ele is None:
            ele = fields.get("altitude")
        speed = fields.get("enhanced_speed")  # m/s
        if speed is None:
            speed = fields.get("speed")
        samples.append(
            GeoSample(
                latitude=lat,
                longitude=lon,
                altitude_m=float(ele) if ele is not None else 0.0,
                # FIT timestamps are naive UTC
                timestamp_ms=datetime_to_epoch_ms(ts),
                speed_mps=float(speed) if speed is not None else -1.0,
            )
        )
    if not samples:
        raise FileImportError("FIT file has no positioned records")
    return samples
