#!/usr/bin/env python3
"""
Drive one live tracking session against a running Motra API.

Grants location permission, starts a session, streams samples along a
straight line at the given pace (one per second, ticking in real time unless
--fast), pauses halfway for a few seconds, then stops and saves the workout.

Usage examples:
  - Local dev server:
      uvicorn motra.main:app --app-dir backend --port 8000 &
      python scripts/simulate_session.py --base-url http://localhost:8000 --km 1
  - Quick run without waiting between samples:
      python scripts/simulate_session.py --base-url http://localhost:8000 --km 0.5 --fast
"""

from __future__ import annotations

import argparse
import time

import requests

METERS_PER_DEG_LAT = 111_195.0


def call(base_url: str, method: str, path: str, payload=None) -> dict:
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    r = requests.request(method, url, json=payload, timeout=15)
    if r.status_code >= 300:
        raise RuntimeError(f"{path} -> HTTP {r.status_code}: {r.text}")
    return r.json()


def main() -> None:
    ap = argparse.ArgumentParser(description="Simulate a live workout against the tracking API")
    ap.add_argument("--base-url", required=True, help="API base URL (e.g., http://localhost:8000)")
    ap.add_argument("--km", type=float, default=1.0, help="Distance to cover")
    ap.add_argument("--pace", type=float, default=6.0, help="Pace in min/km")
    ap.add_argument("--type", default="running", choices=["running", "cycling", "walking", "hiking"])
    ap.add_argument("--fast", action="store_true", help="Do not sleep between samples")
    args = ap.parse_args()

    base_url = args.base_url
    speed = 1000.0 / (args.pace * 60.0)
    n = int(args.km * 1000.0 / speed)

    call(base_url, "PUT", "tracking/permission", {"status": "authorized"})
    started = call(base_url, "POST", "tracking/start")
    print(f"start: {started['outcome']}")

    lat, lon = 37.5285, 126.9327
    now_ms = int(time.time() * 1000)
    for i in range(n + 1):
        sample = {
            "latitude": lat + (i * speed) / METERS_PER_DEG_LAT,
            "longitude": lon,
            "altitude_m": 10.0,
            "timestamp_ms": now_ms + i * 1000,
            "speed_mps": speed,
        }
        call(base_url, "POST", "tracking/samples", [sample])
        if i == n // 2:
            call(base_url, "POST", "tracking/pause")
            if not args.fast:
                time.sleep(3)
            call(base_url, "POST", "tracking/resume")
        if not args.fast:
            time.sleep(1)
        if i % 30 == 0:
            stats = call(base_url, "GET", "tracking/stats")
            print(f"{stats['elapsed']}  {stats['distance_km']:.2f} km  pace {stats['pace']}")

    call(base_url, "POST", "tracking/stop")
    workout = call(base_url, "POST", "tracking/finish", {"exercise_type": args.type, "notes": "simulated"})
    print(f"saved {workout['id']}: {workout['distance_km']} km in {workout['duration']} ({workout['pace']}/km)")
    call(base_url, "POST", "tracking/reset")


if __name__ == "__main__":
    main()
