"""
Location provider boundary.

The tracker only depends on the permission enum and a push interface for
samples. PushLocationProvider is the in-process implementation used by the
HTTP layer (clients POST samples) and by file replay.
"""
from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Protocol

from motra.tracking.samples import GeoSample

logger = logging.getLogger(__name__)

SampleHandler = Callable[[GeoSample], None]
PermissionHandler = Callable[["PermissionStatus"], None]


class PermissionStatus(str, Enum):
    undetermined = "undetermined"
    denied = "denied"
    authorized = "authorized"


class LocationProvider(Protocol):
    def permission_status(self) -> PermissionStatus: ...

    def request_permission(self, on_change: PermissionHandler) -> None:
        """Ask for permission; ``on_change`` is called once with the decision."""
        ...

    def start_updates(self, on_sample: SampleHandler) -> None: ...

    def stop_updates(self) -> None: ...


class PushLocationProvider:
    """Location provider fed from outside through ``push`` and ``set_permission``.

    Samples pushed while nobody is subscribed are discarded, like a device
    that is not currently delivering updates.
    """

    def __init__(self, status: PermissionStatus = PermissionStatus.undetermined):
        self._status = status
        self._lock = threading.Lock()
        self._on_sample: SampleHandler | None = None
        self._waiting: list[PermissionHandler] = []

    def permission_status(self) -> PermissionStatus:
        return self._status

    def request_permission(self, on_change: PermissionHandler) -> None:
        with self._lock:
            if self._status == PermissionStatus.undetermined:
                self._waiting.append(on_change)
                return
            status = self._status
        on_change(status)

    def set_permission(self, status: PermissionStatus) -> None:
        with self._lock:
            self._status = status
            if status == PermissionStatus.undetermined:
                return
            waiting, self._waiting = self._waiting, []
        logger.info("Location permission changed: %s", status.value)
        for handler in waiting:
            handler(status)

    def start_updates(self, on_sample: SampleHandler) -> None:
        with self._lock:
            self._on_sample = on_sample

    def stop_updates(self) -> None:
        with self._lock:
            self._on_sample = None

    @property
    def is_updating(self) -> bool:
        return self._on_sample is not None

    def push(self, sample: GeoSample) -> bool:
        """Deliver a sample to the subscriber. Returns False if nobody listens."""
        handler = self._on_sample
        if handler is None:
            logger.debug("No subscriber, discarding sample at %s", sample.timestamp_ms)
            return False
        handler(sample)
        return True
