"""Result messages exchanged between actuators and the protocols commanding them.

The status carried by a result is an opaque small integer whose meaning is
defined by the calling protocol. `ResultStatus` lists the values emitted by
`ActuatorMotionHandler`.

Author: Laércio Lucchesi
Date: October 18, 2026
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import IntEnum


class ResultStatus(IntEnum):
    ACKNOWLEDGED = 1
    COMPLETED = 2
    ABORTED = 3


@dataclass(frozen=True)
class SimTime:
    """Simulation-domain timestamp split into seconds and nanoseconds."""

    sec: int
    nanosec: int

    def to_seconds(self) -> float:
        return self.sec + self.nanosec * 1e-9


def simulation_now(t: float) -> SimTime:
    """Stamp a simulation time given in seconds (fraction rounded to ns)."""
    if not math.isfinite(t) or t < 0:
        raise ValueError(f"simulation time must be finite and >= 0, got {t!r}")
    sec = int(t)
    nanosec = round((t - sec) * 1e9)
    if nanosec >= 1_000_000_000:
        sec += 1
        nanosec -= 1_000_000_000
    return SimTime(sec=sec, nanosec=nanosec)


class ResultMessage:
    """Outcome of a request, stamped with simulation time."""

    TYPE = "ResultMessage"

    def __init__(self, time: SimTime, request_guid: str, source_guid: str, status: int):
        self.time = time
        self.request_guid = request_guid
        self.source_guid = source_guid
        self.status = status

    def __repr__(self) -> str:
        return (
            f"ResultMessage(time={self.time!r}, request_guid={self.request_guid!r}, "
            f"source_guid={self.source_guid!r}, status={self.status!r})"
        )

    def to_json(self) -> str:
        return json.dumps(
            {
                "type": self.TYPE,
                "time": {"sec": self.time.sec, "nanosec": self.time.nanosec},
                "request_guid": self.request_guid,
                "source_guid": self.source_guid,
                "status": int(self.status),
            }
        )

    @staticmethod
    def from_json(json_str: str) -> ResultMessage:
        message_dict = json.loads(json_str)
        message_type = message_dict.get("type")
        if message_type != ResultMessage.TYPE:
            raise ValueError(f"Unexpected message type: {message_type!r}")
        stamp = message_dict["time"]
        return ResultMessage(
            time=SimTime(sec=stamp["sec"], nanosec=stamp["nanosec"]),
            request_guid=message_dict["request_guid"],
            source_guid=message_dict["source_guid"],
            status=message_dict["status"],
        )


def make_response(
    status: int,
    sim_time: float,
    request_guid: str,
    guid: str,
    message_type=ResultMessage,
):
    """Build a result message of `message_type` stamped at `sim_time`.

    `message_type` must accept the keyword arguments ``time``,
    ``request_guid``, ``source_guid`` and ``status``.
    """
    if isinstance(status, bool) or not isinstance(status, int) or not 0 <= status <= 255:
        raise ValueError(f"status must be an integer in 0..255, got {status!r}")
    return message_type(
        time=simulation_now(sim_time),
        request_guid=request_guid,
        source_guid=guid,
        status=status,
    )
