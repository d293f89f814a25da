"""
Tests for simulation timestamps and result messages.
"""

import math

import pytest

from actuator_motion.messages import (
    ResultMessage,
    ResultStatus,
    SimTime,
    make_response,
    simulation_now,
)


class TestSimulationNow:
    """Seconds are split into integral seconds and nanoseconds."""

    def test_whole_seconds(self):
        assert simulation_now(12.0) == SimTime(sec=12, nanosec=0)

    def test_fractional_seconds(self):
        stamp = simulation_now(3.25)
        assert stamp.sec == 3
        assert stamp.nanosec == 250_000_000

    def test_fraction_is_rounded_to_nearest_nanosecond(self):
        """1.3 is stored as 1.29999...; the stamp must not lose a nanosecond."""
        assert simulation_now(1.3) == SimTime(sec=1, nanosec=300_000_000)

    def test_rounding_carries_into_seconds(self):
        stamp = simulation_now(1.9999999999)
        assert stamp == SimTime(sec=2, nanosec=0)
        assert 0 <= stamp.nanosec < 1_000_000_000

    def test_to_seconds(self):
        assert simulation_now(7.5).to_seconds() == pytest.approx(7.5)

    @pytest.mark.parametrize("t", [-0.1, math.nan, math.inf])
    def test_invalid_time(self, t):
        with pytest.raises(ValueError):
            simulation_now(t)


class TestMakeResponse:
    """Result messages carry the caller's fields and a simulation stamp."""

    def test_fields(self):
        response = make_response(ResultStatus.COMPLETED, 4.5, "req-1", "lift_1")
        assert isinstance(response, ResultMessage)
        assert response.time == SimTime(sec=4, nanosec=500_000_000)
        assert response.request_guid == "req-1"
        assert response.source_guid == "lift_1"
        assert response.status == ResultStatus.COMPLETED

    def test_opaque_status_accepted(self):
        assert make_response(200, 0.0, "", "door").status == 200

    @pytest.mark.parametrize("status", [-1, 256, 1.0, True])
    def test_invalid_status(self, status):
        with pytest.raises(ValueError):
            make_response(status, 0.0, "", "door")

    def test_custom_message_type(self):
        class DoorState:
            def __init__(self, time, request_guid, source_guid, status):
                self.fields = (time, request_guid, source_guid, status)

        response = make_response(1, 2.0, "r", "door_1", message_type=DoorState)
        assert response.fields == (SimTime(2, 0), "r", "door_1", 1)


class TestResultMessageJson:
    """JSON encoding used to deliver results to protocols."""

    def test_decode_encoded(self):
        original = make_response(ResultStatus.ABORTED, 1.5, "req-9", "base_2")
        decoded = ResultMessage.from_json(original.to_json())
        assert decoded.time == original.time
        assert decoded.request_guid == "req-9"
        assert decoded.source_guid == "base_2"
        assert decoded.status == ResultStatus.ABORTED

    def test_wrong_type_rejected(self):
        with pytest.raises(ValueError):
            ResultMessage.from_json('{"type": "AgentState"}')
