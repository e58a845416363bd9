# ============================================================================
# Tests for the REST appointment store client
# ============================================================================
"""Unit tests for RemoteAppointmentStoreClient and AppointmentMapper using httpx.MockTransport."""

import json

import httpx
import pytest

from agenda.domains.physician_calendar.application import IAppointmentStore
from agenda.domains.physician_calendar.domain.value_objects import AppointmentStatus
from agenda.domains.physician_calendar.infrastructure.external.rest import (
    AppointmentMapper,
    InvalidRemoteRequestError,
    InvalidRemoteResponseError,
    RemoteAppointmentStoreClient,
    RemoteStoreConnectionError,
    RemoteStoreHTTPError,
    RemoteStoreTimeoutError,
    format_appointment_type,
)

BASE_URL = "http://agenda.test/api"

BOOKED = {
    "id": 12,
    "doctorId": 7,
    "patientId": 42,
    "patientName": "  Jane Doe ",
    "appointmentDate": "2099-03-10T09:00:00",
    "appointmentStatus": "Scheduled",
    "appointmentType": "follow-up",
}
OPEN_SLOT = {
    "id": 13,
    "doctorId": 7,
    "patientId": None,
    "appointmentDate": "2099-03-10T10:00:00",
    "appointmentStatus": "scheduled",
}


class Recorder:
    """MockTransport handler that records requests and replays a fixed response."""

    def __init__(self, response: httpx.Response | Exception):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def make_client(handler: Recorder, token: str | None = "secret") -> RemoteAppointmentStoreClient:
    return RemoteAppointmentStoreClient(
        base_url=BASE_URL,
        token=token,
        timeout_seconds=5,
        transport=httpx.MockTransport(handler),
    )


class TestFetchScheduled:
    """Tests for GET /appointment/doctor/scheduled."""

    @pytest.mark.asyncio
    async def test_maps_records(self) -> None:
        """Should map booked visits and open slots."""
        handler = Recorder(httpx.Response(200, json=[BOOKED, OPEN_SLOT]))

        async with make_client(handler) as client:
            appointments = await client.fetch_scheduled()

        request = handler.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/api/appointment/doctor/scheduled"
        assert request.headers["Authorization"] == "Bearer secret"

        booked, slot = appointments
        assert booked.id == "12"
        assert booked.doctor_id == "7"
        assert booked.patient_id == "42"
        assert booked.patient_name == "Jane Doe"
        assert booked.appointment_date == "2099-03-10T09:00:00"
        assert booked.status == AppointmentStatus.SCHEDULED
        assert booked.appointment_type == "Follow Up"
        assert booked.is_open_slot is False
        assert slot.patient_id == "0"
        assert slot.patient_name == "Available Slot"
        assert slot.is_open_slot is True

    @pytest.mark.asyncio
    async def test_no_token_no_header(self) -> None:
        """Should not send an Authorization header without a token."""
        handler = Recorder(httpx.Response(200, json=[]))

        async with make_client(handler, token="") as client:
            await client.fetch_scheduled()

        assert "Authorization" not in handler.requests[0].headers

    @pytest.mark.asyncio
    async def test_single_object_is_wrapped(self) -> None:
        """Should accept a lone object as a one-item list."""
        async with make_client(Recorder(httpx.Response(200, json=BOOKED))) as client:
            appointments = await client.fetch_scheduled()
        assert [a.id for a in appointments] == ["12"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"", b'"nothing"', b"42"])
    async def test_empty_or_scalar_body(self, body) -> None:
        """Should return an empty list for empty or non-list bodies."""
        async with make_client(Recorder(httpx.Response(200, content=body))) as client:
            assert await client.fetch_scheduled() == []

    @pytest.mark.asyncio
    async def test_bad_records_are_skipped(self) -> None:
        """Should skip records without id or date and keep the rest."""
        body = [BOOKED, {"appointmentDate": "2099-03-10T11:00:00"}, {"id": 99}, "junk"]
        async with make_client(Recorder(httpx.Response(200, json=body))) as client:
            appointments = await client.fetch_scheduled()
        assert [a.id for a in appointments] == ["12"]

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        """Should raise InvalidRemoteResponseError for unreadable bodies."""
        async with make_client(Recorder(httpx.Response(200, content=b"{not json"))) as client:
            with pytest.raises(InvalidRemoteResponseError):
                await client.fetch_scheduled()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "code"),
        [(400, "INVALID_REQUEST"), (401, "UNAUTHORIZED"), (403, "FORBIDDEN"), (404, "NOT_FOUND"), (500, "SERVER_ERROR"), (503, "HTTP_503")],
    )
    async def test_http_errors(self, status, code) -> None:
        """Should map status codes to error codes."""
        async with make_client(Recorder(httpx.Response(status, json={"message": "nope"}))) as client:
            with pytest.raises(RemoteStoreHTTPError) as exc_info:
                await client.fetch_scheduled()
        assert exc_info.value.error_code == code
        assert exc_info.value.status_code == status

    @pytest.mark.asyncio
    async def test_bad_request_carries_server_message(self) -> None:
        """Should include the server's message for 400 responses."""
        async with make_client(Recorder(httpx.Response(400, json={"message": "date in the past"}))) as client:
            with pytest.raises(RemoteStoreHTTPError) as exc_info:
                await client.fetch_scheduled()
        assert exc_info.value.error_message == "Invalid request: date in the past"

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        """Should raise RemoteStoreTimeoutError on transport timeouts."""
        async with make_client(Recorder(httpx.ReadTimeout("slow"))) as client:
            with pytest.raises(RemoteStoreTimeoutError) as exc_info:
                await client.fetch_scheduled()
        assert exc_info.value.error_code == "TIMEOUT"

    @pytest.mark.asyncio
    async def test_connection_error(self) -> None:
        """Should raise RemoteStoreConnectionError when the server is unreachable."""
        async with make_client(Recorder(httpx.ConnectError("refused"))) as client:
            with pytest.raises(RemoteStoreConnectionError):
                await client.fetch_scheduled()

    @pytest.mark.asyncio
    async def test_requires_open_client(self) -> None:
        """Should refuse requests before the client is opened."""
        client = make_client(Recorder(httpx.Response(200, json=[])))
        with pytest.raises(RuntimeError):
            await client.fetch_scheduled()


class TestCreateSlot:
    """Tests for POST /appointment/doctor/schedule."""

    @pytest.mark.asyncio
    async def test_posts_naive_timestamp(self) -> None:
        """Should send the timestamp verbatim."""
        handler = Recorder(httpx.Response(201, json={"id": 77}))

        async with make_client(handler) as client:
            await client.create_slot("2099-03-10T09:00:00")

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/appointment/doctor/schedule"
        assert json.loads(request.content) == {"appointment_date": "2099-03-10T09:00:00"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["2099-03-10T09:00", "2099-03-10T09:00:00Z", "tomorrow"])
    async def test_invalid_timestamp_is_not_sent(self, value) -> None:
        """Should reject malformed timestamps locally."""
        handler = Recorder(httpx.Response(201))

        async with make_client(handler) as client:
            with pytest.raises(InvalidRemoteRequestError):
                await client.create_slot(value)

        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_http_error_names_the_slot(self) -> None:
        """Should prefix the error with the slot timestamp."""
        async with make_client(Recorder(httpx.Response(500))) as client:
            with pytest.raises(RemoteStoreHTTPError) as exc_info:
                await client.create_slot("2099-03-10T09:00:00")
        assert exc_info.value.error_code == "SERVER_ERROR"
        assert exc_info.value.error_message.startswith("Failed to schedule slot at 2099-03-10T09:00:00")


class TestMarkCompleted:
    """Tests for PUT /appointment/doctor/complete."""

    @pytest.mark.asyncio
    async def test_returns_echo(self) -> None:
        """Should send the numeric id and map the echo."""
        handler = Recorder(httpx.Response(200, json={**BOOKED, "appointmentStatus": "Completed"}))

        async with make_client(handler) as client:
            echo = await client.mark_completed("12")

        request = handler.requests[0]
        assert request.method == "PUT"
        assert request.url.path == "/api/appointment/doctor/complete"
        assert request.url.params["appointmentId"] == "12"
        assert echo.id == "12"
        assert echo.status == AppointmentStatus.COMPLETED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("appointment_id", ["0", "-3", "abc", ""])
    async def test_invalid_id_is_not_sent(self, appointment_id) -> None:
        """Should require a positive numeric id."""
        handler = Recorder(httpx.Response(200, json=BOOKED))

        async with make_client(handler) as client:
            with pytest.raises(InvalidRemoteRequestError):
                await client.mark_completed(appointment_id)

        assert handler.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"", b"{}", b"[]", json.dumps(OPEN_SLOT).encode()])
    async def test_unusable_echo(self, body) -> None:
        """Should reject empty echoes and echoes without a patient."""
        async with make_client(Recorder(httpx.Response(200, content=body))) as client:
            with pytest.raises(InvalidRemoteResponseError):
                await client.mark_completed("13")


class TestAppointmentMapper:
    """Tests for record mapping helpers."""

    def test_unknown_status_defaults_to_scheduled(self) -> None:
        """Should fall back to scheduled."""
        appointment = AppointmentMapper.from_raw({**BOOKED, "appointmentStatus": "weird"})
        assert appointment.status == AppointmentStatus.SCHEDULED

    def test_patient_name_fallback(self) -> None:
        """Should label booked visits without a name by patient id."""
        appointment = AppointmentMapper.from_raw({**BOOKED, "patientName": " "})
        assert appointment.patient_name == "Patient #42"

    def test_accepts_snake_case(self) -> None:
        """Should accept field names as well as aliases."""
        appointment = AppointmentMapper.from_raw({"id": 5, "appointment_date": "2099-03-10T09:00:00", "patient_id": 3})
        assert appointment.patient_id == "3"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("follow-up", "Follow Up"), ("first_visit", "First Visit"), ("CHECKUP", "Checkup"), ("  ", None), (None, None)],
    )
    def test_format_appointment_type(self, raw, expected) -> None:
        """Should title-case appointment types."""
        assert format_appointment_type(raw) == expected

    def test_client_satisfies_port(self) -> None:
        """Should implement the appointment store port."""
        assert isinstance(RemoteAppointmentStoreClient(base_url=BASE_URL), IAppointmentStore)
