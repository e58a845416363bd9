# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Physician Calendar)
# Description: httpx adapter implementing IAppointmentStore.
# ============================================================================
"""REST Appointment Store Client.

Async client for the physician appointment backend.

Endpoints:
    - GET /appointment/doctor/scheduled - Every appointment of the physician
    - POST /appointment/doctor/schedule - Open a slot ({"appointment_date": ...})
    - PUT /appointment/doctor/complete?appointmentId=N - Mark as completed
"""

from __future__ import annotations

import logging
from typing import Any, NoReturn

import httpx

from agenda.config.settings import get_settings

from ....domain.entities import Appointment
from ....domain.value_objects.local_datetime import is_valid_local_datetime
from .exceptions import (
    InvalidRemoteRequestError,
    InvalidRemoteResponseError,
    RemoteStoreConnectionError,
    RemoteStoreHTTPError,
    RemoteStoreTimeoutError,
)
from .mapper import AppointmentMapper
from .schemas import OpenSlotPayload

logger = logging.getLogger(__name__)

SCHEDULED_PATH = "/appointment/doctor/scheduled"
SCHEDULE_PATH = "/appointment/doctor/schedule"
COMPLETE_PATH = "/appointment/doctor/complete"


class RemoteAppointmentStoreClient:
    """
    Async HTTP client for the appointment backend.

    Environment Variables:
        REMOTE_STORE_BASE_URL: Base URL of the backend
        REMOTE_STORE_TOKEN: Bearer token of the authenticated physician
        REMOTE_STORE_TIMEOUT: Request timeout in seconds (default: 30)

    Example:
        async with RemoteAppointmentStoreClient() as client:
            appointments = await client.fetch_scheduled()
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Backend base URL (defaults to env REMOTE_STORE_BASE_URL)
            token: Bearer token (defaults to env REMOTE_STORE_TOKEN)
            timeout_seconds: Request timeout (defaults to env REMOTE_STORE_TIMEOUT)
            transport: Optional httpx transport, used by tests
        """
        settings = get_settings()
        self.base_url = (base_url or settings.REMOTE_STORE_BASE_URL or "").rstrip("/")
        self.token = token if token is not None else settings.REMOTE_STORE_TOKEN
        self.timeout = timeout_seconds or settings.REMOTE_STORE_TIMEOUT or 30
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> RemoteAppointmentStoreClient:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.close()

    async def open(self) -> None:
        if self._client is not None:
            return
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            headers=headers,
            transport=self._transport,
        )

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("Client not initialized. Use 'async with RemoteAppointmentStoreClient() as client:'")
        return self._client

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = self._get_client()
        try:
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            self._handle_http_error(e)
        except httpx.TimeoutException as e:
            raise RemoteStoreTimeoutError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise RemoteStoreConnectionError(
                "Network error: Unable to reach the server. Please check your connection and try again."
            ) from e

    # =========================================================================
    # IAppointmentStore
    # =========================================================================

    async def fetch_scheduled(self) -> list[Appointment]:
        """
        Fetch every appointment of the authenticated physician.

        Records that cannot be mapped are logged and skipped.

        Raises:
            RemoteStoreError: On transport or HTTP errors
        """
        response = await self._request("GET", SCHEDULED_PATH)
        if not response.content:
            return []
        try:
            data = response.json()
        except ValueError as e:
            raise InvalidRemoteResponseError(f"Appointment list is not valid JSON: {e}") from e

        if isinstance(data, dict):
            data = [data]
        elif not isinstance(data, list):
            return []

        appointments = AppointmentMapper.map_many(data)
        logger.debug(f"Fetched {len(appointments)} of {len(data)} appointment records")
        return appointments

    async def create_slot(self, local_datetime: str) -> None:
        """
        Open a slot at a naive local ``YYYY-MM-DDTHH:mm:ss`` timestamp.

        Raises:
            InvalidRemoteRequestError: When the timestamp is malformed (nothing is sent)
            RemoteStoreError: On transport or HTTP errors
        """
        if not is_valid_local_datetime(local_datetime):
            raise InvalidRemoteRequestError(f'Invalid datetime format. Expected "YYYY-MM-DDTHH:mm:ss", got: {local_datetime}')

        payload = OpenSlotPayload(appointment_date=local_datetime)
        try:
            await self._request("POST", SCHEDULE_PATH, json=payload.model_dump())
        except RemoteStoreHTTPError as e:
            raise RemoteStoreHTTPError(
                e.status_code or 0,
                f"Failed to schedule slot at {local_datetime}: {e.error_message}",
                error_code=e.error_code,
            ) from e
        logger.info(f"Slot opened at {local_datetime}")

    async def mark_completed(self, appointment_id: str) -> Appointment:
        """
        Mark an appointment as completed and return the server's view of it.

        Raises:
            InvalidRemoteRequestError: When the id is not a positive integer (nothing is sent)
            RemoteStoreError: On transport or HTTP errors, or an unusable echo
        """
        try:
            numeric_id = int(str(appointment_id).strip())
        except ValueError:
            numeric_id = 0
        if numeric_id <= 0:
            raise InvalidRemoteRequestError(f"Invalid appointment ID: {appointment_id}. ID must be a positive number.")

        response = await self._request("PUT", COMPLETE_PATH, params={"appointmentId": numeric_id})
        try:
            data = response.json() if response.content else None
        except ValueError as e:
            raise InvalidRemoteResponseError(f"Completion response is not valid JSON: {e}") from e

        if not isinstance(data, dict) or not data:
            raise InvalidRemoteResponseError("Invalid response from server: No data received")
        if not data.get("patientId"):
            raise InvalidRemoteResponseError(
                "Cannot complete an available slot. Only appointments with patients can be marked as completed."
            )

        try:
            return AppointmentMapper.from_raw(data)
        except ValueError as e:
            raise InvalidRemoteResponseError(f"Failed to process completed appointment data: {e}") from e

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _extract_message(response: httpx.Response) -> str | None:
        try:
            body = response.json()
        except ValueError:
            return response.text or None
        if isinstance(body, dict):
            return body.get("message") or body.get("error")
        if isinstance(body, str):
            return body
        return None

    def _handle_http_error(self, error: httpx.HTTPStatusError) -> NoReturn:
        """
        Handle HTTP errors and raise appropriate exception.

        Raises:
            RemoteStoreHTTPError: Always
        """
        status = error.response.status_code
        detail = self._extract_message(error.response)

        error_mapping = {
            400: ("INVALID_REQUEST", f"Invalid request: {detail or 'Invalid request format'}"),
            401: ("UNAUTHORIZED", "Unauthorized: Please log in again"),
            403: ("FORBIDDEN", "Forbidden: You do not have permission to perform this action"),
            404: ("NOT_FOUND", "Not found: The requested appointment does not exist"),
            500: ("SERVER_ERROR", "Server error: Please try again later or contact support"),
        }

        if status in error_mapping:
            code, message = error_mapping[status]
            raise RemoteStoreHTTPError(status, message, error_code=code) from error

        raise RemoteStoreHTTPError(status, detail or f"Request failed (Status: {status})") from error
