# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Physician Calendar)
# Description: Wire schemas of the REST appointment store.
# ============================================================================
"""REST payload schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ScheduledAppointmentPayload(BaseModel):
    """Appointment record as returned by ``/appointment/doctor/*`` endpoints."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | str | None = None
    doctor_id: int | str | None = Field(None, alias="doctorId")
    patient_id: int | str | None = Field(None, alias="patientId")
    patient_name: str | None = Field(None, alias="patientName")
    appointment_date: str = Field(..., alias="appointmentDate")
    appointment_status: str | None = Field(None, alias="appointmentStatus")
    appointment_type: str | None = Field(None, alias="appointmentType")


class OpenSlotPayload(BaseModel):
    """Body of ``POST /appointment/doctor/schedule``."""

    appointment_date: str
