"""Pydantic models for remote job state.

The MediaConvert GetJob/CreateJob responses are parsed into RemoteJob so
that the monitor works with typed, validated state instead of raw dicts.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vtj.domain.enums import JobStatus


class RemoteJob(BaseModel):
    """Snapshot of a remote job as reported by the service."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str = Field(alias="Id")
    status: JobStatus = Field(default=JobStatus.UNKNOWN, alias="Status")
    current_phase: str | None = Field(default=None, alias="CurrentPhase")
    percent_complete: int | None = Field(default=None, alias="JobPercentComplete")
    error_code: int | None = Field(default=None, alias="ErrorCode")
    error_message: str | None = Field(default=None, alias="ErrorMessage")

    # Job settings as echoed back by the service
    settings: dict[str, Any] = Field(default_factory=dict, alias="Settings")

    @field_validator("status", mode="before")
    @classmethod
    def _map_status(cls, value: Any) -> JobStatus:
        if isinstance(value, JobStatus):
            return value
        return JobStatus.from_remote(value)

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "RemoteJob":
        """Parse the "Job" object of a GetJob/CreateJob response."""
        return cls.model_validate(response["Job"])
