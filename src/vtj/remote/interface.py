"""RemoteJobService interface for transcode job submission and polling."""

from typing import Any, Protocol

from vtj.remote.models import RemoteJob


class RemoteJobService(Protocol):
    """Protocol for remote transcoding services."""

    def create_job(self, description: dict[str, Any]) -> str:
        """Submit a job description.

        Returns:
            The service-assigned job id.

        Raises:
            SubmissionError: If the service rejects the job.
        """
        ...

    def get_job(self, job_id: str) -> RemoteJob:
        """Fetch the current state of a job.

        Raises:
            RemoteServiceError: If the state cannot be fetched.
        """
        ...
