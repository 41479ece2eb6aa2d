"""Exceptions raised by remote service adapters."""


class RemoteServiceError(Exception):
    """Raised when a call to the remote transcoding service fails.

    Failures while polling job status are treated as transient by the job
    monitor and retried.

    Attributes:
        operation: The service operation that failed (e.g., "GetJob").
    """

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")


class SubmissionError(RemoteServiceError):
    """Raised when the service rejects a job submission.

    Submission is attempted once; this error is fatal for the job.
    """

    def __init__(self, message: str) -> None:
        super().__init__("CreateJob", message)
