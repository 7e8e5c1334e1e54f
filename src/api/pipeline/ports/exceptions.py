"""Port-level exceptions for the pipeline bounded context."""


class StaleCandidateVersionError(Exception):
    """Raised when a move was based on an outdated candidate version.

    Another session moved the candidate first; the caller must reload.
    """

    def __init__(self, candidate_id: str, expected_version: int):
        super().__init__(
            f"Candidate {candidate_id} changed since version {expected_version}"
        )
        self.candidate_id = candidate_id
        self.expected_version = expected_version


class CandidateNotFoundError(Exception):
    """Raised when a job candidate does not exist in the caller's tenant."""

    pass


class DuplicateCandidateError(Exception):
    """Raised when a member is already in the job's pipeline."""

    pass


class StageOrderRejectedError(Exception):
    """Raised when the stored stage order could not be rewritten."""

    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.code = code
