"""Unit tests for ActionResult to HTTP translation."""

import pytest
from fastapi import HTTPException

from infrastructure.http_errors import raise_for_failure
from shared_kernel.results import ActionResult, ErrorCode


class TestRaiseForFailure:
    def test_success_returns_data(self):
        assert raise_for_failure(ActionResult.success({"id": "1"})) == {"id": "1"}

    @pytest.mark.parametrize(
        "code,status",
        [
            (ErrorCode.VALIDATION, 400),
            (ErrorCode.FORBIDDEN, 403),
            (ErrorCode.NOT_FOUND, 404),
            (ErrorCode.CONFLICT, 409),
            (ErrorCode.PERSISTENCE, 500),
        ],
    )
    def test_failure_maps_code_to_status(self, code: ErrorCode, status: int):
        with pytest.raises(HTTPException) as exc_info:
            raise_for_failure(ActionResult.failure(code, "nope"))

        assert exc_info.value.status_code == status
        assert exc_info.value.detail == "nope"
