# tests/test_response.py

from core.response import ErrorCode, Response


def test_succeed_defaults():
    response = Response.succeed(detail="done", data={"records": []})

    assert response.success
    assert response.status_code == 200
    assert response.error is None
    assert response.data == {"records": []}
    assert str(response) == "Success: done"


def test_fail_defaults():
    response = Response.fail(detail="missing", error=ErrorCode.NOT_FOUND)

    assert not response.success
    assert response.status_code == 400
    assert response.data == {}
    assert str(response) == "Error: NOT_FOUND missing"


def test_error_codes_are_the_ones_the_roster_returns():
    assert {code.value for code in ErrorCode} == {
        "NOT_FOUND",
        "INVALID_INPUT",
        "VALIDATION_FAILED",
    }
