"""Tests for the response handling shared by both user clients."""
import pytest

from user_api.core.exceptions import TransportFailure
from user_api.core.models import User
from user_api.core.result import Failure, FailureKind, Found, NotFound, Ok
from user_api.core.users.base import (
    COULD_NOT_CREATE_USER_ERROR_MESSAGE,
    COULD_NOT_FETCH_USER_ERROR_MESSAGE,
    send_request,
    to_outcome,
)
from user_api.core.users.transport import TransportResponse


# ============================================================================
# to_outcome
# ============================================================================

def test_to_outcome_found(alice, alice_json):
    outcome = to_outcome(TransportResponse(200, alice_json), COULD_NOT_FETCH_USER_ERROR_MESSAGE)
    assert outcome == Found(alice)


def test_to_outcome_not_found_for_lookups():
    outcome = to_outcome(TransportResponse(404, ""), COULD_NOT_FETCH_USER_ERROR_MESSAGE)
    assert outcome == NotFound()


def test_to_outcome_404_is_unexpected_when_not_found_disallowed():
    outcome = to_outcome(TransportResponse(404, "missing"), COULD_NOT_CREATE_USER_ERROR_MESSAGE,
                         allow_not_found=False)

    assert isinstance(outcome, Failure)
    assert outcome.kind is FailureKind.UNEXPECTED_STATUS
    assert outcome.status_code == 404
    assert outcome.message == "Could not create user: \nStatus Code:404\n:Response message:missing"


def test_to_outcome_unexpected_status_keeps_body():
    outcome = to_outcome(TransportResponse(503, "maintenance"), COULD_NOT_FETCH_USER_ERROR_MESSAGE)

    assert outcome.kind is FailureKind.UNEXPECTED_STATUS
    assert outcome.status_code == 503
    assert outcome.body == "maintenance"


def test_to_outcome_decode_error():
    outcome = to_outcome(TransportResponse(200, "{{}"), COULD_NOT_FETCH_USER_ERROR_MESSAGE)

    assert isinstance(outcome, Failure)
    assert outcome.kind is FailureKind.DECODE_ERROR
    assert outcome.cause is not None


def test_to_outcome_empty_roles():
    body = '{"username": "bob", "institution": "inst-2", "roles": []}'
    outcome = to_outcome(TransportResponse(200, body), COULD_NOT_FETCH_USER_ERROR_MESSAGE)
    assert outcome == Found(User(username="bob", institution="inst-2"))


# ============================================================================
# send_request
# ============================================================================

def test_send_request_wraps_response(stub_transport):
    transport = stub_transport(status_code=200, body="{}")

    result = send_request(transport, "POST", "http://example.org/users", headers={"Authorization": "k"}, body=b"{}")

    assert result == Ok(TransportResponse(200, "{}"))
    assert transport.calls[0]["headers"] == {"Authorization": "k"}
    assert transport.calls[0]["body"] == b"{}"


def test_send_request_keeps_transport_failure(stub_transport, connection_error):
    result = send_request(stub_transport(error=connection_error), "GET", "http://example.org/users/alice")

    assert result.kind is FailureKind.TRANSPORT_FAILURE
    assert result.cause is connection_error


@pytest.mark.parametrize("error", [
    ConnectionError("connection refused"),
    ConnectionResetError("reset by peer"),
    TimeoutError("timed out"),
    OSError("network unreachable"),
])
def test_send_request_maps_socket_errors_to_transport_failure(stub_transport, error):
    result = send_request(stub_transport(error=error), "GET", "http://example.org/users/alice")

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.TRANSPORT_FAILURE
    assert isinstance(result.cause, TransportFailure)
    assert result.cause.url == "http://example.org/users/alice"
    assert result.cause.__cause__ is error


def test_send_request_propagates_programming_errors(stub_transport):
    with pytest.raises(TypeError):
        send_request(stub_transport(error=TypeError("bad call")), "GET", "http://example.org/users/alice")
