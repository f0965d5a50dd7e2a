"""Tests for signaturit_sdk.models.errors."""

from __future__ import annotations

import pytest

from signaturit_sdk.models.errors import (
    DeserializationError,
    ErrorCode,
    SerializationError,
    SignaturitError,
    TransportError,
)
from signaturit_sdk.models.responses import CountResponse


class TestSignaturitError:
    def test_defaults(self):
        err = SignaturitError("boom")
        assert err.message == "boom"
        assert err.code == ErrorCode.UNKNOWN_ERROR.value
        assert err.details == {}
        assert str(err) == "[SIGNATURIT_ERROR] boom"

    def test_to_dict_shape(self):
        err = SignaturitError(message="m", code="CUSTOM", details={"k": "v"})
        as_dict = err.to_dict()
        assert as_dict["error"]["code"] == "CUSTOM"
        assert as_dict["error"]["message"] == "m"
        assert as_dict["error"]["details"] == {"k": "v"}


class TestSerializationError:
    def test_path_in_details(self):
        err = SerializationError("bad", path="data[blob]")
        assert err.code == ErrorCode.SERIALIZATION_ERROR.value
        assert err.details == {"path": "data[blob]"}

    def test_without_path(self):
        assert SerializationError("bad").details == {}


class TestTransportError:
    def test_from_response(self):
        err = TransportError.from_response(422, '{"message": "invalid"}')
        assert err.status_code == 422
        assert err.body == '{"message": "invalid"}'
        assert err.code == ErrorCode.HTTP_ERROR.value
        assert err.details["status_code"] == 422

    def test_network_failure_has_no_status(self):
        err = TransportError("down", code=ErrorCode.CONNECTION_ERROR.value)
        assert err.status_code is None
        assert err.details == {}


class TestCountResponse:
    def test_parse(self):
        assert CountResponse.parse_payload({"count": 4, "extra": True}).count == 4

    def test_shape_mismatch(self):
        with pytest.raises(DeserializationError) as exc_info:
            CountResponse.parse_payload({"count": "many"}, raw='{"count": "many"}')
        assert exc_info.value.code == ErrorCode.DESERIALIZATION_ERROR.value
        assert exc_info.value.body == '{"count": "many"}'


class TestExceptionCatching:
    @pytest.mark.parametrize(
        "error",
        [
            SerializationError("s"),
            TransportError("t"),
            DeserializationError("d"),
        ],
    )
    def test_inherits_base(self, error):
        with pytest.raises(SignaturitError):
            raise error
