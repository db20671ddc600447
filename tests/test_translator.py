"""Tests for translating failed responses into APIResponseError."""

import json
import logging

import pytest
import httpx

from box_client.exceptions import APIResponseError
from box_client.translator import (
    ErrorPayload,
    ResponseDescriptor,
    compose_message,
    compose_request_id,
    raise_for_status,
    translate,
)

ITEM_NAME_IN_USE = {
    "type": "error",
    "status": 409,
    "code": "item_name_in_use",
    "context_info": {
        "conflicts": [
            {
                "type": "folder",
                "id": "12345",
                "sequence_id": "1",
                "etag": "1",
                "name": "Helpful things",
            }
        ]
    },
    "help_url": "http://developers.box.com/docs/#errors",
    "message": "Item with the same name already exists",
    "request_id": "5678",
}

MISSING_FIELDS = {
    "type": "error",
    "status": 409,
    "context_info": {"conflicts": [{"type": "folder", "id": "12345"}]},
    "help_url": "http://developers.box.com/docs/#errors",
}

FORBIDDEN = {
    "type": "error",
    "status": 403,
    "code": "Forbidden",
    "help_url": "http://developers.box.com/docs/#errors",
}

FORBIDDEN_WITH_REQUEST_ID = dict(FORBIDDEN, request_id="22222")

ERROR_AND_DESCRIPTION = {
    "error": "Forbidden",
    "error_description": "Unauthorized Access",
    "request_id": "22222",
}

HTML_BODY = "<html><body><h1>500 Server Error</h1></body></html>"


class TestErrorPayload:
    """Test suite for structured field extraction."""

    def test_full_payload(self):
        """Test extraction of every known field."""
        payload = ErrorPayload.from_body(json.dumps(ITEM_NAME_IN_USE))

        assert payload.status == "409"
        assert payload.code == "item_name_in_use"
        assert payload.message == "Item with the same name already exists"
        assert payload.request_id == "5678"
        assert payload.help_url == "http://developers.box.com/docs/#errors"
        assert payload.context_info == ITEM_NAME_IN_USE["context_info"]

    def test_missing_fields_are_none(self):
        """Test that absent fields stay unset."""
        payload = ErrorPayload.from_body(json.dumps(MISSING_FIELDS))

        assert payload.code is None
        assert payload.message is None
        assert payload.request_id is None
        assert payload.context_info is not None

    def test_error_and_error_description_fallback(self):
        """Test the OAuth style error fields fill code and message."""
        payload = ErrorPayload.from_body(json.dumps(ERROR_AND_DESCRIPTION))

        assert payload.code == "Forbidden"
        assert payload.message == "Unauthorized Access"

    def test_code_and_message_take_precedence(self):
        """Test code/message win over error/error_description."""
        body = dict(ERROR_AND_DESCRIPTION, code="access_denied", message="Denied")
        payload = ErrorPayload.from_body(json.dumps(body))

        assert payload.code == "access_denied"
        assert payload.message == "Denied"

    @pytest.mark.parametrize(
        "body",
        [
            "",
            None,
            b"",
            "   ",
            HTML_BODY,
            "[1, 2, 3]",
            '"just a string"',
            "{not json",
            b"\xff\xfe\x00binary",
        ],
    )
    def test_unstructured_bodies_give_empty_payload(self, body):
        """Test that bodies which are not JSON objects yield no fields."""
        assert ErrorPayload.from_body(body) == ErrorPayload()

    def test_bytes_body(self):
        """Test that UTF-8 encoded bodies are parsed."""
        payload = ErrorPayload.from_body(json.dumps(FORBIDDEN).encode("utf-8"))

        assert payload.code == "Forbidden"

    def test_unusable_field_types_are_ignored(self):
        """Test that null, boolean, nested and empty values count as absent."""
        body = {"code": None, "message": {"text": "x"}, "request_id": True, "error": ""}
        payload = ErrorPayload.from_body(json.dumps(body))

        assert payload.code is None
        assert payload.message is None
        assert payload.request_id is None

    def test_numeric_request_id(self):
        """Test that numeric identifiers are rendered as text."""
        payload = ErrorPayload.from_body(json.dumps({"request_id": 22222}))

        assert payload.request_id == "22222"


class TestComposeRequestId:
    """Test suite for request identifier composition."""

    @pytest.mark.parametrize(
        "inner,outer,expected",
        [
            ("22222", "11111", "22222.11111"),
            (None, "11111", ".11111"),
            ("22222", None, "22222"),
            (None, None, ""),
            ("", "", ""),
        ],
    )
    def test_compose(self, inner, outer, expected):
        """Test each combination of inner and outer identifiers."""
        assert compose_request_id(inner, outer) == expected


class TestComposeMessage:
    """Test suite for message composition."""

    def test_status_only(self):
        assert compose_message(500) == "The API returned an error code [500]"

    def test_all_parts(self):
        message = compose_message(403, "22222.11111", "Forbidden", "Unauthorized Access")

        assert message == (
            "The API returned an error code [403 | 22222.11111] Forbidden - "
            "Unauthorized Access"
        )

    def test_message_without_code(self):
        assert compose_message(400, message="Bad") == (
            "The API returned an error code [400] - Bad"
        )

    def test_custom_prefix(self):
        assert compose_message(404, prefix="Request failed") == "Request failed [404]"


class TestTranslate:
    """Test suite for translate()."""

    def test_full_json_error(self):
        """Test a JSON body with code, message and request_id."""
        error = translate(ResponseDescriptor(409, {}, json.dumps(ITEM_NAME_IN_USE)))

        assert isinstance(error, APIResponseError)
        assert error.response_code == 409
        assert error.message == (
            "The API returned an error code [409 | 5678] item_name_in_use - "
            "Item with the same name already exists"
        )
        assert str(error) == error.message
        assert error.request_id == "5678"
        assert error.payload.context_info == ITEM_NAME_IN_USE["context_info"]

    def test_json_without_code_and_message(self):
        """Test a JSON body missing code and message."""
        error = translate(ResponseDescriptor(409, {}, json.dumps(MISSING_FIELDS)))

        assert error.response_code == 409
        assert error.message == "The API returned an error code [409]"

    def test_code_and_message_without_ids(self):
        """Test code and message without any identifiers."""
        body = {"code": "not_found", "message": "Not Found"}
        error = translate(ResponseDescriptor(404, {}, json.dumps(body)))

        assert error.message == "The API returned an error code [404] not_found - Not Found"
        assert error.request_id == ""

    def test_inner_request_id_only(self):
        """Test a body carrying only request_id."""
        error = translate(ResponseDescriptor(409, {}, json.dumps({"request_id": "5678"})))

        assert error.message == "The API returned an error code [409 | 5678]"

    def test_empty_body(self):
        """Test an empty body gives the bracket-only message."""
        error = translate(ResponseDescriptor(403))

        assert error.response_code == 403
        assert error.raw_response_body == ""
        assert error.message == "The API returned an error code [403]"

    def test_none_body(self):
        """Test that a missing body is exposed as an empty string."""
        error = translate(ResponseDescriptor(502, {}, None))

        assert error.raw_response_body == ""
        assert error.message == "The API returned an error code [502]"

    def test_html_body(self):
        """Test an HTML body is kept verbatim and ignored for the message."""
        error = translate(ResponseDescriptor(500, {}, HTML_BODY))

        assert error.response_code == 500
        assert error.raw_response_body == HTML_BODY
        assert error.message == "The API returned an error code [500]"

    def test_header_request_id_without_body(self):
        """Test an outer id renders with a leading dot."""
        error = translate(ResponseDescriptor(403, {"BOX-REQUEST-ID": "11111"}, ""))

        assert error.message == "The API returned an error code [403 | .11111]"
        assert error.request_id == ".11111"

    def test_header_request_id_with_code(self):
        """Test an outer id combined with a code."""
        error = translate(
            ResponseDescriptor(403, {"BOX-REQUEST-ID": "11111"}, json.dumps(FORBIDDEN))
        )

        assert error.message == "The API returned an error code [403 | .11111] Forbidden"

    def test_header_lookup_ignores_case(self):
        """Test the request id header is found regardless of casing."""
        error = translate(ResponseDescriptor(403, {"box-request-id": "11111"}, ""))

        assert error.message == "The API returned an error code [403 | .11111]"

    def test_bytes_header_request_id(self):
        """Test a raw bytes request id header renders as text."""
        error = translate(ResponseDescriptor(403, [(b"BOX-REQUEST-ID", b"11111")], ""))

        assert error.message == "The API returned an error code [403 | .11111]"

    def test_both_request_ids(self):
        """Test inner and outer ids are joined with a dot."""
        error = translate(
            ResponseDescriptor(
                403,
                {"BOX-REQUEST-ID": "11111"},
                json.dumps(FORBIDDEN_WITH_REQUEST_ID),
            )
        )

        assert error.message == "The API returned an error code [403 | 22222.11111] Forbidden"

    def test_error_and_error_description(self):
        """Test the error/error_description pair with both ids."""
        error = translate(
            ResponseDescriptor(
                403,
                {"BOX-REQUEST-ID": "11111"},
                json.dumps(ERROR_AND_DESCRIPTION),
            )
        )

        assert error.message == (
            "The API returned an error code [403 | 22222.11111] Forbidden - "
            "Unauthorized Access"
        )

    def test_custom_request_id_header(self):
        """Test a different request id header can be configured."""
        descriptor = ResponseDescriptor(
            500, {"X-Request-Id": "abc", "BOX-REQUEST-ID": "11111"}, ""
        )
        error = translate(descriptor, request_id_header="X-Request-Id")

        assert error.message == "The API returned an error code [500 | .abc]"

    def test_headers_are_exposed_case_insensitively(self):
        """Test the error keeps the response headers."""
        error = translate(ResponseDescriptor(202, {"FOO": "bAr"}, ""))

        assert "foo" in error.headers
        assert "fOo" in error.headers
        assert "FOO" in error.headers
        assert error.headers["foo"][0] == "bAr"

    def test_bytes_body_is_decoded(self):
        """Test raw bytes bodies are exposed as text."""
        error = translate(ResponseDescriptor(500, {}, HTML_BODY.encode("utf-8")))

        assert error.raw_response_body == HTML_BODY

    def test_non_json_body_logs_at_debug(self, caplog):
        """Test the JSON fallback is logged, not raised."""
        with caplog.at_level(logging.DEBUG, logger="box_client.translator"):
            translate(ResponseDescriptor(500, {}, HTML_BODY))

        assert "not JSON" in caplog.text

    def test_from_httpx(self):
        """Test building a descriptor from an httpx response."""
        response = httpx.Response(
            403,
            headers={"BOX-REQUEST-ID": "11111"},
            json=FORBIDDEN_WITH_REQUEST_ID,
        )
        descriptor = ResponseDescriptor.from_httpx(response)

        assert descriptor.status_code == 403
        assert descriptor.headers.first("box-request-id") == "11111"
        assert json.loads(descriptor.body) == FORBIDDEN_WITH_REQUEST_ID


class TestRaiseForStatus:
    """Test suite for raise_for_status()."""

    def test_success_status(self):
        """Test that successful responses don't raise."""
        raise_for_status(httpx.Response(200, json={"id": "12345"}))

    def test_error_status_raises(self):
        """Test that a 4xx response raises APIResponseError."""
        response = httpx.Response(
            409,
            headers={"Content-Type": "application/json"},
            content=json.dumps(ITEM_NAME_IN_USE).encode("utf-8"),
        )

        with pytest.raises(APIResponseError) as exc_info:
            raise_for_status(response)

        assert exc_info.value.response_code == 409
        assert exc_info.value.message == (
            "The API returned an error code [409 | 5678] item_name_in_use - "
            "Item with the same name already exists"
        )

    def test_redirect_status_raises(self):
        """Test that non-2xx statuses outside 4xx/5xx also raise."""
        with pytest.raises(APIResponseError) as exc_info:
            raise_for_status(httpx.Response(304))

        assert str(exc_info.value) == "The API returned an error code [304]"

    def test_failure_is_logged(self, caplog):
        """Test the composed message is logged at warning level."""
        with caplog.at_level(logging.WARNING, logger="box_client.translator"):
            with pytest.raises(APIResponseError):
                raise_for_status(httpx.Response(500, text=HTML_BODY))

        assert "The API returned an error code [500]" in caplog.text
