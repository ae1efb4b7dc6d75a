"""
Tests for the shared service helpers and error types.
"""

import pytest

from pizza_service.authorization import Action, Diner, Principal, UserTarget
from pizza_service.errors import AuthenticationError, AuthorizationError, StatusCodeError, UpstreamError, ValidationError
from pizza_service.services.helpers import enforce, is_blank, name_filter_pattern, page_window


class TestNameFilterPattern:

    def test_no_filter(self):
        assert name_filter_pattern(None) is None
        assert name_filter_pattern("") is None
        assert name_filter_pattern("*") is None

    def test_wildcard(self):
        assert name_filter_pattern("pizza*") == "pizza%"
        assert name_filter_pattern("*Pocket*") == "%Pocket%"

    def test_sql_wildcards_escaped(self):
        assert name_filter_pattern("50%_off") == "50\\%\\_off"


class TestPageWindow:

    def test_first_page(self):
        assert page_window(0, 10) == (0, 11)

    def test_later_page(self):
        assert page_window(3, 5) == (15, 6)

    def test_clamped(self):
        assert page_window(-1, 0) == (0, 2)


class TestIsBlank:

    def test_blank(self):
        assert is_blank(None)
        assert is_blank("")
        assert is_blank("   ")

    def test_not_blank(self):
        assert not is_blank("pizza")


class TestEnforce:

    def test_allowed(self):
        enforce(Principal(id=1), Action.CREATE_ORDER, None, "nope")

    def test_anonymous(self):
        with pytest.raises(AuthenticationError) as exc_info:
            enforce(None, Action.CREATE_ORDER, None, "nope")
        assert exc_info.value.status_code == 401
        assert exc_info.value.to_body() == {"message": "unauthorized"}

    def test_denied(self):
        with pytest.raises(AuthorizationError) as exc_info:
            enforce(Principal(id=1, roles=(Diner(),)), Action.DELETE_USER, UserTarget(2), "not yours")
        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "not yours"


def test_error_extra_fields():
    err = UpstreamError("Failed to fulfill order at factory", followLinkToEndChaos="https://report")
    assert err.to_body() == {
        "message": "Failed to fulfill order at factory",
        "followLinkToEndChaos": "https://report",
    }


def test_error_extra_none_dropped():
    err = UpstreamError("Failed", followLinkToEndChaos=None)
    assert err.to_body() == {"message": "Failed"}


def test_error_status_code_defaults_to_class():
    assert ValidationError("bad").status_code == 400
    assert StatusCodeError("boom").status_code == 500


def test_error_status_code_override():
    err = StatusCodeError("teapot", status_code=418)
    assert err.status_code == 418
    assert StatusCodeError.status_code == 500
