"""Tests for warren.errors — the exception hierarchy."""

from warren.errors import ConfigurationError, HTTPError, MethodNotAllowed, NotFound, WarrenError


class TestHierarchy:
    def test_configuration_error_is_warren_error(self) -> None:
        assert issubclass(ConfigurationError, WarrenError)

    def test_http_errors_are_warren_errors(self) -> None:
        assert issubclass(HTTPError, WarrenError)
        assert issubclass(NotFound, HTTPError)
        assert issubclass(MethodNotAllowed, HTTPError)


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=418, detail="teapot")) == "418: teapot"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_not_found(self) -> None:
        exc = NotFound()
        assert exc.status == 404
        assert exc.detail == "Not Found"

    def test_method_not_allowed_allow_header(self) -> None:
        exc = MethodNotAllowed(frozenset({"POST", "GET"}))
        assert exc.status == 405
        assert exc.headers == (("Allow", "GET, POST"),)
        assert "GET, POST" in exc.detail
