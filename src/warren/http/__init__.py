"""HTTP primitives — immutable requests and chainable responses."""

from warren.http.headers import Headers
from warren.http.query import QueryParams
from warren.http.request import Request
from warren.http.response import Response, html_response

__all__ = ["Headers", "QueryParams", "Request", "Response", "html_response"]
