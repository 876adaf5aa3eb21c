"""
Unit tests for the response envelope.
"""

from __future__ import annotations

from sample_backend.schemas import ErrorDetail, PageMeta, error_response, success_response


class TestEnvelope:
    def test_success_shape(self) -> None:
        body = success_response({"id": 1}, message="ok").model_dump(by_alias=True)
        assert body == {
            "success": True,
            "data": {"id": 1},
            "message": "ok",
            "errors": None,
            "meta": None,
        }

    def test_error_shape(self) -> None:
        body = error_response(
            "Validation failed", [ErrorDetail(field="email", message="bad")]
        ).model_dump(by_alias=True)
        assert body["success"] is False
        assert body["data"] is None
        assert body["errors"] == [{"field": "email", "message": "bad"}]

    def test_meta_uses_camel_case(self) -> None:
        meta = PageMeta.build(page=1, per_page=10, total=25)
        assert meta.model_dump(by_alias=True) == {"page": 1, "perPage": 10, "total": 25, "pages": 3}


class TestPageMeta:
    def test_pages_round_up(self) -> None:
        assert PageMeta.build(1, 20, 41).pages == 3

    def test_exact_multiple(self) -> None:
        assert PageMeta.build(1, 20, 40).pages == 2

    def test_empty_collection_has_no_pages(self) -> None:
        assert PageMeta.build(1, 20, 0).pages == 0
