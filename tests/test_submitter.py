import json
import logging

import httpx

from src.app_reviews.engine.admin_client import ACCESS_TOKEN_HEADER, AdminApiClient
from src.app_reviews.engine.submitter import classify_response, submit_review
from src.app_reviews.schemas.admin_api import GraphQLRequest, RemoteResponse
from src.app_reviews.schemas.outcome import Failure, FailureReason, Success
from tests.conftest import SHOP, TOKEN, FakeAdminApi, created_body, user_errors_body

PAYLOAD = GraphQLRequest(query="mutation { x }", variables={"fields": []})


def _response(body, status_code: int = 200) -> RemoteResponse:
    text = body if isinstance(body, str) else json.dumps(body)
    return RemoteResponse(status_code=status_code, text=text)


class TestClassifyResponse:
    def test_success(self):
        outcome = classify_response(_response(created_body("gid://x/Metaobject/1")))
        assert outcome == Success(id="gid://x/Metaobject/1")

    def test_non_json(self):
        outcome = classify_response(_response("<html>502 Bad Gateway</html>", 502))
        assert isinstance(outcome, Failure)
        assert outcome.reason == FailureReason.REMOTE_UNPARSEABLE

    def test_empty_body(self):
        assert classify_response(_response("")).reason == FailureReason.REMOTE_UNPARSEABLE

    def test_user_errors(self):
        outcome = classify_response(_response(user_errors_body({"field": ["rating"], "message": "bad"})))
        assert outcome.reason == FailureReason.REMOTE_VALIDATION_ERROR

    def test_user_errors_logged(self, caplog):
        caplog.set_level(logging.WARNING, logger="app_reviews")
        classify_response(_response(user_errors_body({"field": "rating", "message": "bad"})), SHOP)
        assert any("field=rating message=bad" in r.getMessage() for r in caplog.records)

    def test_user_errors_win_over_id(self):
        body = {
            "data": {
                "metaobjectCreate": {
                    "metaobject": {"id": "gid://x/Metaobject/1"},
                    "userErrors": [{"field": "title", "message": "too long"}],
                }
            }
        }
        assert classify_response(_response(body)).reason == FailureReason.REMOTE_VALIDATION_ERROR

    def test_graphql_errors_without_data(self):
        body = {"errors": [{"message": "Access denied for metaobjectCreate field."}]}
        assert classify_response(_response(body)).reason == FailureReason.REMOTE_UNPARSEABLE

    def test_auth_error_body(self):
        body = {"errors": "[API] Invalid API key or access token (unrecognized login or wrong password)"}
        assert classify_response(_response(body, 401)).reason == FailureReason.REMOTE_UNPARSEABLE

    def test_json_scalar(self):
        assert classify_response(_response("null")).reason == FailureReason.REMOTE_UNPARSEABLE

    def test_detail_is_truncated(self, monkeypatch):
        from src.app_reviews.config import settings

        monkeypatch.setattr(settings, "response_log_limit", 10)
        outcome = classify_response(_response("x" * 100))
        assert "x" * 11 not in outcome.detail


class TestAdminApiClient:
    async def test_posts_to_versioned_endpoint(self):
        api = FakeAdminApi()
        client = api.client()
        await client.execute(SHOP, TOKEN, PAYLOAD)

        request = api.requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"https://{SHOP}/admin/api/2025-07/graphql.json"
        assert request.headers[ACCESS_TOKEN_HEADER] == TOKEN
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {"query": "mutation { x }", "variables": {"fields": []}}

    async def test_transport_error_raised(self):
        from src.app_reviews.engine.admin_client import TransportError

        api = FakeAdminApi(exc=httpx.ConnectError("connection refused"))
        client = api.client()
        try:
            await client.execute(SHOP, TOKEN, PAYLOAD)
        except TransportError as e:
            assert "connection refused" in str(e)
        else:
            raise AssertionError("TransportError not raised")

    async def test_uses_configured_timeout(self, monkeypatch):
        from src.app_reviews.config import settings

        monkeypatch.setattr(settings, "remote_timeout", 5.0)
        client = AdminApiClient()
        try:
            assert client.client.timeout.read == 5.0
        finally:
            await client.aclose()


class TestSubmitReview:
    async def test_success(self, credential):
        api = FakeAdminApi()
        outcome = await submit_review(api.client(), credential, PAYLOAD, SHOP)
        assert isinstance(outcome, Success)
        assert len(api.requests) == 1

    async def test_transport_error(self, credential):
        api = FakeAdminApi(exc=httpx.ReadTimeout("timed out"))
        outcome = await submit_review(api.client(), credential, PAYLOAD, SHOP)
        assert outcome.reason == FailureReason.TRANSPORT_ERROR

    async def test_no_retry_on_failure(self, credential):
        api = FakeAdminApi(status_code=500, body="oops")
        outcome = await submit_review(api.client(), credential, PAYLOAD, SHOP)
        assert outcome.reason == FailureReason.REMOTE_UNPARSEABLE
        assert len(api.requests) == 1
