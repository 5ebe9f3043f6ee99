"""Report, chat and plans blueprints with providers patched out."""

from unittest.mock import patch

from config.settings import Config
from tests.conftest import make_transcript
from utils.errors import ConfigurationError, EmptyResponseError, UpstreamError
from utils.rate_limit import bucket_count


def test_home(client):
    assert client.get("/").status_code == 200


class TestReportRoute:
    def test_requires_jwt(self, client):
        resp = client.post("/report/generate", json={"base_instruction": "x", "messages": []})
        assert resp.status_code == 401

    @patch("routes.report.generate_report_with_chunking", return_value="[SUMMARY] done")
    def test_generates_with_config_defaults(self, mock_generate, client, auth_headers):
        transcript = make_transcript(4)
        with patch.object(Config, "OPENAI_API_KEY", "sk-test"):
            resp = client.post(
                "/report/generate",
                json={"base_instruction": "Fill it", "messages": transcript},
                headers=auth_headers,
            )
        assert resp.status_code == 200
        assert resp.get_json() == {"report": "[SUMMARY] done"}
        args, kwargs = mock_generate.call_args
        assert args[0] == "sk-test"
        assert args[1] == "Fill it"
        assert [m.content for m in args[2]] == [m["content"] for m in transcript]
        assert kwargs["threshold_count"] == Config.REPORT_THRESHOLD_COUNT
        assert kwargs["max_parts"] == Config.REPORT_MAX_PARTS
        assert kwargs["model"] is None

    @patch("routes.report.generate_report_with_chunking", return_value="r")
    def test_tuning_overrides(self, mock_generate, client, auth_headers):
        client.post(
            "/report/generate",
            json={"base_instruction": "b", "messages": [], "threshold_count": 10, "max_parts": 2, "model": "gpt-4o"},
            headers=auth_headers,
        )
        kwargs = mock_generate.call_args.kwargs
        assert (kwargs["threshold_count"], kwargs["max_parts"], kwargs["model"]) == (10, 2, "gpt-4o")

    def test_invalid_payload(self, client, auth_headers):
        resp = client.post(
            "/report/generate",
            json={"base_instruction": "b", "messages": [{"role": "system", "content": "x"}]},
            headers=auth_headers,
        )
        assert resp.status_code == 400

    def test_non_positive_threshold_rejected(self, client, auth_headers):
        resp = client.post(
            "/report/generate",
            json={"base_instruction": "b", "messages": [], "threshold_count": 0},
            headers=auth_headers,
        )
        assert resp.status_code == 400

    def test_error_mapping(self, client, auth_headers):
        cases = [
            (ConfigurationError("Missing OpenAI API key."), 500),
            (UpstreamError("OpenAI", 500, "boom"), 502),
            (EmptyResponseError("OpenAI returned empty content"), 502),
            (RuntimeError("unexpected"), 500),
        ]
        for error, status in cases:
            with patch("routes.report.generate_report_with_chunking", side_effect=error):
                resp = client.post(
                    "/report/generate",
                    json={"base_instruction": "b", "messages": []},
                    headers=auth_headers,
                )
            assert resp.status_code == status
            assert "boom" not in resp.get_data(as_text=True)

    @patch("routes.report.generate_report_with_chunking", return_value="r")
    def test_rate_limited(self, mock_generate, client, auth_headers):
        statuses = [
            client.post(
                "/report/generate", json={"base_instruction": "b", "messages": []}, headers=auth_headers
            ).status_code
            for _ in range(6)
        ]
        assert statuses[:5] == [200] * 5
        assert statuses[5] == 429

    @patch("routes.report.generate_report_with_chunking", return_value="r")
    def test_forwarded_for_rotation_shares_one_bucket(self, mock_generate, client, auth_headers):
        statuses = []
        for i in range(10):
            headers = {**auth_headers, "X-Forwarded-For": f"203.0.113.{i}"}
            statuses.append(
                client.post(
                    "/report/generate", json={"base_instruction": "b", "messages": []}, headers=headers
                ).status_code
            )
        assert statuses.count(429) == 5
        assert bucket_count() == 1


class TestChatRoutes:
    def test_personas(self, client):
        roles = [p["role"] for p in client.get("/chat/personas").get_json()["personas"]]
        assert "ceo" in roles and "cfo" in roles

    @patch("routes.chat.call_gemini_api", return_value={"cleaned": "Talk to ten customers."})
    def test_message(self, mock_call, client, auth_headers):
        with patch.object(Config, "GEMINI_API_KEY", "g-key"):
            resp = client.post(
                "/chat/message",
                json={"messages": [{"role": "user", "content": "Where do I start?"}], "active_role": "cmo"},
                headers=auth_headers,
            )
        assert resp.status_code == 200
        assert resp.get_json() == {"reply": "Talk to ten customers.", "role": "cmo"}
        args = mock_call.call_args.args
        assert args[1] == "g-key"
        assert args[2] == "cmo"

    @patch("routes.chat.call_gemini_api", side_effect=UpstreamError("Gemini", 429, "quota"))
    def test_message_upstream_failure(self, mock_call, client, auth_headers):
        resp = client.post(
            "/chat/message",
            json={"messages": [{"role": "user", "content": "hi"}]},
            headers=auth_headers,
        )
        assert resp.status_code == 502

    @patch("routes.chat.call_gemini_for_title", return_value="Pricing Strategy")
    def test_title(self, mock_title, client, auth_headers):
        resp = client.post("/chat/title", json={"userMsg": "How to price?"}, headers=auth_headers)
        assert resp.get_json() == {"title": "Pricing Strategy"}

    @patch("routes.chat.call_gemini_for_title", side_effect=EmptyResponseError("no title"))
    def test_title_failure_is_soft(self, mock_title, client, auth_headers):
        resp = client.post("/chat/title", json={"userMsg": "hi"}, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.get_json() == {"title": "Error generating title"}

    @patch("routes.chat.call_gemini_for_title", side_effect=KeyError("candidates"))
    def test_title_unexpected_error_is_json(self, mock_title, client, auth_headers):
        resp = client.post("/chat/title", json={"userMsg": "hi"}, headers=auth_headers)
        assert resp.status_code == 500
        assert resp.get_json() == {"title": "Error generating title"}

    @patch("routes.chat.call_gemini_for_title", return_value="T")
    def test_title_rate_limited(self, mock_title, client, auth_headers):
        statuses = [
            client.post("/chat/title", json={"userMsg": "hi"}, headers=auth_headers).status_code
            for _ in range(11)
        ]
        assert statuses[-1] == 429


class TestPlansRoute:
    def test_monthly_default(self, client):
        plans = client.get("/get/plans").get_json()["plans"]
        assert [p["price"] for p in plans] == [29, 79, 199]

    def test_yearly(self, client):
        plans = client.get("/get/plans?billing=yearly").get_json()["plans"]
        assert plans[1]["price"] == 790
        assert plans[1]["discount_percentage"] == 17

    def test_unknown_cycle(self, client):
        assert client.get("/get/plans?billing=weekly").status_code == 400
