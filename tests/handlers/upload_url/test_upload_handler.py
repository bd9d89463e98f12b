import base64
import json
from unittest.mock import MagicMock, patch

import pytest

from handlers.upload_url.handler import handler


def upload_event(
    body,
    *,
    params: dict | None = None,
    headers: dict | None = None,
    method: str = "POST",
    encode: bool = False,
) -> dict:
    raw = body if isinstance(body, str) else json.dumps(body)
    return {
        "httpMethod": method,
        "path": "/api/upload-url",
        "queryStringParameters": params,
        "headers": {"Host": "img.example", **(headers or {})},
        "body": base64.b64encode(raw.encode()).decode() if encode else raw,
        "isBase64Encoded": encode,
    }


def body_of(response: dict) -> dict:
    return json.loads(response["body"])


def send_photo_ok(file_id: str = "AgADabc", size: int = 2048) -> MagicMock:
    response = MagicMock(status_code=200)
    response.json.return_value = {
        "ok": True,
        "result": {
            "message_id": 9,
            "photo": [
                {"file_id": "thumb", "file_size": 10},
                {"file_id": file_id, "file_size": size},
            ],
        },
    }
    return response


@pytest.fixture
def bot_env(monkeypatch) -> None:
    monkeypatch.setenv("TG_BOT_TOKEN", "123:abc")
    monkeypatch.setenv("TG_CHAT_ID", "-100200")


@pytest.fixture
def telegram_post():
    with patch("requests.post") as post:
        post.return_value = send_photo_ok()
        yield post


class TestUploadUrlHandler:
    def test_ingests_and_persists(self, bot_env, kv_table, kv_get_item, telegram_post, lambda_context) -> None:
        event = upload_event({"list": [{"url": "https://x.com/cat.png", "title": "Cat"}]})

        response = handler(event, lambda_context)

        assert response["statusCode"] == 200
        assert response["headers"]["Access-Control-Allow-Methods"] == "POST, OPTIONS"
        assert body_of(response) == {
            "results": [
                {
                    "url": "https://x.com/cat.png",
                    "success": True,
                    "src": "https://img.example/file/AgADabc.png",
                    "fileName": "Cat",
                }
            ]
        }

        args, kwargs = telegram_post.call_args
        assert args == ("https://api.telegram.org/bot123:abc/sendPhoto",)
        assert kwargs["data"] == {
            "chat_id": "-100200",
            "photo": "https://x.com/cat.png",
            "caption": "Cat",
        }

        item = kv_get_item("AgADabc.png")
        assert item["value"] == {"S": ""}
        assert item["metadata"]["M"]["fileName"] == {"S": "Cat"}
        assert item["metadata"]["M"]["storageType"] == {"S": "telegram"}
        assert item["metadata"]["M"]["fileSize"] == {"N": "2048"}

    def test_without_store_only_reports(self, bot_env, telegram_post, lambda_context) -> None:
        response = handler(upload_event({"list": [{"url": "https://x.com/a.jpg"}]}), lambda_context)

        assert response["statusCode"] == 200
        assert body_of(response)["results"][0]["success"] is True

    def test_one_result_per_item_in_order(self, bot_env, telegram_post, lambda_context) -> None:
        rejected = MagicMock(status_code=400)
        rejected.json.return_value = {"ok": False, "description": "Bad Request: wrong HTTP URL"}
        telegram_post.side_effect = [send_photo_ok("one"), rejected, send_photo_ok("three")]

        body = body_of(
            handler(
                upload_event(
                    {
                        "list": [
                            {"url": "https://x.com/1.jpg"},
                            {"url": "not-a-url"},
                            {"url": "https://x.com/3.jpg"},
                        ]
                    }
                ),
                lambda_context,
            )
        )

        assert [result["success"] for result in body["results"]] == [True, False, True]
        assert body["results"][1] == {
            "url": "not-a-url",
            "success": False,
            "error": "Bad Request: wrong HTTP URL",
        }
        assert body["results"][2]["src"] == "https://img.example/file/three.jpg"

    def test_item_without_url_echoes_null(self, bot_env, telegram_post, lambda_context) -> None:
        body = body_of(handler(upload_event({"list": [{"title": "no link"}]}), lambda_context))

        assert body == {
            "results": [{"url": None, "success": False, "error": "missing or invalid url"}]
        }
        telegram_post.assert_not_called()

    def test_base64_body(self, bot_env, telegram_post, lambda_context) -> None:
        event = upload_event({"list": [{"url": "https://x.com/a.jpg"}]}, encode=True)

        assert handler(event, lambda_context)["statusCode"] == 200

    def test_password_query_parameter(self, bot_env, telegram_post, lambda_context, monkeypatch) -> None:
        monkeypatch.setenv("BASIC_PASS", "s3cret")
        event = upload_event({"list": [{"url": "https://x.com/a.jpg"}]}, params={"pwd": "s3cret"})

        assert handler(event, lambda_context)["statusCode"] == 200

    def test_bearer_token(self, bot_env, telegram_post, lambda_context, monkeypatch) -> None:
        monkeypatch.setenv("BASIC_PASS", "s3cret")
        event = upload_event(
            {"list": [{"url": "https://x.com/a.jpg"}]},
            headers={"Authorization": "Bearer s3cret"},
        )

        assert handler(event, lambda_context)["statusCode"] == 200

    def test_unauthorized(self, bot_env, telegram_post, lambda_context, monkeypatch) -> None:
        monkeypatch.setenv("BASIC_PASS", "s3cret")
        event = upload_event(
            {"list": [{"url": "https://x.com/a.jpg"}]},
            headers={"Authorization": "Bearer wrong"},
        )

        response = handler(event, lambda_context)

        assert response["statusCode"] == 401
        assert body_of(response) == {"error": "Unauthorized"}
        telegram_post.assert_not_called()

    def test_bot_not_configured(self, telegram_post, lambda_context) -> None:
        response = handler(upload_event({"list": [{"url": "https://x.com/a.jpg"}]}), lambda_context)

        assert response["statusCode"] == 500
        assert body_of(response) == {"error": "TG_BOT_TOKEN or TG_CHAT_ID not configured"}

    def test_invalid_json(self, bot_env, telegram_post, lambda_context) -> None:
        response = handler(upload_event("{nope"), lambda_context)

        assert response["statusCode"] == 400
        assert body_of(response) == {"error": "Invalid JSON body"}

    def test_base64_body_that_is_not_utf8(self, bot_env, telegram_post, lambda_context) -> None:
        event = upload_event("", encode=True)
        event["body"] = base64.b64encode(b"\xff\xfe{").decode()

        response = handler(event, lambda_context)

        assert response["statusCode"] == 400
        assert body_of(response) == {"error": "Invalid JSON body"}
        telegram_post.assert_not_called()

    @pytest.mark.parametrize("body", [{}, {"list": []}, {"list": "x"}, [1, 2], None])
    def test_invalid_shape(self, bot_env, telegram_post, lambda_context, body) -> None:
        response = handler(upload_event(body), lambda_context)

        assert response["statusCode"] == 400
        assert body_of(response) == {
            "error": "body must be { list: [ { url, title? } ] } with at least one item"
        }
        telegram_post.assert_not_called()

    def test_preflight(self, lambda_context, monkeypatch) -> None:
        monkeypatch.setenv("BASIC_PASS", "s3cret")

        response = handler(upload_event("", method="OPTIONS"), lambda_context)

        assert response["statusCode"] == 204
        assert response["headers"]["Access-Control-Allow-Headers"] == "Content-Type, Authorization"
