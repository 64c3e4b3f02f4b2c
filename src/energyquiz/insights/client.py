"""Gemini APIを利用したインサイト生成クライアント。"""

import json
import logging
import re
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from energyquiz.config import ServerConfig
from energyquiz.insights.prompt import build_insight_prompt
from energyquiz.models.errors import InsightsFetchError
from energyquiz.models.insights import InsightEnergyType, InsightPayload, InsightRequest

logger = logging.getLogger(__name__)

# 応答テキスト中の最初の "{" から最後の "}" までをJSONとみなす
_JSON_BLOCK_RE = re.compile(r"\{[\s\S]*\}")

FALLBACK_INSIGHTS = ["Deeper insights are currently unavailable."]
FALLBACK_MESSAGE = (
    "We're sorry, but we couldn't generate personalized insights at this time. "
    "Please try again later or consider our premium services for a more detailed analysis."
)


class InsightsProvider(Protocol):
    """インサイト生成の提供者。"""

    async def fetch(self, request: InsightRequest) -> InsightPayload: ...


def fallback_payload(request: InsightRequest) -> InsightPayload:
    """生成結果を解釈できなかった場合に返す定型のインサイト。"""
    return InsightPayload(
        name_vibration=request.name_vibration,
        energy_type=InsightEnergyType(
            name=request.energy_type.name,
            description=request.energy_type.description,
        ),
        insights=list(FALLBACK_INSIGHTS),
        message=FALLBACK_MESSAGE,
    )


def parse_insight_text(text: str, request: InsightRequest) -> InsightPayload:
    """モデルの応答テキストからインサイトを取り出す。

    Markdownなどで囲まれている場合もあるため、JSONブロックのみを抽出して
    検証する。抽出・検証に失敗した場合は fallback_payload を返す。
    """
    match = _JSON_BLOCK_RE.search(text)
    if match is None:
        logger.warning("Insight response contained no JSON object")
        return fallback_payload(request)
    try:
        return InsightPayload.model_validate(json.loads(match.group(0)))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("Insight response could not be parsed: %s", e)
        return fallback_payload(request)


def _candidate_text(data: dict[str, Any]) -> str | None:
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None


class GeminiInsightsClient:
    """Gemini generateContent APIを呼び出してインサイトを生成する。

    再試行は行わない。失敗はすべて InsightsFetchError として呼び出し側に返す。
    """

    def __init__(self, config: ServerConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._config = config
        self._transport = transport

    def _endpoint(self) -> str:
        base_url = self._config.gemini_base_url.rstrip("/")
        return f"{base_url}/models/{self._config.gemini_model}:generateContent"

    def _body(self, request: InsightRequest) -> dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": build_insight_prompt(request, self._config)}]}],
            "generationConfig": {
                "temperature": float(self._config.gemini_temperature),
                "maxOutputTokens": int(self._config.gemini_max_output_tokens),
            },
        }

    async def fetch(self, request: InsightRequest) -> InsightPayload:
        """インサイトを生成する。

        Args:
            request: 名前・回答・バイブレーション・エナジータイプ。

        Returns:
            生成されたインサイト。応答を解釈できない場合は定型のインサイト。

        Raises:
            InsightsFetchError: APIキー未設定、通信エラー、またはAPIがエラーを返した場合。
        """
        if not self._config.gemini_api_key:
            raise InsightsFetchError("GEMINI API key is not configured")

        headers = {
            "x-goog-api-key": self._config.gemini_api_key,
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self._config.gemini_timeout_sec, transport=self._transport) as client:
                resp = await client.post(self._endpoint(), headers=headers, json=self._body(request))
        except httpx.HTTPError as e:
            raise InsightsFetchError(f"Gemini API request failed: {e}") from e

        if resp.status_code >= 400:
            logger.warning("Gemini API returned %d", resp.status_code)
            raise InsightsFetchError(
                f"Gemini API error: {resp.status_code} {resp.text[:200]}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError:
            logger.warning("Gemini API returned a non-JSON body")
            return fallback_payload(request)

        text = _candidate_text(data)
        if text is None:
            logger.warning("Gemini API response had no candidate text")
            return fallback_payload(request)
        return parse_insight_text(text, request)
