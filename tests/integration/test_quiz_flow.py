"""クイズフローのMCPプロトコル経由統合テスト。"""

import json
from unittest.mock import AsyncMock

import pytest
from fastmcp import Client

from energyquiz.config import ServerConfig
from energyquiz.models.errors import InsightsFetchError
from energyquiz.server import create_server


@pytest.fixture
def mcp_server(server_config: ServerConfig, insights_client: AsyncMock) -> object:
    """loading待機なし・モックのインサイトクライアントを使うMCPサーバー。"""
    return create_server(server_config, insights_client=insights_client)


def parse_tool_result(result: object) -> dict:
    """CallToolResultからJSONデータを抽出する。"""
    content = result.content  # type: ignore[union-attr]
    assert len(content) > 0
    return json.loads(content[0].text)  # type: ignore[union-attr]


async def _call(client: Client, tool: str, **arguments: str) -> dict:
    result = await client.call_tool(tool, arguments, raise_on_error=False)
    return parse_tool_result(result)


class TestQuizFlowViaMCP:
    async def test_full_quiz_flow_via_mcp(self, mcp_server: object) -> None:
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            # 1. セッション作成
            data = await _call(client, "create_session")
            session_id = data["session_id"]
            assert data["step"] == "initial"

            # 2. エントリー送信
            data = await _call(client, "submit_entry", session_id=session_id, name="John", email="john@example.com")
            assert data["valid"] is True
            assert data["step"] == "question"
            assert data["name_vibration"]["number"] == 11
            assert data["question"]["id"] == "q1"
            assert all(set(o) == {"id", "text"} for o in data["question"]["options"])

            # 3. 質問とインタールード
            for option_id, statistic in (("q1-b", "40%"), ("q2-d", "60%"), ("q3-c", "90%")):
                data = await _call(client, "select_option", session_id=session_id, option_id=option_id)
                assert data["step"] == "interlude"
                assert data["interlude"]["statistic"] == statistic
                data = await _call(client, "continue_interlude", session_id=session_id)

            assert data["step"] == "loading"
            assert data["answered"] == data["total_questions"] == 3

            # 4. 結果
            data = await _call(client, "get_results", session_id=session_id)
            assert data["step"] == "results"
            assert data["energy_type"]["id"] == "fire"
            assert data["energy_type"]["name"] == "Fire Type"

            # 5. インサイト
            data = await _call(client, "request_insights", session_id=session_id)
            assert data["step"] == "insights_ready"
            assert data["insights"]["energyType"]["name"] == "Fire Type"
            assert data["insights"]["nameVibration"]["number"] == 11

            # 6. プレミアム
            data = await _call(client, "go_to_premium", session_id=session_id)
            assert data["step"] == "premium"
            assert data["redirect_url"] == "/premium"

    async def test_invalid_entry_via_mcp(self, mcp_server: object) -> None:
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            session_id = (await _call(client, "create_session"))["session_id"]
            data = await _call(client, "submit_entry", session_id=session_id, name=" ", email="nope")

            assert data["valid"] is False
            assert data["errors"] == {
                "name": "Please enter your name",
                "email": "Please enter a valid email address",
            }
            state = await _call(client, "get_session_state", session_id=session_id)
            assert state["step"] == "initial"

    async def test_insights_error_via_mcp(self, mcp_server: object, insights_client: AsyncMock) -> None:
        insights_client.fetch.side_effect = InsightsFetchError("unavailable", status_code=500)
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            session_id = (await _call(client, "create_session"))["session_id"]
            await _call(client, "submit_entry", session_id=session_id, name="Anna", email="anna@example.com")
            for option_id in ("q1-a", "q2-c", "q3-a"):
                await _call(client, "select_option", session_id=session_id, option_id=option_id)
                await _call(client, "continue_interlude", session_id=session_id)
            await _call(client, "get_results", session_id=session_id)

            data = await _call(client, "request_insights", session_id=session_id)
            assert data["step"] == "insights_error"
            assert data["error_message"] == "Failed to connect to the spiritual realm"
            assert data["energy_type"]["id"] == "water"
            assert data["name_vibration"]["number"] == 3

            data = await _call(client, "go_to_premium", session_id=session_id)
            assert data["step"] == "premium"

    async def test_error_handling_via_mcp(self, mcp_server: object) -> None:
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            data = await _call(client, "select_option", session_id="nonexistent", option_id="q1-a")
            assert data["error"] == "SessionNotFoundError"

            session_id = (await _call(client, "create_session"))["session_id"]
            data = await _call(client, "get_results", session_id=session_id)
            assert data["error"] == "InvalidTransitionError"

            await _call(client, "submit_entry", session_id=session_id, name="Anna", email="anna@example.com")
            data = await _call(client, "select_option", session_id=session_id, option_id="q9-z")
            assert data["error"] == "OptionNotFoundError"

    async def test_end_session_via_mcp(self, mcp_server: object) -> None:
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            session_id = (await _call(client, "create_session"))["session_id"]
            data = await _call(client, "end_session", session_id=session_id)
            assert data == {"session_id": session_id, "ended": True}

            data = await _call(client, "get_session_state", session_id=session_id)
            assert data["error"] == "SessionNotFoundError"

    async def test_list_tools_via_mcp(self, mcp_server: object) -> None:
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            tools = await client.list_tools()
            tool_names = {t.name for t in tools}
            assert {
                "create_session",
                "submit_entry",
                "select_option",
                "continue_interlude",
                "get_results",
                "request_insights",
                "go_to_premium",
                "get_session_state",
                "end_session",
            } <= tool_names

    async def test_resources_via_mcp(self, mcp_server: object) -> None:
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            resources = await client.list_resources()
            resource_uris = {str(r.uri) for r in resources}
            assert "energyquiz://quiz/questions" in resource_uris
            assert "energyquiz://quiz/interludes" in resource_uris
            assert "energyquiz://quiz/energy-types" in resource_uris

            contents = await client.read_resource("energyquiz://quiz/energy-types")
            assert "Water Type" in contents[0].text  # type: ignore[union-attr]

    async def test_start_quiz_prompt(self, mcp_server: object) -> None:
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            prompts = await client.list_prompts()
            assert "start_quiz" in {p.name for p in prompts}

            result = await client.get_prompt("start_quiz", {})
            text = result.messages[0].content.text  # type: ignore[union-attr]
            assert "submit_entry" in text
            assert "get_results" in text
