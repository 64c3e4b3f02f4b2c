"""FastMCPベースのMCPサーバーエントリポイント。"""

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from energyquiz.config import ServerConfig
from energyquiz.insights.client import GeminiInsightsClient, InsightsProvider
from energyquiz.prompts.quiz import register_quiz_prompts
from energyquiz.resources.quiz import register_quiz_resources
from energyquiz.services.catalog import CatalogService
from energyquiz.services.flow import QuizFlow
from energyquiz.services.quiz import QuizService
from energyquiz.storage.service import SessionStore
from energyquiz.tools.quiz import register_quiz_tools


def create_server(
    config: ServerConfig | None = None,
    insights_client: InsightsProvider | None = None,
) -> FastMCP:
    """Energy Quiz MCPサーバーを作成し、ツール・リソース・プロンプトを登録する。

    Args:
        config: サーバー設定。Noneの場合はデフォルト設定を使用。
        insights_client: インサイト生成クライアント。Noneの場合はGeminiを使用。

    Returns:
        設定済みのFastMCPインスタンス。

    Raises:
        CatalogError: クイズ定義が読み込めない場合。
    """
    if config is None:
        config = ServerConfig()

    mcp = FastMCP("energyquiz")

    # 静的定義とセッションストア
    catalog_service = CatalogService(config_dir=config.config_dir)
    catalog = catalog_service.load()
    store = SessionStore()

    # サービス層
    if insights_client is None:
        insights_client = GeminiInsightsClient(config)
    quiz_service = QuizService(
        store=store,
        flow=QuizFlow(catalog),
        insights_client=insights_client,
        loading_delay=config.loading_duration_sec,
        premium_url=config.premium_url,
    )

    # MCPインターフェース登録
    register_quiz_tools(mcp, quiz_service)
    register_quiz_resources(mcp, catalog_service)
    register_quiz_prompts(mcp)

    # ヘルスチェックエンドポイント
    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    return mcp
