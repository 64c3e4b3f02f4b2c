"""クイズ定義のMCPリソース定義。"""

import yaml
from fastmcp import FastMCP

from energyquiz.services.catalog import ENERGY_TYPES_FILE, INTERLUDES_FILE, QUESTIONS_FILE, CatalogService


def register_quiz_resources(mcp: FastMCP, catalog_service: CatalogService) -> None:
    """クイズ定義関連のMCPリソースを登録する。"""

    def _dump(filename: str) -> str:
        data = catalog_service.read_raw(filename)
        return yaml.dump(data, allow_unicode=True, default_flow_style=False, sort_keys=False)

    @mcp.resource("energyquiz://quiz/questions")
    async def quiz_questions() -> str:
        """クイズの質問と選択肢の定義を取得する。"""
        return _dump(QUESTIONS_FILE)

    @mcp.resource("energyquiz://quiz/interludes")
    async def quiz_interludes() -> str:
        """質問の間に表示するインタールードの定義を取得する。"""
        return _dump(INTERLUDES_FILE)

    @mcp.resource("energyquiz://quiz/energy-types")
    async def energy_types() -> str:
        """エナジータイプの説明・特徴・推奨事項を取得する。"""
        return _dump(ENERGY_TYPES_FILE)
