"""テスト共通フィクスチャ。"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from energyquiz.config import ServerConfig
from energyquiz.models.insights import InsightEnergyType, InsightPayload, InsightRequest
from energyquiz.models.quiz import QuizCatalog
from energyquiz.services.catalog import CatalogService
from energyquiz.services.flow import QuizFlow
from energyquiz.services.quiz import QuizService
from energyquiz.storage.service import SessionStore


def make_payload(request: InsightRequest) -> InsightPayload:
    """リクエストの内容を反映したインサイトを返す。"""
    return InsightPayload(
        name_vibration=request.name_vibration,
        energy_type=InsightEnergyType(name=request.energy_type.name, description=request.energy_type.description),
        insights=[f"{request.name} shines brightest in the morning."],
        message="Your journey has only just begun.",
    )


@pytest.fixture
def config_dir() -> Path:
    """設定ファイルディレクトリ。"""
    return Path(__file__).parent.parent / "config"


@pytest.fixture
def catalog_service(config_dir: Path) -> CatalogService:
    """テスト用CatalogService。"""
    return CatalogService(config_dir=config_dir)


@pytest.fixture
def catalog(catalog_service: CatalogService) -> QuizCatalog:
    """config/ から読み込んだクイズ定義。"""
    return catalog_service.load()


@pytest.fixture
def store() -> SessionStore:
    """テスト用SessionStore。"""
    return SessionStore()


@pytest.fixture
def flow(catalog: QuizCatalog) -> QuizFlow:
    """テスト用QuizFlow。"""
    return QuizFlow(catalog)


@pytest.fixture
def insights_client() -> AsyncMock:
    """リクエストに応じたインサイトを返すモッククライアント。"""
    client = AsyncMock()
    client.fetch.side_effect = make_payload
    return client


@pytest.fixture
def quiz_service(store: SessionStore, flow: QuizFlow, insights_client: AsyncMock) -> QuizService:
    """loading待機なしのQuizService。"""
    return QuizService(store=store, flow=flow, insights_client=insights_client, loading_delay=0, premium_url="/premium")


@pytest.fixture
def server_config(config_dir: Path) -> ServerConfig:
    """テスト用ServerConfig。"""
    return ServerConfig(config_dir=config_dir, loading_duration_sec=0, gemini_api_key="test-key")
