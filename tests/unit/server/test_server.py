"""create_serverのユニットテスト。"""

from pathlib import Path

import pytest

from energyquiz.config import ServerConfig
from energyquiz.models.errors import CatalogError
from energyquiz.server import create_server


class TestCreateServer:
    def test_missing_quiz_definition_fails_fast(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogError):
            create_server(ServerConfig(config_dir=tmp_path))

    def test_creates_named_server(self, server_config: ServerConfig) -> None:
        mcp = create_server(server_config)
        assert mcp.name == "energyquiz"
