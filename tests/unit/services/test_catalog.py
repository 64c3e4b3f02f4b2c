"""CatalogServiceのユニットテスト。"""

import shutil
from pathlib import Path

import pytest

from energyquiz.models.errors import CatalogError
from energyquiz.services.catalog import CatalogService


def _copy_config(config_dir: Path, tmp_path: Path) -> Path:
    target = tmp_path / "config"
    target.mkdir()
    for name in ("quiz-questions.yaml", "quiz-interludes.yaml", "energy-types.yaml"):
        shutil.copy(config_dir / name, target / name)
    return target


class TestCatalogService:
    def test_load_bundled_catalog(self, catalog_service: CatalogService) -> None:
        catalog = catalog_service.load()
        assert [q.id for q in catalog.questions] == ["q1", "q2", "q3"]
        assert set(catalog.interludes) == {"after-q1", "after-q2", "after-q3"}
        assert set(catalog.energy_types) == {"water", "fire", "earth", "air"}
        assert catalog.energy_type("fire").name == "Fire Type"

    def test_every_question_has_four_tagged_options(self, catalog_service: CatalogService) -> None:
        for question in catalog_service.load().questions:
            assert sorted(o.value for o in question.options) == ["air", "earth", "fire", "water"]

    def test_load_is_cached(self, catalog_service: CatalogService) -> None:
        assert catalog_service.load() is catalog_service.load()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogError, match="not found"):
            CatalogService(config_dir=tmp_path).load()

    def test_unknown_category_raises(self, config_dir: Path, tmp_path: Path) -> None:
        target = _copy_config(config_dir, tmp_path)
        path = target / "quiz-questions.yaml"
        path.write_text(path.read_text(encoding="utf-8").replace("value: air", "value: plasma", 1), encoding="utf-8")

        with pytest.raises(CatalogError, match="Invalid quiz definition"):
            CatalogService(config_dir=target).load()

    def test_empty_questions_raises(self, config_dir: Path, tmp_path: Path) -> None:
        target = _copy_config(config_dir, tmp_path)
        (target / "quiz-questions.yaml").write_text("questions: []\n", encoding="utf-8")

        with pytest.raises(CatalogError, match="at least one question"):
            CatalogService(config_dir=target).load()

    def test_missing_energy_type_raises(self, config_dir: Path, tmp_path: Path) -> None:
        target = _copy_config(config_dir, tmp_path)
        (target / "energy-types.yaml").write_text(
            "energy_types:\n  water:\n    id: water\n    name: Water Type\n    description: calm\n",
            encoding="utf-8",
        )

        with pytest.raises(CatalogError, match="fire, earth, air"):
            CatalogService(config_dir=target).load()

    def test_interludes_file_may_be_empty(self, config_dir: Path, tmp_path: Path) -> None:
        target = _copy_config(config_dir, tmp_path)
        (target / "quiz-interludes.yaml").write_text("", encoding="utf-8")

        catalog = CatalogService(config_dir=target).load()
        assert catalog.interludes == {}

    def test_read_raw_returns_yaml_data(self, catalog_service: CatalogService) -> None:
        data = catalog_service.read_raw("quiz-interludes.yaml")
        assert data["interludes"]["after-q2"]["statistic"] == "60%"
