"""クイズ定義ファイル（YAML）の読み込みを行うサービス。"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from energyquiz.models.errors import CatalogError
from energyquiz.models.quiz import CATEGORY_ORDER, QuizCatalog, interlude_key

logger = logging.getLogger(__name__)

QUESTIONS_FILE = "quiz-questions.yaml"
INTERLUDES_FILE = "quiz-interludes.yaml"
ENERGY_TYPES_FILE = "energy-types.yaml"


class CatalogService:
    """config_dir配下のYAMLからQuizCatalogを構築する。"""

    def __init__(self, config_dir: Path) -> None:
        self._config_dir = config_dir
        self._catalog: QuizCatalog | None = None

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    def _read_yaml(self, filename: str) -> dict[str, Any]:
        path = self._config_dir / filename
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise CatalogError(f"Quiz definition file not found: {path}") from None
        except yaml.YAMLError as e:
            raise CatalogError(f"Invalid YAML in {path}: {e}") from e
        return data or {}

    def read_raw(self, filename: str) -> dict[str, Any]:
        """定義ファイルを検証せずにそのまま返す。MCPリソース向け。"""
        return self._read_yaml(filename)

    def load(self) -> QuizCatalog:
        """クイズ定義を読み込む。2回目以降はキャッシュを返す。

        Raises:
            CatalogError: ファイルが存在しない、または定義が不正な場合。
        """
        if self._catalog is None:
            self._catalog = self._build_catalog()
        return self._catalog

    def _build_catalog(self) -> QuizCatalog:
        questions = self._read_yaml(QUESTIONS_FILE).get("questions") or []
        interludes = self._read_yaml(INTERLUDES_FILE).get("interludes") or {}
        energy_types = self._read_yaml(ENERGY_TYPES_FILE).get("energy_types") or {}

        try:
            catalog = QuizCatalog(questions=questions, interludes=interludes, energy_types=energy_types)
        except ValidationError as e:
            raise CatalogError(f"Invalid quiz definition: {e}") from e

        if not catalog.questions:
            raise CatalogError("Quiz definition must contain at least one question")

        question_ids = [q.id for q in catalog.questions]
        if len(set(question_ids)) != len(question_ids):
            raise CatalogError(f"Duplicate question ids in quiz definition: {question_ids}")

        missing = [tag for tag in CATEGORY_ORDER if tag not in catalog.energy_types]
        if missing:
            raise CatalogError(f"Energy types missing from definition: {', '.join(missing)}")

        known_keys = {interlude_key(qid) for qid in question_ids}
        for key in catalog.interludes:
            if key not in known_keys:
                logger.warning("Interlude %s does not follow any defined question and will never be shown", key)

        logger.info(
            "Loaded quiz catalog: %d questions, %d interludes",
            len(catalog.questions),
            len(catalog.interludes),
        )
        return catalog
