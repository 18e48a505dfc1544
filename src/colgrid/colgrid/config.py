"""Configuration parsing for colgrid.yaml"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from .exceptions import ConfigError
from .ids import DEFAULT_PREFIX, IdFactory, IdStrategy, make_id_factory
from .layout import ColumnLayoutEngine
from .render import DEFAULT_CSS_PREFIX, HeaderRenderer

CONFIG_FILENAME = "colgrid.yaml"


class TemplateConfig(BaseModel):
    """Inline Jinja2 overrides for the built-in templates"""

    cell: str | None = None
    row: str | None = None
    thead: str | None = None

    model_config = {"extra": "forbid"}


class HeaderConfig(BaseModel):
    """Full colgrid.yaml configuration"""

    css_prefix: str = DEFAULT_CSS_PREFIX
    id_strategy: IdStrategy = "sequential"
    id_prefix: str = DEFAULT_PREFIX
    templates: TemplateConfig = TemplateConfig()

    model_config = {"extra": "forbid"}

    @classmethod
    def load(cls, path: Path) -> "HeaderConfig":
        """Load config from yaml file; a missing file gives the defaults"""
        if not path.exists():
            return cls()

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid config {path}: {exc}") from exc

    def id_factory(self) -> IdFactory:
        return make_id_factory(self.id_strategy, self.id_prefix)

    def engine(self) -> ColumnLayoutEngine:
        return ColumnLayoutEngine(self.id_factory())

    def renderer(self) -> HeaderRenderer:
        return HeaderRenderer(
            css_prefix=self.css_prefix,
            cell_template=self.templates.cell,
            row_template=self.templates.row,
            thead_template=self.templates.thead,
        )
