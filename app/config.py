from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from domain.config import (
    DEFAULT_CURRENT_YEAR,
    DEFAULT_MIN_TICK_INTERVAL,
    DEFAULT_PALETTE,
    DEFAULT_TICK_LADDER,
    ArcConfig,
    AxisConfig,
    ChartCanvasConfig,
    ChartConfig,
    GridConfig,
    RowConfig,
)

DEFAULT_CONFIG_PATH = Path("config/lifelines.yaml")


class AxisSettings(BaseModel):
    current_year: int = DEFAULT_CURRENT_YEAR
    padding_ratio: float = Field(default=0.04, ge=0)
    min_padding: int = Field(default=5, ge=0)
    fallback_span: int = Field(default=100, gt=0)
    tick_ladder: list[tuple[int, int]] = Field(default_factory=lambda: list(DEFAULT_TICK_LADDER))
    min_tick_interval: int = Field(default=DEFAULT_MIN_TICK_INTERVAL, gt=0)
    bce_suffix: str = "bc"

    @field_validator("tick_ladder", mode="after")
    @classmethod
    def ensure_descending_ladder(cls, ladder: list[tuple[int, int]]) -> list[tuple[int, int]]:
        thresholds = [threshold for threshold, _ in ladder]
        if thresholds != sorted(thresholds, reverse=True):
            msg = "axis.tick_ladder thresholds must be listed from largest to smallest"
            raise ValueError(msg)
        if any(interval <= 0 for _, interval in ladder):
            msg = "axis.tick_ladder intervals must be positive"
            raise ValueError(msg)
        return ladder


class RowSettings(BaseModel):
    row_height: float = Field(default=18.0, gt=0)
    row_gap: float = Field(default=14.0, ge=0)
    bottom_padding: float = Field(default=60.0, ge=0)


class CanvasSettings(BaseModel):
    pad_left: float = 48.0
    pad_right: float = 160.0
    reserved_top: float = 120.0
    min_bar_width: float = 2.0


class GridSettings(BaseModel):
    gap: int = Field(default=3, ge=0)
    min_size: int = Field(default=12, gt=0)
    max_size: int = Field(default=56, gt=0)
    min_columns: int = Field(default=3, gt=0)
    early_exit_ratio: float | None = None
    extension_years: int = Field(default=25, ge=0)
    max_cells: int = Field(default=100, gt=0)

    @field_validator("early_exit_ratio", mode="after")
    @classmethod
    def ensure_ratio_in_range(cls, value: float | None) -> float | None:
        if value is not None and not 0 < value <= 1:
            msg = "grid.early_exit_ratio must be in (0, 1]"
            raise ValueError(msg)
        return value


class ArcSettings(BaseModel):
    max_contemporaries: int = Field(default=10, gt=0)
    min_radius: float = Field(default=28.0, ge=0)
    max_radius: float = Field(default=106.0, gt=0)
    max_sweep: float = Field(default=359.9, gt=0, le=360)

    @model_validator(mode="after")
    def ensure_radius_order(self) -> ArcSettings:
        if self.min_radius > self.max_radius:
            msg = "arcs.min_radius must not exceed arcs.max_radius"
            raise ValueError(msg)
        return self


class LayoutSettings(BaseModel):
    axis: AxisSettings = AxisSettings()
    rows: RowSettings = RowSettings()
    canvas: CanvasSettings = CanvasSettings()
    grid: GridSettings = GridSettings()
    arcs: ArcSettings = ArcSettings()
    palette: list[str] = Field(default_factory=lambda: list(DEFAULT_PALETTE), min_length=1)

    def to_chart_config(self) -> ChartConfig:
        return ChartConfig(
            axis=AxisConfig(
                current_year=self.axis.current_year,
                padding_ratio=self.axis.padding_ratio,
                min_padding=self.axis.min_padding,
                fallback_span=self.axis.fallback_span,
                tick_ladder=tuple(self.axis.tick_ladder),
                min_tick_interval=self.axis.min_tick_interval,
                bce_suffix=self.axis.bce_suffix,
            ),
            rows=RowConfig(
                row_height=self.rows.row_height,
                row_gap=self.rows.row_gap,
                bottom_padding=self.rows.bottom_padding,
            ),
            canvas=ChartCanvasConfig(
                pad_left=self.canvas.pad_left,
                pad_right=self.canvas.pad_right,
                reserved_top=self.canvas.reserved_top,
                min_bar_width=self.canvas.min_bar_width,
            ),
            grid=GridConfig(
                gap=self.grid.gap,
                min_size=self.grid.min_size,
                max_size=self.grid.max_size,
                min_columns=self.grid.min_columns,
                early_exit_ratio=self.grid.early_exit_ratio,
                extension_years=self.grid.extension_years,
                max_cells=self.grid.max_cells,
            ),
            arcs=ArcConfig(
                max_contemporaries=self.arcs.max_contemporaries,
                min_radius=self.arcs.min_radius,
                max_radius=self.arcs.max_radius,
                max_sweep=self.arcs.max_sweep,
            ),
            palette=tuple(self.palette),
        )


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LIFELINES_", env_nested_delimiter="__")

    title: str = "Lifelines"
    layout: LayoutSettings = LayoutSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("LIFELINES_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
