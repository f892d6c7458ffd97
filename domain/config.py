from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_CURRENT_YEAR = 2026

DEFAULT_TICK_LADDER: tuple[tuple[int, int], ...] = (
    (4000, 1000),
    (2000, 500),
    (800, 200),
    (300, 100),
    (120, 50),
    (50, 25),
)
DEFAULT_MIN_TICK_INTERVAL = 10

# Desaturated ink tones, one per category slot.
DEFAULT_PALETTE: tuple[str, ...] = (
    "#7a6e5f",
    "#5f6e6a",
    "#6e5f7a",
    "#7a6a5f",
    "#5f7a6e",
    "#6a6e5f",
    "#7a5f6a",
    "#5f6a7a",
)


@dataclass(frozen=True)
class AxisConfig:
    current_year: int = DEFAULT_CURRENT_YEAR
    padding_ratio: float = 0.04
    min_padding: int = 5
    fallback_span: int = 100
    tick_ladder: tuple[tuple[int, int], ...] = DEFAULT_TICK_LADDER
    min_tick_interval: int = DEFAULT_MIN_TICK_INTERVAL
    bce_suffix: str = "bc"


@dataclass(frozen=True)
class RowConfig:
    row_height: float = 18.0
    row_gap: float = 14.0
    bottom_padding: float = 60.0


@dataclass(frozen=True)
class ChartCanvasConfig:
    pad_left: float = 48.0
    pad_right: float = 160.0
    reserved_top: float = 120.0
    vertical_bias: float = 0.62
    min_bar_width: float = 2.0
    arrow_extension: float = 48.0
    arrow_margin: float = 14.0
    label_gap: float = 8.0
    label_margin: float = 8.0
    label_inset: float = 5.0
    char_width: float = 6.3


@dataclass(frozen=True)
class GridConfig:
    gap: int = 3
    min_size: int = 12
    max_size: int = 56
    min_columns: int = 3
    early_exit_ratio: float | None = None
    extension_years: int = 25
    max_cells: int = 100
    chrome_height: float = 124.0
    min_available_height: float = 60.0


@dataclass(frozen=True)
class ArcConfig:
    max_contemporaries: int = 10
    min_radius: float = 28.0
    max_radius: float = 106.0
    max_sweep: float = 359.9
    view_box: float = 260.0
    clock_ring_offset: float = 11.0


@dataclass(frozen=True)
class ChartConfig:
    axis: AxisConfig = field(default_factory=AxisConfig)
    rows: RowConfig = field(default_factory=RowConfig)
    canvas: ChartCanvasConfig = field(default_factory=ChartCanvasConfig)
    grid: GridConfig = field(default_factory=GridConfig)
    arcs: ArcConfig = field(default_factory=ArcConfig)
    palette: tuple[str, ...] = DEFAULT_PALETTE

    @property
    def current_year(self) -> int:
        return self.axis.current_year
