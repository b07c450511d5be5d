from __future__ import annotations
import math
from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum, IntEnum
from typing import Dict, Optional, Tuple

TAU = 2.0 * math.pi


# ============================================================
# Enumerations
# ============================================================

class CalendarKind(str, Enum):
    STANDARD = "standard"
    HEBREW = "hebrew"


class LayoutStyle(str, Enum):
    GRID = "grid"
    WEEKDAY_GRID = "weekday-grid"
    TRADITIONAL = "traditional"


class EventDisplayMode(str, Enum):
    LARGE = "large"
    LARGE_TEXT = "large-text"
    SMALL = "small"
    TEXT = "text"
    NONE = "none"

    @property
    def is_large(self) -> bool:
        return self in (EventDisplayMode.LARGE, EventDisplayMode.LARGE_TEXT)

    @property
    def shows_caption(self) -> bool:
        return self in (EventDisplayMode.LARGE_TEXT, EventDisplayMode.TEXT)


class GlyphVariant(str, Enum):
    COLOR = "color"
    MONO = "mono"


class Weekday(IntEnum):
    """Weekday numbering of ``date.weekday()``."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class AnnotationSource(str, Enum):
    CUSTOM = "custom"
    HOLIDAY = "holiday"
    HOLIDAY_SET = "holiday-set"


class ColorSource(str, Enum):
    CUSTOM = "custom"
    HOLIDAY = "holiday"
    WEEKEND = "weekend"
    DEFAULT = "default"


# ============================================================
# Configuration
# ============================================================

@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float  # positive east


@dataclass(frozen=True)
class CustomDate:
    text: str = ""
    emoji: Optional[str] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class ColorScheme:
    """Per-element color overrides. ``None`` means the theme decides."""
    year_text: Optional[str] = None
    month_text: Optional[str] = None
    day_text: Optional[str] = None
    day_name: Optional[str] = None
    grid_line: str = "#c1c1c1"
    weekend_background: Optional[str] = None
    holiday: str = "#ff5252"
    custom_date: str = "#4caf50"
    moon_light: str = "#FFFFFF"
    moon_dark: str = "#c1c1c1"
    moon_border: str = "#c1c1c1"


@dataclass(frozen=True)
class MoonStyle:
    size: int = 24
    offset_x: int = 30
    offset_y: int = 30
    border_width: float = 0.5


@dataclass(frozen=True)
class CalendarConfiguration:
    """Immutable input of a render pass. Build it with ``calrender.config.parse_config``."""
    year: int
    kind: CalendarKind = CalendarKind.STANDARD
    theme: str = "default"
    layout: LayoutStyle = LayoutStyle.GRID
    first_day_of_week: Weekday = Weekday.SUNDAY
    locale: str = "en-US"
    timezone: str = "America/New_York"
    observation_time: time = time(20, 0)
    location: Optional[Location] = None

    show_moon_phases: bool = False
    show_moon_illumination: bool = False
    show_full_moon_only: bool = False
    show_week_numbers: bool = False
    compact_mode: bool = False
    show_day_names: bool = True
    show_day_numbers: bool = True
    show_grid: bool = True
    highlight_weekends: bool = True
    rotate_month_names: bool = False
    show_hebrew_dates: bool = False

    colors: ColorScheme = field(default_factory=ColorScheme)
    moon: MoonStyle = field(default_factory=MoonStyle)
    holiday_sets: Tuple[str, ...] = ()
    custom_dates: Tuple[Tuple[date, CustomDate], ...] = ()
    event_display_mode: EventDisplayMode = EventDisplayMode.LARGE
    glyph_variant: GlyphVariant = GlyphVariant.COLOR

    @property
    def shows_moon(self) -> bool:
        return self.show_moon_illumination or self.show_moon_phases or self.show_full_moon_only

    def custom_date_map(self) -> Dict[date, CustomDate]:
        return dict(self.custom_dates)


# ============================================================
# Calendar data
# ============================================================

@dataclass(frozen=True)
class HolidayDefinition:
    date: date
    name: str
    set_id: str
    emoji: Optional[str] = None


@dataclass(frozen=True)
class Annotation:
    """The single resolved annotation of a calendar day."""
    date: date
    text: str
    source: AnnotationSource
    emoji: Optional[str] = None
    color: Optional[str] = None
    set_id: Optional[str] = None


PHASE_NAMES = (
    "new",
    "waxing crescent",
    "first quarter",
    "waxing gibbous",
    "full",
    "waning gibbous",
    "last quarter",
    "waning crescent",
)


@dataclass(frozen=True)
class MoonSample:
    date: date
    phase_angle: float   # radians in [0, 2pi)
    illumination: float  # [0, 1]

    @property
    def phase(self) -> float:
        """Fraction of the synodic cycle in [0, 1)."""
        return self.phase_angle / TAU

    @property
    def phase_name(self) -> str:
        return PHASE_NAMES[int(((self.phase + 1.0 / 16.0) % 1.0) * 8) % 8]

    @property
    def waxing(self) -> bool:
        return self.phase < 0.5


@dataclass(frozen=True)
class HebrewDate:
    year: int
    month: int
    day: int


@dataclass(frozen=True)
class HebrewDateMapping:
    gregorian: date
    hebrew: str
    holiday: Optional[str] = None


# ============================================================
# Layout model
# ============================================================

@dataclass(frozen=True)
class Box:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class TextPlacement:
    x: float
    y: float
    text: str
    css_class: Optional[str] = None
    anchor: str = "start"
    size: Optional[float] = None
    color: Optional[str] = None
    rotate: bool = False


@dataclass(frozen=True)
class GlyphPlacement:
    symbol: str
    x: float      # top-left corner of the glyph box
    y: float
    size: float


@dataclass(frozen=True)
class MoonOverlay:
    cx: float
    cy: float
    radius: float
    rotation_deg: float
    border_width: float
    sample: MoonSample


@dataclass(frozen=True)
class DayCell:
    date: date
    month: int
    box: Box
    number: Optional[TextPlacement] = None
    day_name: Optional[TextPlacement] = None
    is_weekend: bool = False
    fill: Optional[str] = None
    text_color: str = "#000000"
    color_source: ColorSource = ColorSource.DEFAULT
    annotation: Optional[Annotation] = None
    glyph: Optional[GlyphPlacement] = None
    caption: Optional[TextPlacement] = None
    moon: Optional[MoonOverlay] = None
    week_number: Optional[TextPlacement] = None
    hebrew_label: Optional[TextPlacement] = None

    @property
    def is_holiday(self) -> bool:
        return self.annotation is not None and self.annotation.source != AnnotationSource.CUSTOM

    @property
    def is_custom(self) -> bool:
        return self.annotation is not None and self.annotation.source == AnnotationSource.CUSTOM


@dataclass(frozen=True)
class MonthBlock:
    index: int
    name: str
    box: Box
    label: TextPlacement
    cells: Tuple[DayCell, ...]
    headers: Tuple[TextPlacement, ...] = ()
    empty_slots: Tuple[Box, ...] = ()
    week_numbers: Tuple[TextPlacement, ...] = ()


@dataclass(frozen=True)
class Palette:
    """Theme colors after applying the configuration overrides."""
    year_text: str
    month_text: str
    day_text: str
    day_name: str
    grid_line: str
    weekend: str
    holiday: str
    custom_date: str


@dataclass(frozen=True)
class CalendarLayout:
    config: CalendarConfiguration
    title: TextPlacement
    months: Tuple[MonthBlock, ...]
    bbox: Box
    palette: Palette
    subtitle: Optional[TextPlacement] = None
    column_headers: Tuple[TextPlacement, ...] = ()

    @property
    def cells(self) -> Tuple[DayCell, ...]:
        return tuple(c for m in self.months for c in m.cells)

    @property
    def has_overlays(self) -> bool:
        return any(c.glyph is not None or c.moon is not None for c in self.cells)


@dataclass(frozen=True)
class VectorDocument:
    markup: str
    year: int
    month_count: int

    def __str__(self) -> str:
        return self.markup

    def encode(self) -> bytes:
        return self.markup.encode("utf-8")
