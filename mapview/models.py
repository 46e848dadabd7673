from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from config.settings import Settings


class MarkerIcon(BaseModel):
    """Image used for every book marker."""

    model_config = ConfigDict(frozen=True)

    icon_url: str
    shadow_url: str | None = None


class ControlSpec(BaseModel):
    """A custom map control: a button with an icon, tooltip and action."""

    model_config = ConfigDict(frozen=True)

    name: str
    icon: str
    tooltip: str
    action: Literal["reset_view"]
    position: Literal["topleft", "topright", "bottomleft", "bottomright"] = "topleft"


class MapConfig(BaseModel):
    """Map widget configuration passed to the presenter at construction."""

    model_config = ConfigDict(frozen=True)

    default_center: tuple[float, float] = (37.58, 58.20)
    default_zoom: int = 3
    tile_url: str = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
    tile_attribution: str = ""
    icon: MarkerIcon = MarkerIcon(
        icon_url="https://unpkg.com/leaflet@1.9.4/dist/images/marker-icon.png",
        shadow_url="https://unpkg.com/leaflet@1.9.4/dist/images/marker-shadow.png",
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> "MapConfig":
        return cls(
            default_center=(settings.default_lat, settings.default_lng),
            default_zoom=settings.default_zoom,
            tile_url=settings.tile_url,
            tile_attribution=settings.tile_attribution,
            icon=MarkerIcon(
                icon_url=settings.marker_icon_url,
                shadow_url=settings.marker_shadow_url,
            ),
        )


class ViewportCommand(BaseModel):
    """Move the map to a point. A zoom of None keeps the current zoom."""

    lat: float
    lng: float
    zoom: int | None = None
    animate: bool = True


class MarkerSpec(BaseModel):
    """One book marker and the content of its callout."""

    id: int
    lat: float
    lng: float
    title: str
    callno: str
    catalog_url: str | None = None
    open: bool = False


class MapSpec(BaseModel):
    """Everything the browser needs to draw the map."""

    default_center: tuple[float, float]
    default_zoom: int
    tile_url: str
    tile_attribution: str
    icon: MarkerIcon
    controls: list[ControlSpec] = Field(default_factory=list)
    markers: list[MarkerSpec] = Field(default_factory=list)
    viewport: ViewportCommand | None = None
