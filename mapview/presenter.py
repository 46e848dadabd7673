"""Map presentation: markers, custom controls and viewport moves.

The presenter owns no drawing code. It describes the map as a MapSpec and the
page script renders that with Leaflet.
"""

import logging
from collections.abc import Iterable

from catalog.models import Book
from mapview.models import ControlSpec, MapConfig, MapSpec, MarkerSpec, ViewportCommand

logger = logging.getLogger(__name__)

HOME_CONTROL = ControlSpec(
    name="home",
    icon="\U0001f3e0",
    tooltip="Home",
    action="reset_view",
    position="topleft",
)


class MapPresenter:
    """Describes one session's map and queues viewport moves for it."""

    def __init__(self, config: MapConfig, controls: Iterable[ControlSpec] = (HOME_CONTROL,)):
        self.config = config
        self._controls: dict[str, ControlSpec] = {}
        self._pending: ViewportCommand | None = None
        for control in controls:
            self.register_control(control)

    @property
    def controls(self) -> list[ControlSpec]:
        return list(self._controls.values())

    def register_control(self, control: ControlSpec) -> None:
        """Add a custom control; a control with the same name is replaced."""
        self._controls[control.name] = control

    def move_viewport(self, lat: float, lng: float, zoom: int | None = None) -> None:
        self._pending = ViewportCommand(lat=lat, lng=lng, zoom=zoom)
        logger.debug(f"Viewport move queued to ({lat}, {lng}) zoom={zoom}")

    def peek_pending(self) -> ViewportCommand | None:
        return self._pending

    def take_pending(self) -> ViewportCommand | None:
        """Return and clear the queued viewport move."""
        command, self._pending = self._pending, None
        return command

    def markers(self, books: Iterable[Book], open_id: int | None = None) -> list[MarkerSpec]:
        return [
            MarkerSpec(
                id=book.id,
                lat=book.lat,
                lng=book.lng,
                title=book.title,
                callno=book.callno,
                catalog_url=book.bobcat_url,
                open=book.id == open_id,
            )
            for book in books
        ]

    def describe(
        self,
        books: Iterable[Book],
        open_id: int | None = None,
        viewport: ViewportCommand | None = None,
    ) -> MapSpec:
        """Build the full map description for the current month's books."""
        return MapSpec(
            default_center=self.config.default_center,
            default_zoom=self.config.default_zoom,
            tile_url=self.config.tile_url,
            tile_attribution=self.config.tile_attribution,
            icon=self.config.icon,
            controls=self.controls,
            markers=self.markers(books, open_id),
            viewport=viewport,
        )
