"""View and filter state as an explicit ``(event, model) -> (model, commands)`` step.

The event loop owns the current :class:`Model` and feeds every input event
through :func:`update`.  Transitions are synchronous and total: any event is
accepted in any state, and the only side effects are the returned commands
(history pushes and full-page loads) which the navigation collaborator
executes.

Usage::

    model = init("/people?filter=ali", width=1024)
    model, commands = update(FilterChanged(text="alice"), model)
    for command in commands:
        navigator.run(command)
    entities = visible_entities(catalog, model)
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field

from link_catalog.catalog import Catalog
from link_catalog.config import Settings
from link_catalog.models.entities import Collection
from link_catalog.utils.filter_codec import filter_url, parse_url

OVERLAY_DISMISS_ID = "overlay-dismiss"
ESCAPE_KEY = "Escape"


class Layout(str, Enum):
    GRID = "grid"
    LIST = "list"


class ColorMode(str, Enum):
    DAY = "day"
    NIGHT = "night"
    GREEN = "green"


class Model(BaseModel):
    """Snapshot consumed read-only by the renderer."""

    model_config = {"frozen": True}

    page: Collection = "links"
    filter: str = ""
    layout: Layout = Layout.GRID
    color: ColorMode = ColorMode.DAY
    viewport_width: int = 0
    cells_per_row: int = 1
    cell_width: float = 0.0
    overlay_open: bool = False
    at_top: bool = True


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class FilterChanged(BaseModel):
    text: str


class PageChanged(BaseModel):
    page: Collection


class LayoutChanged(BaseModel):
    layout: Layout


class ColorChanged(BaseModel):
    color: ColorMode


class Resized(BaseModel):
    width: int = Field(ge=0)
    height: int = Field(ge=0)


class DensityAdjusted(BaseModel):
    delta: int  # +1 more cells per row, -1 fewer


class Clicked(BaseModel):
    """A click, with the ids of the target and up to four of its ancestors."""

    ids: tuple[str, ...] = Field(default=(), max_length=5)


class KeyPressed(BaseModel):
    key: str


class ScrolledToTop(BaseModel):
    at_top: bool


class OverlayToggled(BaseModel):
    pass


class UrlChanged(BaseModel):
    url: str


class LinkClicked(BaseModel):
    url: str
    internal: bool


Event = Union[
    FilterChanged,
    PageChanged,
    LayoutChanged,
    ColorChanged,
    Resized,
    DensityAdjusted,
    Clicked,
    KeyPressed,
    ScrolledToTop,
    OverlayToggled,
    UrlChanged,
    LinkClicked,
]


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class PushUrl(BaseModel):
    """Add *url* to the browser history without reloading."""

    url: str


class LoadUrl(BaseModel):
    """Leave the application and navigate to *url*."""

    url: str


Command = Union[PushUrl, LoadUrl]


# ---------------------------------------------------------------------------
# Grid sizing
# ---------------------------------------------------------------------------


def cell_size(width: int, settings: Settings | None = None) -> int:
    """Pixel size of a grid cell for a viewport *width*."""
    settings = settings or Settings()
    if width < settings.narrow_breakpoint:
        return settings.cell_size_narrow
    return settings.cell_size_desktop


def grid_for_width(width: int, settings: Settings | None = None) -> tuple[int, float]:
    """Return ``(cells_per_row, cell_width)`` for a viewport *width*."""
    cells = max(1, width // cell_size(width, settings))
    return cells, width / cells


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def init(url: str, width: int = 0, settings: Settings | None = None) -> Model:
    """Build the starting model from the initial location and viewport."""
    page, text = parse_url(url)
    cells, cell_width = grid_for_width(width, settings)
    return Model(
        page=page,
        filter=text,
        viewport_width=width,
        cells_per_row=cells,
        cell_width=cell_width,
    )


def update(
    event: Event, model: Model, settings: Settings | None = None
) -> tuple[Model, list[Command]]:
    """Apply *event* to *model* and return the new model plus outbound commands."""
    if isinstance(event, FilterChanged):
        return (
            model.model_copy(update={"filter": event.text}),
            [PushUrl(url=filter_url(model.page, event.text))],
        )

    if isinstance(event, PageChanged):
        return (
            model.model_copy(update={"page": event.page}),
            [PushUrl(url=filter_url(event.page, model.filter))],
        )

    if isinstance(event, LayoutChanged):
        return model.model_copy(update={"layout": event.layout}), []

    if isinstance(event, ColorChanged):
        return model.model_copy(update={"color": event.color}), []

    if isinstance(event, Resized):
        cells, cell_width = grid_for_width(event.width, settings)
        return (
            model.model_copy(
                update={
                    "viewport_width": event.width,
                    "cells_per_row": cells,
                    "cell_width": cell_width,
                }
            ),
            [],
        )

    if isinstance(event, DensityAdjusted):
        cells = max(1, model.cells_per_row + event.delta)
        return (
            model.model_copy(
                update={"cells_per_row": cells, "cell_width": model.viewport_width / cells}
            ),
            [],
        )

    if isinstance(event, Clicked):
        if OVERLAY_DISMISS_ID in event.ids:
            return model.model_copy(update={"overlay_open": False}), []
        return model, []

    if isinstance(event, KeyPressed):
        if event.key == ESCAPE_KEY:
            return model.model_copy(update={"overlay_open": False}), []
        return model, []

    if isinstance(event, ScrolledToTop):
        return model.model_copy(update={"at_top": event.at_top}), []

    if isinstance(event, OverlayToggled):
        return model.model_copy(update={"overlay_open": not model.overlay_open}), []

    if isinstance(event, UrlChanged):
        page, text = parse_url(event.url)
        return model.model_copy(update={"page": page, "filter": text}), []

    if isinstance(event, LinkClicked):
        if event.internal:
            return model, [PushUrl(url=event.url)]
        return model, [LoadUrl(url=event.url)]

    raise TypeError(f"Unknown event: {event!r}")


def visible_entities(catalog: Catalog, model: Model) -> list:
    """Entities the current page shows for the model's filter."""
    return catalog.visible(model.page, model.filter)
