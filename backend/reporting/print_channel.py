"""
Print through a transient window.

Flow per job: open window -> write self-contained markup -> wait for load
(bounded by a fallback timer) -> print once -> close. The window is closed on
every exit path.
"""
from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from .document import render_template
from .errors import ElementNotFoundError, PopupBlockedError
from .surfaces import PrintSurface, RenderHost

logger = logging.getLogger(__name__)

PRINT_FALLBACK_SECONDS = max(0.0, int(os.getenv("PRINT_FALLBACK_MS", "500")) / 1000)
DEFAULT_ELEMENT_BACKGROUND = "#f0fdf4"


class PrintChannel:
    def __init__(self, host: RenderHost, fallback_seconds: float = PRINT_FALLBACK_SECONDS) -> None:
        self._host = host
        self._fallback_seconds = fallback_seconds

    async def print(self, element_id: str | None = None) -> None:
        """Print one element in its own window, or the whole host page when no id is given."""
        if not element_id:
            await self._host.print_page()
            return

        element = await self._host.find_element(element_id)
        if element is None:
            raise ElementNotFoundError(element_id)
        body = await self._host.inner_html(element)
        background = await self._host.background_color(element) or DEFAULT_ELEMENT_BACKGROUND
        markup = render_template("print_element.html", {"BACKGROUND": background, "BODY_HTML": body})
        await self._print_markup(markup)

    async def print_document(self, markup: str) -> None:
        """Print a document already composed with its own stylesheet."""
        await self._print_markup(markup)

    @asynccontextmanager
    async def _surface(self) -> AsyncIterator[PrintSurface]:
        surface = await self._host.open_surface()
        if surface is None:
            raise PopupBlockedError()
        try:
            yield surface
        finally:
            await surface.close()

    async def _print_markup(self, markup: str) -> None:
        async with self._surface() as surface:
            loaded = asyncio.Event()
            surface.on_load(loaded.set)
            await surface.write(markup)
            try:
                await asyncio.wait_for(loaded.wait(), timeout=self._fallback_seconds)
            except asyncio.TimeoutError:
                logger.info("print surface load not signalled after %.2fs; printing anyway", self._fallback_seconds)
            await surface.print()
