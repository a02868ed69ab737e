"""
Playwright (Chromium) implementation of RenderHost and PrintSurface.

open_render_host() launches a headless browser whose page plays the role of the
application page; the HTTP layer uses it to stage and rasterize documents.
"""
from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from io import BytesIO
from typing import AsyncIterator, Callable, Optional

from PIL import Image
from playwright.async_api import ElementHandle, Error as PlaywrightError, Page, async_playwright

from .pdf_channel import RASTER_SCALE

logger = logging.getLogger(__name__)

CHROMIUM_ARGS = [a for a in os.getenv("CHROMIUM_ARGS", "--no-sandbox").split() if a]
POPUP_TIMEOUT_MS = int(os.getenv("POPUP_TIMEOUT_MS", "2000"))

_ATTACH_JS = """
([markup, width]) => {
  const el = document.createElement('div');
  el.setAttribute('data-export-staging', '');
  el.style.cssText = `position:absolute;left:0;top:0;width:${width}px;background:#fff;z-index:2147483647;`;
  el.innerHTML = markup;
  document.body.appendChild(el);
  return el;
}
"""

_IMAGES_READY_JS = """
el => Promise.all(Array.from(el.querySelectorAll('img')).map(img =>
  img.complete ? null : new Promise(resolve => { img.onload = img.onerror = resolve; })
))
"""


class PlaywrightSurface:
    """A popup page opened by window.open on the host page."""

    def __init__(self, page: Page) -> None:
        self._page = page

    def on_load(self, callback: Callable[[], None]) -> None:
        self._page.once("load", lambda _page: callback())

    async def write(self, markup: str) -> None:
        await self._page.set_content(markup, wait_until="domcontentloaded")

    async def print(self) -> None:
        await self._page.bring_to_front()
        await self._page.evaluate("() => window.print()")

    async def close(self) -> None:
        if not self._page.is_closed():
            await self._page.close()


class PlaywrightHost:
    def __init__(self, page: Page, device_scale_factor: float = RASTER_SCALE) -> None:
        self._page = page
        self._device_scale_factor = device_scale_factor
        self._popup_lock = asyncio.Lock()

    async def find_element(self, element_id: str) -> Optional[ElementHandle]:
        return await self._page.query_selector(f"[id={element_id!r}]")

    async def inner_html(self, element: ElementHandle) -> str:
        return await element.inner_html()

    async def background_color(self, element: ElementHandle) -> Optional[str]:
        color = await element.evaluate("el => getComputedStyle(el).backgroundColor")
        # transparent elements report rgba(0, 0, 0, 0)
        if not color or color.replace(" ", "") == "rgba(0,0,0,0)":
            return None
        return color

    async def attach_container(self, markup: str, width_px: int) -> ElementHandle:
        handle = await self._page.evaluate_handle(_ATTACH_JS, [markup, width_px])
        # the node is already in the DOM; take it back out if anything after this fails
        try:
            element = handle.as_element()
            if element is None:
                raise RuntimeError("staging container is not an element")
            await element.evaluate(_IMAGES_READY_JS)
        except BaseException:
            await handle.evaluate("el => el.remove()")
            raise
        return element

    async def detach_container(self, container: ElementHandle) -> None:
        await container.evaluate("el => el.remove()")

    async def capture(self, element: ElementHandle, scale: float) -> bytes:
        if scale == self._device_scale_factor:
            return await element.screenshot(type="png", scale="device")
        png = await element.screenshot(type="png", scale="css")
        image = Image.open(BytesIO(png))
        resized = image.resize((round(image.width * scale), round(image.height * scale)), Image.Resampling.LANCZOS)
        out = BytesIO()
        resized.save(out, format="PNG")
        return out.getvalue()

    async def open_surface(self) -> Optional[PlaywrightSurface]:
        try:
            # expect_popup takes the next popup event, so only one window.open may be in flight
            async with self._popup_lock:
                async with self._page.expect_popup(timeout=POPUP_TIMEOUT_MS) as popup_info:
                    await self._page.evaluate("() => { window.open('', '_blank'); }")
                popup = await popup_info.value
        except PlaywrightError as e:
            logger.warning("print window could not be opened: %s", e)
            return None
        return PlaywrightSurface(popup)

    async def print_page(self) -> None:
        await self._page.evaluate("() => window.print()")


@asynccontextmanager
async def open_render_host(html: str = "<html><body></body></html>") -> AsyncIterator[PlaywrightHost]:
    """Headless Chromium page at RASTER_SCALE device pixels, torn down on exit."""
    async with async_playwright() as p:
        browser = await p.chromium.launch(args=CHROMIUM_ARGS)
        try:
            context = await browser.new_context(device_scale_factor=RASTER_SCALE)
            page = await context.new_page()
            await page.set_content(html, wait_until="load")
            await page.emulate_media(media="print")
            yield PlaywrightHost(page, device_scale_factor=RASTER_SCALE)
        finally:
            await browser.close()
