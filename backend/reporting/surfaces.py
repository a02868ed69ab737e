"""
Platform seams used by the export channels.

RenderHost is the page the application is showing (elements, staging
containers, window.open); PrintSurface is the transient window a print job
owns; FileSink receives finished files. browser.py implements the first two
on Playwright; tests use in-memory fakes.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional, Protocol

logger = logging.getLogger(__name__)


class PrintSurface(Protocol):
    def on_load(self, callback: Callable[[], None]) -> None: ...

    async def write(self, markup: str) -> None: ...

    async def print(self) -> None: ...

    async def close(self) -> None: ...


class RenderHost(Protocol):
    async def find_element(self, element_id: str) -> Optional[Any]: ...

    async def inner_html(self, element: Any) -> str: ...

    async def background_color(self, element: Any) -> Optional[str]: ...

    async def attach_container(self, markup: str, width_px: int) -> Any: ...

    async def detach_container(self, container: Any) -> None: ...

    async def capture(self, element: Any, scale: float) -> bytes: ...

    async def open_surface(self) -> Optional[PrintSurface]: ...

    async def print_page(self) -> None: ...


@dataclass(frozen=True)
class SavedFile:
    filename: str
    media_type: str
    data: bytes


class FileSink(Protocol):
    def save(self, file: SavedFile) -> None: ...


@dataclass
class MemorySink:
    """Keeps saved files in memory; the HTTP layer turns them into responses."""
    files: List[SavedFile] = field(default_factory=list)

    def save(self, file: SavedFile) -> None:
        self.files.append(file)

    @property
    def last(self) -> SavedFile | None:
        return self.files[-1] if self.files else None


class DirectorySink:
    """Writes each saved file into a directory, overwriting same-named files."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def save(self, file: SavedFile) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / file.filename
        path.write_bytes(file.data)
        logger.info("saved export path=%s bytes=%d", path, len(file.data))
