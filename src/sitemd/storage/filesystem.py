"""Filesystem storage backend for converted pages."""

from pathlib import Path
from typing import Union
from urllib.parse import urlparse

from sitemd.core.interfaces import StorageBackend
from sitemd.core.models import DocumentPage

DEFAULT_OUTPUT_DIR = Path("output")
INDEX_NAME = "index"


def url_to_filename(url: str) -> str:
    """Derive a flat Markdown filename from a URL.

    The last non-empty path segment is used, so ``https://x.com/a/b/``
    maps to ``b.md``. URLs without a path map to ``index.md``. Different
    URLs may map to the same name.
    """
    path = urlparse(url).path.rstrip("/")
    segment = path.split("/")[-1] if path else ""
    return f"{segment or INDEX_NAME}.md"


class FilesystemStorage(StorageBackend):
    """Store converted pages as flat files in one directory."""

    def __init__(self, output_dir: Union[str, Path] = DEFAULT_OUTPUT_DIR) -> None:
        self._output_dir = Path(output_dir)

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def url_to_filepath(self, url: str) -> Path:
        """Convert URL to filepath.

        Args:
            url: Source URL.

        Returns:
            Local filepath inside the output directory.
        """
        return self._output_dir / url_to_filename(url)

    async def save_page(self, page: DocumentPage, filepath: Path) -> None:
        """Save a page to the filesystem, replacing any existing file.

        Args:
            page: Page to save.
            filepath: Target filepath.
        """
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(page.content_markdown, encoding="utf-8")
