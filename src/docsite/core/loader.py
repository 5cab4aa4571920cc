"""Content payload loading.

Pages carry a source identifier (``path``) pointing at the file they were
generated from. The payload for that page is pre-rendered at build time into
``content_dir`` and loaded lazily, only for the page being displayed.
"""

from pathlib import Path

SOURCE_PREFIX = "src/content/"


class ContentLoader:
    """Resolves page source identifiers to rendered payloads."""

    def __init__(self, content_dir: Path) -> None:
        """Initialize loader.

        Args:
            content_dir: Directory containing the rendered page payloads
        """
        self._content_dir = content_dir

    @property
    def content_dir(self) -> Path:
        """Root directory of rendered payloads."""
        return self._content_dir

    def resolve(self, source_path: str) -> Path:
        """Map a page source identifier to a payload file.

        Args:
            source_path: Page source identifier (e.g. "src/content/concepts/index.md")

        Returns:
            Path to the payload file

        Raises:
            FileNotFoundError: If the identifier points outside content_dir
        """
        relative = source_path.removeprefix(SOURCE_PREFIX).lstrip("/")
        root = self._content_dir.resolve()
        candidate = (root / relative).resolve()
        if not candidate.is_relative_to(root):
            raise FileNotFoundError(f"Content path escapes content directory: {source_path}")
        return candidate

    def load(self, source_path: str) -> str:
        """Load the rendered payload for a page.

        Args:
            source_path: Page source identifier

        Returns:
            Rendered page content

        Raises:
            FileNotFoundError: If no payload exists for the page
        """
        payload_path = self.resolve(source_path)
        if not payload_path.is_file():
            raise FileNotFoundError(f"Content not found: {source_path}")
        return payload_path.read_text(encoding="utf-8")
