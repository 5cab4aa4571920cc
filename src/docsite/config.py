"""Configuration management for Docsite.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "docsite.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class ContentConfig:
    """Content tree configuration."""

    tree_file: Path = field(default_factory=lambda: Path("_content.json"))
    content_dir: Path = field(default_factory=lambda: Path("content"))
    site_title: str = "webpack"


@dataclass
class ThemeConfig:
    """Theme preference storage configuration."""

    storage_file: Path = field(default_factory=lambda: Path(".cache/preferences.json"))


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    content: ContentConfig
    theme: ThemeConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for docsite.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        return cls(
            server=ServerConfig(),
            content=ContentConfig(),
            theme=ThemeConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            content=cls._parse_content(data.get("content"), config_dir),
            theme=cls._parse_theme(data.get("theme"), config_dir),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_content(cls, data: object, config_dir: Path) -> ContentConfig:
        """Parse content configuration section.

        Args:
            data: Raw content section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ContentConfig instance
        """
        if data is None:
            return ContentConfig(
                tree_file=config_dir / "_content.json",
                content_dir=config_dir / "content",
            )

        if not isinstance(data, dict):
            raise ValueError("content section must be a dictionary")

        tree_file = data.get("tree_file", "_content.json")
        if not isinstance(tree_file, str):
            raise ValueError("content.tree_file must be a string")

        content_dir = data.get("content_dir", "content")
        if not isinstance(content_dir, str):
            raise ValueError("content.content_dir must be a string")

        site_title = data.get("site_title", "webpack")
        if not isinstance(site_title, str):
            raise ValueError("content.site_title must be a string")

        return ContentConfig(
            tree_file=config_dir / tree_file,
            content_dir=config_dir / content_dir,
            site_title=site_title,
        )

    @classmethod
    def _parse_theme(cls, data: object, config_dir: Path) -> ThemeConfig:
        if data is None:
            return ThemeConfig(storage_file=config_dir / ".cache" / "preferences.json")

        if not isinstance(data, dict):
            raise ValueError("theme section must be a dictionary")

        storage_file = data.get("storage_file", ".cache/preferences.json")
        if not isinstance(storage_file, str):
            raise ValueError("theme.storage_file must be a string")

        return ThemeConfig(storage_file=config_dir / storage_file)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        tree_file: Path | None = None,
        content_dir: Path | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            tree_file: Override content.tree_file
            content_dir: Override content.content_dir

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        content = self.content
        if tree_file is not None or content_dir is not None:
            content = replace(
                self.content,
                tree_file=tree_file if tree_file is not None else self.content.tree_file,
                content_dir=(
                    content_dir if content_dir is not None else self.content.content_dir
                ),
            )

        return replace(self, server=server, content=content)
