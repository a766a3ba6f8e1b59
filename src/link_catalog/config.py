"""Catalog configuration using Pydantic BaseSettings with LINKCAT_ env prefix."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Catalog settings loaded from environment variables prefixed with LINKCAT_.

    Example:
        LINKCAT_DATA_DIR=/srv/catalog/data
        LINKCAT_EXPAND_PREFIXES=false
        LINKCAT_EXTRA_STOP_WORDS='["tutorial", "intro"]'
    """

    model_config = {"env_prefix": "LINKCAT_"}

    # ── Directory paths ──────────────────────────────────────────────────
    data_dir: Path = Path("./data")
    output_dir: Path = Path("./output")
    links_path: Path | None = None  # None = data_dir / "links.json"
    people_path: Path | None = None  # None = data_dir / "people.json"
    keywords_path: Path | None = None  # None = data_dir / "keywords.json"

    # ── Search settings ──────────────────────────────────────────────────
    extra_stop_words: list[str] = []
    expand_prefixes: bool = True  # "ali" also matches "alice"

    # ── Grid density ─────────────────────────────────────────────────────
    cell_size_desktop: int = 56  # px
    cell_size_narrow: int = 50  # px
    narrow_breakpoint: int = 475  # viewport width below which cells shrink

    # ── Diagnostics ──────────────────────────────────────────────────────
    suggest_threshold: int = 80  # rapidfuzz score (0-100) for "did you mean"

    @property
    def resolved_links_path(self) -> Path:
        return self.links_path or self.data_dir / "links.json"

    @property
    def resolved_people_path(self) -> Path:
        return self.people_path or self.data_dir / "people.json"

    @property
    def resolved_keywords_path(self) -> Path:
        return self.keywords_path or self.data_dir / "keywords.json"

    def ensure_dirs(self) -> None:
        """Create data and output directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)
