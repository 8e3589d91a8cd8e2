"""Configuration loader for Pagetext extraction, rendering and OCR settings."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .models import ReconstructionConfig


@dataclass
class TextConfig:
    """Text reconstruction defaults."""
    sort: str = "none"  # none, asc or desc
    columns: int = 1
    column_divider: Optional[str] = None
    fuzziness: float = 0.0

    def to_reconstruction_config(self) -> ReconstructionConfig:
        return ReconstructionConfig.from_options(
            sort=self.sort,
            columns=self.columns,
            column_divider=self.column_divider,
            fuzzy=self.fuzziness,
        )


@dataclass
class RenderConfig:
    """Page rendering configuration."""
    dpi: int = 72  # 72 DPI renders at the page's natural size
    jpeg_quality: float = 0.8


@dataclass
class OCRConfig:
    """Tesseract OCR configuration."""
    langs: list[str] = field(default_factory=lambda: ["eng"])
    psm: int = 3
    oem: int = 3

    @property
    def tesseract_config(self) -> str:
        return f"--psm {self.psm} --oem {self.oem}"


@dataclass
class PagetextConfig:
    """Root configuration object."""
    text: TextConfig = field(default_factory=TextConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    ocr: OCRConfig = field(default_factory=OCRConfig)


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "pagetext.yaml"


def load_config(config_path: Optional[Path | str] = None) -> PagetextConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config/pagetext.yaml

    Returns:
        PagetextConfig object with all settings
    """
    if config_path is None:
        if DEFAULT_CONFIG_PATH.exists():
            config_path = DEFAULT_CONFIG_PATH
        else:
            return PagetextConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return _parse_config(data)


def _parse_config(data: dict) -> PagetextConfig:
    """Parse configuration from dict."""
    config = PagetextConfig()

    if "text" in data:
        t = data["text"] or {}
        sort = t.get("sort", "none")
        # YAML reads bare true/false as booleans
        if isinstance(sort, bool):
            sort = "asc" if sort else "none"
        config.text.sort = sort
        config.text.columns = t.get("columns", 1)
        config.text.column_divider = t.get("column_divider")
        config.text.fuzziness = t.get("fuzziness", 0.0)

    if "render" in data:
        r = data["render"] or {}
        config.render.dpi = r.get("dpi", 72)
        config.render.jpeg_quality = r.get("jpeg_quality", 0.8)

    if "ocr" in data:
        o = data["ocr"] or {}
        langs = o.get("langs", ["eng"])
        config.ocr.langs = [langs] if isinstance(langs, str) else list(langs)
        config.ocr.psm = o.get("psm", 3)
        config.ocr.oem = o.get("oem", 3)

    return config


# Global config instance (lazy loaded)
_config: Optional[PagetextConfig] = None


def get_config(config_path: Optional[Path | str] = None) -> PagetextConfig:
    """
    Get the global configuration instance.

    Args:
        config_path: If provided, reload config from this path

    Returns:
        PagetextConfig instance
    """
    global _config
    if _config is None or config_path is not None:
        _config = load_config(config_path)
    return _config
