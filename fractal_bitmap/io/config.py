"""
Configuration loading and presets.

Render settings are merged from defaults, a named preset, a JSON file and
explicit overrides, in that order of increasing precedence.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union

from ..api import RenderConfig

logger = logging.getLogger(__name__)

PRESETS: Dict[str, Dict[str, Any]] = {
    'reference': {
        'width': 800,
        'height': 600,
        'max_iterations': 100,
        'scale': 4.5,
        'center': (0.0, 0.0),
    },
    'thumbnail': {
        'width': 160,
        'height': 120,
        'max_iterations': 100,
    },
}


class ConfigManager:
    """Loads render configuration from presets and JSON files."""

    def __init__(self, presets: Optional[Dict[str, Dict[str, Any]]] = None):
        self.presets = dict(PRESETS if presets is None else presets)

    def get_preset(self, name: str) -> Dict[str, Any]:
        if name not in self.presets:
            available = ', '.join(self.presets.keys())
            raise ValueError(f"Unknown preset '{name}'. Available: {available}")
        return dict(self.presets[name])

    def load_config(self, filepath: Union[str, Path]) -> Dict[str, Any]:
        """
        Read a JSON configuration file.

        Args:
            filepath: Path to a JSON object of RenderConfig fields

        Returns:
            Dictionary of settings
        """
        filepath = Path(filepath)
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {filepath} must contain a JSON object")

        logger.info(f"Loaded configuration: {filepath}")
        return data

    def save_config(self, config: RenderConfig, filepath: Union[str, Path]) -> None:
        """Write a configuration as JSON."""
        filepath = Path(filepath)
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        logger.info(f"Saved configuration: {filepath}")

    def create_render_config(self, preset: Optional[str] = None,
                             config_file: Optional[Union[str, Path]] = None,
                             **overrides) -> RenderConfig:
        """
        Build a validated RenderConfig.

        Args:
            preset: Optional preset name
            config_file: Optional JSON file path
            **overrides: Field values that take precedence; None values are ignored

        Returns:
            RenderConfig
        """
        settings: Dict[str, Any] = {}
        if preset:
            settings.update(self.get_preset(preset))
        if config_file:
            settings.update(self.load_config(config_file))
        settings.update({k: v for k, v in overrides.items() if v is not None})

        config = RenderConfig.from_dict(settings)
        config.validate()
        return config
