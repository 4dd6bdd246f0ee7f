from dataclasses import dataclass, field
import json
from typing import Any, Dict, List

from memomark.markdown_error import MemomarkSettingsError


def _default_image_schemes() -> List[str]:
    return ["image", "cache"]


def _default_autolink_prefixes() -> List[str]:
    return ["https://", "http://", "ftp://", "www."]


def _section(data: Dict[str, Any], name: str, path: str) -> Dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise MemomarkSettingsError(f"Settings section '{name}' must be a JSON object", {"path": path})

    return section


def _string_list(section: Dict[str, Any], key: str, default: List[str], path: str) -> List[str]:
    value = section.get(key, default)
    if not isinstance(value, list) or not all(isinstance(item, str) and item for item in value):
        raise MemomarkSettingsError(f"Setting '{key}' must be a list of non-empty strings", {"path": path})

    return value


def _integer(section: Dict[str, Any], key: str, default: int, path: str) -> int:
    value = section.get(key, default)

    # bool is a subclass of int but never a valid count
    if not isinstance(value, int) or isinstance(value, bool):
        raise MemomarkSettingsError(f"Setting '{key}' must be an integer", {"path": path})

    return value


@dataclass
class MemomarkSettings:
    """
    Settings for the markdown engine.

    This class handles the loading and saving of settings to a JSON file.
    """
    image_schemes: List[str] = field(default_factory=_default_image_schemes)
    autolink_prefixes: List[str] = field(default_factory=_default_autolink_prefixes)
    max_heading_level: int = 6
    spaces_per_indent: int = 2

    @classmethod
    def load(cls, path: str) -> "MemomarkSettings":
        """
        Load settings from a JSON file.

        Args:
            path: Path to the settings file

        Returns:
            The loaded settings, with defaults for any missing values

        Raises:
            MemomarkSettingsError: If the file cannot be read, is not valid JSON,
                or holds a section or value of the wrong type
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)

        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MemomarkSettingsError(f"Failed to load settings: {e}", {"path": path}) from e

        if not isinstance(data, dict):
            raise MemomarkSettingsError("Settings file must contain a JSON object", {"path": path})

        images = _section(data, "images", path)
        links = _section(data, "links", path)
        blocks = _section(data, "blocks", path)

        return cls(
            image_schemes=_string_list(images, "schemes", _default_image_schemes(), path),
            autolink_prefixes=_string_list(links, "autolinkPrefixes", _default_autolink_prefixes(), path),
            max_heading_level=_integer(blocks, "maxHeadingLevel", 6, path),
            spaces_per_indent=max(1, _integer(blocks, "spacesPerIndent", 2, path))
        )

    def save(self, path: str) -> None:
        """Save settings to a JSON file."""
        data = {
            "images": {
                "schemes": self.image_schemes,
            },
            "links": {
                "autolinkPrefixes": self.autolink_prefixes,
            },
            "blocks": {
                "maxHeadingLevel": self.max_heading_level,
                "spacesPerIndent": self.spaces_per_indent,
            },
        }
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
