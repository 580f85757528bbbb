"""
UI preferences kept on the client, outside the server database.
"""
import json
import logging
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from app.schemas.theme import ThemeName

logger = logging.getLogger("app.client.preferences")

DEFAULT_PREFERENCES_PATH = Path.home() / ".photo_albums" / "preferences.json"


class Preferences(BaseModel):
    """
    Appearance and behavior settings.
    Performance mode switches every border and shadow off.
    """

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)

    theme: ThemeName = ThemeName.SPACE_BLUE
    image_fit_mode: Literal["contain", "cover", "fill"] = "contain"
    description_width: Literal["100%", "40%"] = "100%"
    enable_album_border: bool = True
    enable_photo_viewer_border: bool = True
    enable_photo_viewer_shadow: bool = True
    enable_photo_editor_shadow: bool = True
    enable_performance_mode: bool = False

    @model_validator(mode="after")
    def apply_performance_mode(self):
        if self.enable_performance_mode:
            # Assign through __dict__ to avoid re-running validation
            for name in (
                "enable_album_border",
                "enable_photo_viewer_border",
                "enable_photo_viewer_shadow",
                "enable_photo_editor_shadow",
            ):
                self.__dict__[name] = False
        return self


class PreferencesStore:
    """Loads and saves Preferences as a JSON file."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else DEFAULT_PREFERENCES_PATH

    def load(self) -> Preferences:
        """
        Read preferences. A missing, unreadable or invalid file gives the
        defaults.
        """
        if not self.path.exists():
            return Preferences()
        try:
            return Preferences.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning(
                "Preferences file unusable, using defaults",
                extra={
                    "event": "preferences",
                    "path": str(self.path),
                    "error_type": type(e).__name__,
                },
            )
            return Preferences()

    def save(self, preferences: Preferences) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(preferences.model_dump(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    def update(self, **changes) -> Preferences:
        """Change some fields and save the result."""
        current = self.load().model_dump()
        current.update(changes)
        preferences = Preferences.model_validate(current)
        self.save(preferences)
        return preferences
