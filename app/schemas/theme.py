"""
Theme schemas.
"""
from enum import Enum

from pydantic import BaseModel


class ThemeName(str, Enum):
    """Available color themes."""

    SPACE_BLUE = "SpaceBlue"
    ROSE_MOON = "RoseMoon"
    SOLARIZED = "solarized"
    DRACULA = "dracula"
    NORD = "nord"


class ThemeResponse(BaseModel):
    theme: ThemeName


class ThemeUpdate(BaseModel):
    theme: ThemeName


class ThemeSaved(BaseModel):
    message: str = "Theme saved"
    theme: ThemeName
