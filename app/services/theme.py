"""
Theme service: a single persisted row holding the UI theme.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.models.theme import THEME_ROW_ID, AppTheme
from app.schemas.theme import ThemeName

logger = logging.getLogger("app.theme")


class ThemeService:
    """Read and upsert the application theme."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_theme(self) -> str:
        """Saved theme, or the configured default when none was saved."""
        row = await self.db.get(AppTheme, THEME_ROW_ID)
        if row is None:
            return ThemeName(get_settings().default_theme).value
        return row.theme

    async def save_theme(self, theme: str) -> str:
        """Create or replace the saved theme."""
        row = await self.db.get(AppTheme, THEME_ROW_ID)
        if row is None:
            row = AppTheme(id=THEME_ROW_ID, theme=theme)
            self.db.add(row)
        else:
            row.theme = theme
        await self.db.flush()
        logger.info("Theme saved", extra={"event": "theme", "theme": theme})
        return theme
