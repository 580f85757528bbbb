"""
Theme router: the single server-side UI preference.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.theme import ThemeResponse, ThemeSaved, ThemeUpdate
from app.services.theme import ThemeService

router = APIRouter(prefix="/theme", tags=["Theme"])


@router.get(
    "",
    response_model=ThemeResponse,
    summary="Get theme",
)
async def get_theme(db: AsyncSession = Depends(get_db)) -> ThemeResponse:
    """Saved theme, `SpaceBlue` until one is saved."""
    return ThemeResponse(theme=await ThemeService(db).get_theme())


@router.post(
    "",
    response_model=ThemeSaved,
    summary="Save theme",
)
async def save_theme(
    payload: ThemeUpdate,
    db: AsyncSession = Depends(get_db),
) -> ThemeSaved:
    """
    Save the UI theme.

    - **theme**: one of `SpaceBlue`, `RoseMoon`, `solarized`, `dracula`, `nord`
    """
    theme = await ThemeService(db).save_theme(payload.theme.value)
    return ThemeSaved(theme=theme)
