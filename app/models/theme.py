"""
Application theme model. The table holds a single row (id=1).
"""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

THEME_ROW_ID = 1


class AppTheme(Base):
    """Persisted UI theme."""

    __tablename__ = "app_theme"

    id: Mapped[int] = mapped_column(primary_key=True)
    theme: Mapped[str] = mapped_column(String(50), nullable=False)

    def __repr__(self) -> str:
        return f"<AppTheme(theme={self.theme})>"
