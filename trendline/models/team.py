"""Team database model."""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from trendline.database import Base


class Team(Base):
    """Team shared by every sport's game table."""

    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    sport: Mapped[str] = mapped_column(String(10), nullable=False)  # "NFL", "NCAAF", "NCAAMB"
    name: Mapped[str] = mapped_column(String(100), nullable=False)  # "Kansas City Chiefs"
    abbreviation: Mapped[str] = mapped_column(String(10), nullable=False)  # "KC"
    conference: Mapped[str] = mapped_column(String(50), nullable=False, default="")
