"""NFL game database model."""

from datetime import date

from sqlalchemy import String, Integer, Float, Boolean, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from trendline.database import Base


class NFLGame(Base):
    """Completed or scheduled NFL game as written by the ingestion jobs."""

    __tablename__ = "nfl_games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    season: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    game_date: Mapped[date] = mapped_column(Date, nullable=False)
    week: Mapped[str | None] = mapped_column(String(10), nullable=True)  # "1".."18", "WildCard"
    day_of_week: Mapped[str | None] = mapped_column(String(3), nullable=True)  # "Sun"

    home_team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"), nullable=False)
    away_team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"), nullable=False)
    winner_id: Mapped[int | None] = mapped_column(ForeignKey("teams.id"), nullable=True)

    home_team_original: Mapped[str | None] = mapped_column(String(100), nullable=True)
    away_team_original: Mapped[str | None] = mapped_column(String(100), nullable=True)

    home_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    away_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    score_difference: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Betting lines (spread negative = home favored)
    spread: Mapped[float | None] = mapped_column(Float, nullable=True)
    over_under: Mapped[float | None] = mapped_column(Float, nullable=True)
    spread_result: Mapped[str | None] = mapped_column(String(10), nullable=True)
    ou_result: Mapped[str | None] = mapped_column(String(10), nullable=True)

    is_playoff: Mapped[bool] = mapped_column(Boolean, default=False)
    is_neutral_site: Mapped[bool] = mapped_column(Boolean, default=False)
    is_primetime: Mapped[bool] = mapped_column(Boolean, default=False)
    primetime_slot: Mapped[str | None] = mapped_column(String(10), nullable=True)  # "SNF", "MNF", "TNF"

    weather_category: Mapped[str | None] = mapped_column(String(20), nullable=True)
    temperature: Mapped[float | None] = mapped_column(Float, nullable=True)
    wind_mph: Mapped[float | None] = mapped_column(Float, nullable=True)
