"""NCAAF game database model."""

from datetime import date

from sqlalchemy import String, Integer, Float, Boolean, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from trendline.database import Base


class NCAAFGame(Base):
    """College football game."""

    __tablename__ = "ncaaf_games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    season: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    game_date: Mapped[date] = mapped_column(Date, nullable=False)
    week: Mapped[str | None] = mapped_column(String(10), nullable=True)
    day_of_week: Mapped[str | None] = mapped_column(String(3), nullable=True)

    home_team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"), nullable=False)
    away_team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"), nullable=False)
    winner_id: Mapped[int | None] = mapped_column(ForeignKey("teams.id"), nullable=True)

    home_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    away_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    score_difference: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # AP poll
    home_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    away_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)

    spread: Mapped[float | None] = mapped_column(Float, nullable=True)
    over_under: Mapped[float | None] = mapped_column(Float, nullable=True)
    spread_result: Mapped[str | None] = mapped_column(String(10), nullable=True)
    ou_result: Mapped[str | None] = mapped_column(String(10), nullable=True)

    is_conference_game: Mapped[bool] = mapped_column(Boolean, default=False)
    is_playoff: Mapped[bool] = mapped_column(Boolean, default=False)  # CFP
    is_neutral_site: Mapped[bool] = mapped_column(Boolean, default=False)
    is_bowl_game: Mapped[bool] = mapped_column(Boolean, default=False)
    bowl_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_primetime: Mapped[bool] = mapped_column(Boolean, default=False)
    primetime_slot: Mapped[str | None] = mapped_column(String(10), nullable=True)

    weather_category: Mapped[str | None] = mapped_column(String(20), nullable=True)
    temperature: Mapped[float | None] = mapped_column(Float, nullable=True)
    wind_mph: Mapped[float | None] = mapped_column(Float, nullable=True)
