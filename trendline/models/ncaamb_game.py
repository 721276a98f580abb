"""NCAAMB game database model."""

from datetime import date

from sqlalchemy import String, Integer, Float, Boolean, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from trendline.database import Base


class NCAAMBGame(Base):
    """College basketball game with KenPom snapshot columns."""

    __tablename__ = "ncaamb_games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    season: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    game_date: Mapped[date] = mapped_column(Date, nullable=False)

    home_team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"), nullable=False)
    away_team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"), nullable=False)
    winner_id: Mapped[int | None] = mapped_column(ForeignKey("teams.id"), nullable=True)

    home_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    away_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    score_difference: Mapped[int | None] = mapped_column(Integer, nullable=True)
    overtimes: Mapped[int] = mapped_column(Integer, default=0)

    home_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    away_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    home_kenpom_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    away_kenpom_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)

    spread: Mapped[float | None] = mapped_column(Float, nullable=True)
    over_under: Mapped[float | None] = mapped_column(Float, nullable=True)
    spread_result: Mapped[str | None] = mapped_column(String(10), nullable=True)
    ou_result: Mapped[str | None] = mapped_column(String(10), nullable=True)

    is_conference_game: Mapped[bool] = mapped_column(Boolean, default=False)
    is_neutral_site: Mapped[bool] = mapped_column(Boolean, default=False)
    is_tournament: Mapped[bool] = mapped_column(Boolean, default=False)  # NCAA Tournament
    is_nit: Mapped[bool] = mapped_column(Boolean, default=False)
    is_conference_tourney: Mapped[bool] = mapped_column(Boolean, default=False)
    home_seed: Mapped[int | None] = mapped_column(Integer, nullable=True)
    away_seed: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # KenPom efficiency
    home_adj_em: Mapped[float | None] = mapped_column(Float, nullable=True)
    away_adj_em: Mapped[float | None] = mapped_column(Float, nullable=True)
    home_adj_oe: Mapped[float | None] = mapped_column(Float, nullable=True)
    away_adj_oe: Mapped[float | None] = mapped_column(Float, nullable=True)
    home_adj_de: Mapped[float | None] = mapped_column(Float, nullable=True)
    away_adj_de: Mapped[float | None] = mapped_column(Float, nullable=True)
    home_adj_tempo: Mapped[float | None] = mapped_column(Float, nullable=True)
    away_adj_tempo: Mapped[float | None] = mapped_column(Float, nullable=True)

    # KenPom FanMatch predictions
    fm_home_pred: Mapped[float | None] = mapped_column(Float, nullable=True)
    fm_away_pred: Mapped[float | None] = mapped_column(Float, nullable=True)
    fm_home_win_prob: Mapped[float | None] = mapped_column(Float, nullable=True)
    fm_thrill_score: Mapped[float | None] = mapped_column(Float, nullable=True)
