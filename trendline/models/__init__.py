"""SQLAlchemy read-models for the game record store."""

from trendline.models.team import Team
from trendline.models.nfl_game import NFLGame
from trendline.models.ncaaf_game import NCAAFGame
from trendline.models.ncaamb_game import NCAAMBGame

__all__ = [
    "Team",
    "NFLGame",
    "NCAAFGame",
    "NCAAMBGame",
]
