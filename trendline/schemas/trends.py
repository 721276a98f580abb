"""Trend query Pydantic schemas."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from trendline.config import settings
from trendline.services.trends import (
    FilterOperator,
    OrderBy,
    Perspective,
    Sport,
    TrendFilter,
    TrendQuery,
)
from trendline.services.trends.game import ALL_SPORTS

FilterValue = (
    bool
    | int
    | float
    | str
    | Annotated[list[int | float | str], Field(max_length=50)]
    | None
)

ORDERING_OPERATORS = (
    FilterOperator.GT,
    FilterOperator.GTE,
    FilterOperator.LT,
    FilterOperator.LTE,
)


class TrendFilterRequest(BaseModel):
    """One filter: any game field, raw record key, or computed field."""

    field: str = Field(min_length=1, description="Game field, raw key, or month/year/month_name")
    operator: FilterOperator
    value: FilterValue = None

    @model_validator(mode="after")
    def _value_fits_operator(self) -> "TrendFilterRequest":
        operator = self.operator
        if operator == FilterOperator.BETWEEN:
            if not isinstance(self.value, list) or len(self.value) != 2:
                raise ValueError("between requires a [low, high] list")
        elif operator in (FilterOperator.IN, FilterOperator.NOT_IN):
            if not isinstance(self.value, list):
                raise ValueError(f"{operator.value} requires a list value")
        elif operator in ORDERING_OPERATORS:
            if self.value is None or isinstance(self.value, list):
                raise ValueError(f"{operator.value} requires a single value")
        return self


class OrderByRequest(BaseModel):
    field: str = Field(min_length=1)
    direction: Literal["asc", "desc"]


class TrendQueryRequest(BaseModel):
    """Body of ``POST /trends``."""

    sport: Literal["NFL", "NCAAF", "NCAAMB", "ALL"]
    team: str | None = Field(default=None, max_length=100)
    perspective: Perspective | None = None
    filters: list[TrendFilterRequest] = Field(default_factory=list)
    season_range: tuple[int, int] | None = None
    limit: int | None = Field(default=None, gt=0)
    order_by: OrderByRequest | None = None

    @field_validator("sport", mode="before")
    @classmethod
    def _upper_sport(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("filters")
    @classmethod
    def _max_filters(cls, value: list[TrendFilterRequest]) -> list[TrendFilterRequest]:
        if len(value) > settings.trend_max_filters:
            raise ValueError(f"at most {settings.trend_max_filters} filters are allowed")
        return value

    @field_validator("limit")
    @classmethod
    def _max_limit(cls, value: int | None) -> int | None:
        if value is not None and value > settings.trend_max_limit:
            raise ValueError(f"limit must be <= {settings.trend_max_limit}")
        return value

    def to_query(self) -> TrendQuery:
        return TrendQuery(
            sport=ALL_SPORTS if self.sport == ALL_SPORTS else Sport(self.sport),
            team=self.team or None,
            perspective=self.perspective or Perspective.HOME,
            filters=[
                TrendFilter(field=f.field, operator=f.operator, value=f.value)
                for f in self.filters
            ],
            season_range=self.season_range,
            limit=self.limit,
            order_by=(
                OrderBy(field=self.order_by.field, direction=self.order_by.direction)
                if self.order_by
                else None
            ),
        )
