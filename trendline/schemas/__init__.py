"""Pydantic schemas for API request/response models."""

from trendline.schemas.trends import OrderByRequest, TrendFilterRequest, TrendQueryRequest

__all__ = [
    "OrderByRequest",
    "TrendFilterRequest",
    "TrendQueryRequest",
]
