"""Group-by-mean views over the cleaned climate table."""

from auclimate.aggregation.views import (
    AggregateViews,
    aggregate_city_daily,
    aggregate_national_daily,
    aggregate_yearly,
    build_aggregates,
)

__all__ = [
    "AggregateViews",
    "aggregate_city_daily",
    "aggregate_national_daily",
    "aggregate_yearly",
    "build_aggregates",
]
