"""Column pruning, missing-value diagnostics and row removal."""

from auclimate.cleaning.missingness import (
    MissingnessReport,
    diagnose_missingness,
    drop_incomplete,
    drop_unused_columns,
)

__all__ = [
    "MissingnessReport",
    "diagnose_missingness",
    "drop_incomplete",
    "drop_unused_columns",
]
