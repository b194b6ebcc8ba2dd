"""
Fee Schedules Package

General (RVG), court (GKG) and legal aid (PKH) fee tables.
"""

from .base import select_version
from .court import (
    COURT_FEE_SCHEDULES,
    GKG_2025,
    compute_court_fee,
    compute_court_fee_for_rate,
    get_court_schedule_for_date,
)
from .general import (
    FEE_SCHEDULES,
    RVG_2021,
    RVG_2025,
    compute_base_fee,
    get_lookup_table,
    get_schedule_for_date,
)
from .reduced import (
    PKH_2021,
    PKH_2025,
    REDUCED_FEE_SCHEDULES,
    compute_legal_aid_fee,
    compute_reduced_fee,
    get_reduced_schedule_for_date,
)

__all__ = [
    "select_version",
    "FEE_SCHEDULES",
    "RVG_2025",
    "RVG_2021",
    "compute_base_fee",
    "get_lookup_table",
    "get_schedule_for_date",
    "COURT_FEE_SCHEDULES",
    "GKG_2025",
    "compute_court_fee",
    "compute_court_fee_for_rate",
    "get_court_schedule_for_date",
    "REDUCED_FEE_SCHEDULES",
    "PKH_2025",
    "PKH_2021",
    "compute_reduced_fee",
    "compute_legal_aid_fee",
    "get_reduced_schedule_for_date",
]
