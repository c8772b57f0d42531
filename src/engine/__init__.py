"""Pure view-derivation engines: sync reconciliation, filtering, sorting, layout."""

from engine.filtering import (
    STATE_GROUPS,
    apply_filter,
    extract_domain,
    matches,
    split_tags,
    unique_categories,
    unique_states,
    unique_tags,
    unique_trackers,
)
from engine.layout import ColumnWidth, compute_layout
from engine.reconciler import ApplyResult, SyncReconciler
from engine.sorting import compare, set_sort, sort_torrents, toggle_sort

__all__ = [
    # Reconciler
    "ApplyResult",
    "SyncReconciler",
    # Filtering
    "STATE_GROUPS",
    "apply_filter",
    "extract_domain",
    "matches",
    "split_tags",
    "unique_categories",
    "unique_states",
    "unique_tags",
    "unique_trackers",
    # Sorting
    "compare",
    "set_sort",
    "sort_torrents",
    "toggle_sort",
    # Layout
    "ColumnWidth",
    "compute_layout",
]
