"""Itinerary pipeline - facet extraction, filtering and sorting."""

from .facets import LOADING_PLACEHOLDER, FacetGroup, FacetSet, extract_facets
from .filters import FilterCriteria, apply_filters, is_available
from .sorting import SortState, sort_itineraries
from .train_types import OTHER_LABEL, classify_itinerary, train_type_labels

__all__ = [
    "FacetGroup",
    "FacetSet",
    "extract_facets",
    "LOADING_PLACEHOLDER",
    "FilterCriteria",
    "apply_filters",
    "is_available",
    "SortState",
    "sort_itineraries",
    "OTHER_LABEL",
    "classify_itinerary",
    "train_type_labels",
]
