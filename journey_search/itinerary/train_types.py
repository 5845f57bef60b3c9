"""Train-type classification by the leading letter of the train number.

Buckets are tested by progressive widening: the letter set starts with
the first bucket's letters and grows by one bucket at a time, and an
itinerary lands in the first bucket whose accumulated set contains the
leading letter of every leg. For one leg this is the same as picking
the bucket that owns the letter. For two legs it puts the journey in the
bucket of its "slowest" leg: G + D is D, G + K is K, and a leg outside
every bucket makes the whole journey Other.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from ..domain.models import DirectItinerary, Itinerary, TransferItinerary

OTHER_LABEL = "其他"

# Ordered from most to least restrictive.
TRAIN_TYPE_BUCKETS: Tuple[Tuple[str, str], ...] = (
    ("G/C", "GC"),
    ("D", "D"),
    ("T", "T"),
    ("K", "K"),
    ("Z", "Z"),
)


def train_type_labels(other_label: str = OTHER_LABEL) -> List[str]:
    """All bucket labels in display order, Other last."""
    return [label for label, _ in TRAIN_TYPE_BUCKETS] + [other_label]


def classify_letters(letters: Iterable[str], other_label: str = OTHER_LABEL) -> str:
    """Bucket label for a set of leading letters (one per leg)."""
    letters = list(letters)
    accumulated: set[str] = set()
    for label, bucket_letters in TRAIN_TYPE_BUCKETS:
        accumulated.update(bucket_letters)
        if all(letter in accumulated for letter in letters):
            return label
    return other_label


def classify_itinerary(itinerary: Itinerary, other_label: str = OTHER_LABEL) -> str:
    """Bucket label for a direct or transfer itinerary."""
    if isinstance(itinerary, TransferItinerary):
        letters = [itinerary.first_leg.train_letter, itinerary.second_leg.train_letter]
    elif isinstance(itinerary, DirectItinerary):
        letters = [itinerary.train_letter]
    else:
        raise TypeError(f"Unsupported itinerary type: {type(itinerary).__name__}")
    return classify_letters(letters, other_label)
