"""Natural ordering shared by every serialized object and bag listing.

Digit runs compare by numeric value ("obj9" < "obj10"); text runs compare
case-insensitively after Unicode compatibility normalisation. The original
string is the final tiebreaker, so the ordering is total and sorting is
deterministic across runs.
"""

import re
import unicodedata
from typing import Iterable

_DIGIT_RUN = re.compile(r"([0-9]+)")


def natural_key(value: str) -> tuple:
    """Sort key for natural, numeric-aware ordering.

    re.split with a capturing group alternates text and digit runs starting
    with a (possibly empty) text run, so position parity always tells the
    run type and int/str never get compared against each other.
    """
    parts = _DIGIT_RUN.split(value)
    key = []
    for index, part in enumerate(parts):
        if index % 2:
            key.append((int(part), len(part)))
        else:
            key.append((unicodedata.normalize("NFKD", part).casefold(), 0))
    return (tuple(key), value)


def sort_ids(values: Iterable[str]) -> list[str]:
    """Return values sorted by natural_key."""
    return sorted(values, key=natural_key)
