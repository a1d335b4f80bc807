from typing import Dict, Iterable, List

from shared.constants import Fields
from src.domain.errors import QueryError
from src.domain.models import DistributionEntry
from src.domain.records import Table


def count_by_key(tables: Iterable[Table], key_field: str) -> Dict[str, int]:
    """Map each grouped key to its count (last value wins on duplicates)."""
    counts: Dict[str, int] = {}
    for table in tables:
        for record in table:
            # the store groups points without the tag under an empty key
            key = record.raw(key_field) if record.has(key_field) else ""
            count = record.as_int(Fields.VALUE)
            if count < 0:
                raise QueryError(f"negative count for '{key}': {count}")
            counts[key] = count
    return counts


def url_distribution(tables: Iterable[Table], key_field: str) -> List[DistributionEntry]:
    """Turn grouped ``count`` rows into per-key counts and ratios.

    An empty result is a valid answer (no traffic observed), not an error.
    """
    counts = count_by_key(tables, key_field)
    total = sum(counts.values())
    if total == 0:
        return [DistributionEntry(key=k, count=0, ratio=0.0) for k in counts]
    return [
        DistributionEntry(key=key, count=count, ratio=count / total)
        for key, count in counts.items()
    ]
