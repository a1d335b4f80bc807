from typing import Iterable

from shared.constants import Fields
from src.domain.errors import NoDataError
from src.domain.records import Table


def average_response_time(tables: Iterable[Table]) -> float:
    """Mean ``responseTime`` over every record of every table.

    One running sum and count span all tables, so the store may partition
    the result any way it likes.
    """
    total = 0.0
    count = 0
    for table in tables:
        for record in table:
            total += record.as_float(Fields.RESPONSE_TIME)
            count += 1
    if count == 0:
        raise NoDataError("response_time")
    return total / count
