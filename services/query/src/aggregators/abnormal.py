from typing import Iterable, List

from shared.constants import Fields
from src.domain.errors import NoDataError, QueryError
from src.domain.records import EventRecord, Table


def marker_field(record: EventRecord) -> str:
    if record.has(Fields.IS_READ):
        return Fields.IS_READ
    # rows from the legacy writer carry the marker under createTime
    return Fields.CREATE_TIME


def latest_abnormal_flag(tables: Iterable[Table]) -> bool:
    """Marker of the chronologically latest record.

    Records are ordered by timestamp and the last one decides. When several
    records share the latest timestamp, an abnormal marker wins.
    """
    records: List[EventRecord] = [record for table in tables for record in table]
    if not records:
        raise NoDataError("abnormal")
    if any(record.timestamp is None for record in records):
        raise QueryError("abnormal record without timestamp")
    keyed = [(record.timestamp, record.as_bool(marker_field(record))) for record in records]
    return max(keyed)[1]
