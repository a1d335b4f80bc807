import pytest
from pydantic import ValidationError
from src.domain.models import (
    AbnormalResult,
    DistributionEntry,
    ReferrerResult,
    ResponseTimeResult,
)


def test_results_dump_with_camel_case_aliases():
    rt = ResponseTimeResult(average_response_time=133.3)
    assert rt.model_dump(by_alias=True) == {"averageResponseTime": 133.3}

    ref = ReferrerResult(referrers=[DistributionEntry(key="/a", count=3, ratio=0.75)])
    assert ref.model_dump(by_alias=True) == {
        "referrers": [{"key": "/a", "count": 3, "ratio": 0.75}]
    }
    assert AbnormalResult(abnormal=True).model_dump() == {"abnormal": True}


def test_results_accept_alias_input():
    rt = ResponseTimeResult.model_validate({"averageResponseTime": 10})
    assert rt.average_response_time == 10.0


def test_results_are_frozen():
    result = AbnormalResult(abnormal=False)
    with pytest.raises(ValidationError):
        result.abnormal = True


def test_distribution_entry_bounds():
    with pytest.raises(ValidationError):
        DistributionEntry(key="/a", count=-1, ratio=0.5)
    with pytest.raises(ValidationError):
        DistributionEntry(key="/a", count=1, ratio=1.5)
