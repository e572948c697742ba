# pawdiary/utils/test_datetime_utils.py
"""
통합 시간 관리 유틸리티 기능 테스트

사용법: python -m pytest pawdiary/utils/test_datetime_utils.py -v
"""

import pytest
from datetime import datetime, date, timezone, timedelta
from pawdiary.utils.datetime_utils import DateTimeUtils

def test_parse_iso_datetime():
    """ISO 포맷 파싱 테스트"""
    test_cases = [
        "2024-01-15T10:30:00Z",
        "2024-01-15T10:30:00+09:00",
        "2024-01-15T10:30:00.123456Z",
        "2024-01-15T10:30:00",
        "2024-01-15",
    ]

    for iso_string in test_cases:
        dt = DateTimeUtils.parse_iso_datetime(iso_string)
        assert isinstance(dt, datetime)
        assert dt.tzinfo == timezone.utc  # UTC로 정규화되어야 함

def test_parse_iso_datetime_converts_offset_to_utc():
    dt = DateTimeUtils.parse_iso_datetime("2024-01-15T10:30:00+09:00")
    assert dt == datetime(2024, 1, 15, 1, 30, tzinfo=timezone.utc)

def test_parse_iso_datetime_invalid():
    for invalid in ["", "not-a-date", "2024-13-45"]:
        with pytest.raises(ValueError):
            DateTimeUtils.parse_iso_datetime(invalid)

def test_to_iso_string():
    """ISO 문자열 변환 테스트"""
    dt = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert DateTimeUtils.to_iso_string(dt) == "2024-01-15T10:30:00Z"

    # naive datetime은 UTC로 간주
    assert DateTimeUtils.to_iso_string(datetime(2024, 1, 15, 10, 30)) == "2024-01-15T10:30:00Z"

    # 다른 timezone은 UTC로 변환
    kst = timezone(timedelta(hours=9))
    assert DateTimeUtils.to_iso_string(datetime(2024, 1, 15, 19, 30, tzinfo=kst)) == "2024-01-15T10:30:00Z"

def test_iso_string_keeps_precision():
    dt = datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=timezone.utc)
    assert DateTimeUtils.parse_iso_datetime(DateTimeUtils.to_iso_string(dt)) == dt

def test_validate_datetime_field():
    """datetime 필드 검증 테스트"""
    valid_cases = [
        "2024-01-15T10:30:00Z",
        datetime(2024, 1, 15, 10, 30),
        datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
        date(2024, 1, 15),
    ]

    for case in valid_cases:
        result = DateTimeUtils.validate_datetime_field(case)
        assert isinstance(result, datetime)
        assert result.tzinfo == timezone.utc

    with pytest.raises(ValueError):
        DateTimeUtils.validate_datetime_field(None, "activity_date")
    with pytest.raises(ValueError):
        DateTimeUtils.validate_datetime_field(12345)

def test_to_document():
    """저장소 문서 변환 테스트"""
    test_data = {
        'birthdate': date(2020, 1, 15),
        'timestamp': datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
        'nested': {'event_date': date(2023, 12, 25)},
        'list_data': [{'created_at': datetime(2024, 1, 1)}],
        'plain': 42,
    }

    converted = DateTimeUtils.to_document(test_data)

    assert converted['birthdate'] == '2020-01-15'
    assert converted['timestamp'] == '2024-01-15T10:30:00Z'
    assert converted['nested']['event_date'] == '2023-12-25'
    assert converted['list_data'][0]['created_at'] == '2024-01-01T00:00:00Z'
    assert converted['plain'] == 42

def test_now_is_utc():
    assert DateTimeUtils.now().tzinfo == timezone.utc

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
