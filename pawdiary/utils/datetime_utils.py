# pawdiary/utils/datetime_utils.py
"""
프로젝트 전체에서 일관된 시간/날짜 처리를 위한 중앙화된 유틸리티 모듈

이 모듈의 목적:
1. 모든 시간 관련 작업을 UTC 기준으로 표준화
2. 활동 기록(activity_date, created_at, updated_at)의 ISO 포맷 파싱/생성 통일
3. 블록 데이터 안의 날짜 값을 JSON 호환 문서로 변환
"""

import logging
from datetime import datetime, date, timezone, time
from typing import Any
from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)


class DateTimeUtils:
    """시간/날짜 처리를 위한 중앙화된 유틸리티 클래스"""

    @staticmethod
    def now() -> datetime:
        """현재 시간을 UTC timezone-aware datetime으로 반환"""
        return datetime.now(timezone.utc)

    @staticmethod
    def parse_iso_datetime(iso_string: str) -> datetime:
        """
        ISO 포맷 문자열을 datetime 객체로 파싱

        지원 포맷:
        - 2024-01-15T10:30:00Z
        - 2024-01-15T10:30:00+09:00
        - 2024-01-15T10:30:00.123456Z
        - 2024-01-15T10:30:00
        - 2024-01-15
        """
        try:
            if not iso_string or not isinstance(iso_string, str):
                raise ValueError("빈 문자열은 파싱할 수 없습니다")

            # 'Z' 접미사 처리 (UTC 표시)
            if iso_string.endswith('Z'):
                iso_string = iso_string[:-1] + '+00:00'

            dt = dateutil_parser.isoparse(iso_string)

            # timezone-naive인 경우 UTC로 가정
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)

            return dt.astimezone(timezone.utc)

        except Exception as e:
            logger.warning(f"ISO datetime 파싱 실패: {iso_string} - {e}")
            raise ValueError(f"잘못된 ISO 날짜 형식입니다: {iso_string}")

    @staticmethod
    def to_iso_string(dt: datetime) -> str:
        """datetime 객체를 ISO 포맷 문자열로 변환 (Z 접미사)"""
        try:
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            else:
                dt = dt.astimezone(timezone.utc)

            return dt.isoformat().replace('+00:00', 'Z')

        except Exception as e:
            logger.error(f"ISO 문자열 변환 실패: {dt} - {e}")
            raise ValueError(f"datetime 객체를 ISO 문자열로 변환할 수 없습니다: {dt}")

    @staticmethod
    def validate_datetime_field(value: Any, field_name: str = "datetime") -> datetime:
        """
        외부에서 받은 datetime 값을 검증하고 UTC datetime으로 변환

        Args:
            value: 검증할 값 (ISO 문자열, datetime, date)
            field_name: 필드명 (오류 메시지용)

        Raises:
            ValueError: 값이 없거나 파싱할 수 없는 경우
        """
        if value is None:
            raise ValueError(f"{field_name}은 필수 필드입니다")

        if isinstance(value, str):
            return DateTimeUtils.parse_iso_datetime(value)

        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)

        if isinstance(value, date):
            return datetime.combine(value, time.min).replace(tzinfo=timezone.utc)

        raise ValueError(f"잘못된 {field_name} 형식입니다: {value}")

    @staticmethod
    def to_document(obj: Any) -> Any:
        """
        저장소 문서로 쓰기 위해 객체의 날짜/시간 값을 ISO 문자열로 변환

        변환 규칙:
        - datetime -> ISO 문자열 (UTC, Z 접미사)
        - date -> YYYY-MM-DD 문자열
        - dict/list/tuple 내부 재귀적 변환
        """
        if isinstance(obj, datetime):
            return DateTimeUtils.to_iso_string(obj)
        if isinstance(obj, date):
            return obj.strftime('%Y-%m-%d')
        if isinstance(obj, dict):
            return {k: DateTimeUtils.to_document(v) for k, v in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [DateTimeUtils.to_document(item) for item in obj]
        return obj

