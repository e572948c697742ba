# pawdiary/core/errors.py
from typing import Optional


class MappingError(Exception):
    """
    폼 데이터 ⇄ 활동 기록 변환 중 발생하는 검증 오류.
    문제가 된 필드명을 함께 전달하여 호출자가 사용자에게 표시할 수 있도록 합니다.
    """
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self):
        return {"error_code": "MAPPING_ERROR", "field": self.field, "message": self.message}


class StoreUnavailableError(Exception):
    """문서 저장소 I/O 실패. 선호도/학습 서비스 내부에서만 처리되며 사용자에게 노출되지 않습니다."""
    pass
