# pawdiary/core/config.py

import os # 환경 변수를 읽기 위해 사용합니다.

class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # 선호 단위/빠른 기본값/활동 기록을 저장할 문서 저장소 종류 ('firestore' 또는 'memory')
    STORE_BACKEND = os.getenv('STORE_BACKEND', 'firestore')
    # Firestore 컬렉션 이름 앞에 붙는 접두사. 환경별 데이터를 분리할 때 사용합니다.
    FIRESTORE_COLLECTION_PREFIX = os.getenv('FIRESTORE_COLLECTION_PREFIX', 'paw_diary')

    # 같은 값을 몇 번 입력해야 카테고리 기본값으로 승격되는지
    QUICK_DEFAULTS_LEARN_THRESHOLD = int(os.getenv('QUICK_DEFAULTS_LEARN_THRESHOLD', 3))
    QUICK_DEFAULTS_SUGGESTION_LIMIT = int(os.getenv('QUICK_DEFAULTS_SUGGESTION_LIMIT', 5))

    # 저장된 기록의 category 문자열을 알 수 없을 때 대신 사용할 카테고리
    FALLBACK_ACTIVITY_CATEGORY = os.getenv('FALLBACK_ACTIVITY_CATEGORY', 'Diet')
    DEFAULT_ACTIVITY_MODE = os.getenv('DEFAULT_ACTIVITY_MODE', 'guided')

class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    DEBUG = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH')

class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다. 외부 저장소 없이 메모리 저장소를 사용합니다."""
    TESTING = True
    DEBUG = False
    STORE_BACKEND = 'memory'
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')

class ProductionConfig(Config):
    """운영 환경을 위한 설정 클래스입니다."""
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')

# FLASK_ENV 값에 따라 create_app에서 적절한 설정 클래스를 선택하는 데 사용됩니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
