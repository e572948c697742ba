# pawdiary/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from flask import Flask, jsonify
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException
import firebase_admin
from firebase_admin import credentials

# - 설정 및 오류
from pawdiary.core.config import config_by_name
from pawdiary.core.errors import MappingError

# - API 블루프린트
from pawdiary.api.units.routes import units_bp
from pawdiary.api.templates.routes import templates_bp
from pawdiary.api.activities.routes import activities_bp, pet_activities_bp
from pawdiary.api.quick_defaults.routes import quick_defaults_bp

# - 서비스 모듈
from pawdiary.services.document_store import InMemoryDocumentStore, FirestoreDocumentStore
from pawdiary.services.activity_store import ActivityStore
from pawdiary.api.units.services import UnitPreferenceService
from pawdiary.api.templates.registry import ActivityTemplateRegistry
from pawdiary.api.quick_defaults.services import QuickDefaultsService
from pawdiary.api.activities.services import ActivityService


def _init_firebase(app):
    if firebase_admin._apps:
        return
    cred_path = app.config.get('FIREBASE_CREDENTIALS_PATH')
    if not cred_path or not os.path.exists(cred_path):
        raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
    firebase_admin.initialize_app(credentials.Certificate(cred_path))


def _create_stores(app):
    """설정된 백엔드에 따라 (설정용 저장소, 활동 기록용 저장소)를 생성합니다."""
    if app.config['STORE_BACKEND'] == 'memory':
        return InMemoryDocumentStore(), InMemoryDocumentStore()

    _init_firebase(app)
    prefix = app.config['FIRESTORE_COLLECTION_PREFIX']
    return (
        FirestoreDocumentStore(f"{prefix}_settings"),
        FirestoreDocumentStore(f"{prefix}_activities"),
    )


def create_app(config_name=None, store=None, activity_store=None):
    """
    Flask 애플리케이션 팩토리 함수.

    Args:
        config_name: 'development' | 'testing' | 'production'. 없으면 FLASK_ENV 사용
        store: 선호 단위/빠른 기본값용 문서 저장소 (테스트에서 주입)
        activity_store: 활동 기록용 문서 저장소 (테스트에서 주입)
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    # =====================================================================================
    # 4. 저장소 초기화
    # =====================================================================================
    if store is None or activity_store is None:
        default_store, default_activity_store = _create_stores(app)
        store = store or default_store
        activity_store = activity_store or default_activity_store

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}

    # 5-1. 다른 서비스의 기반이 되는 서비스 먼저 생성
    app.services['templates'] = ActivityTemplateRegistry()
    app.services['unit_preferences'] = UnitPreferenceService(store)
    app.services['quick_defaults'] = QuickDefaultsService(
        store, threshold=app.config['QUICK_DEFAULTS_LEARN_THRESHOLD']
    )
    app.services['activity_store'] = ActivityStore(activity_store)

    # 5-2. 다른 서비스를 주입받아야 하는 도메인 서비스 생성
    app.services['activities'] = ActivityService(
        activity_store=app.services['activity_store'],
        templates=app.services['templates'],
        quick_defaults=app.services['quick_defaults'],
        unit_preferences=app.services['unit_preferences'],
        fallback_category=app.config['FALLBACK_ACTIVITY_CATEGORY'],
        mode=app.config['DEFAULT_ACTIVITY_MODE'],
    )
    logging.info("Activity services initialized successfully")

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(units_bp, url_prefix='/api/units')
    app.register_blueprint(templates_bp, url_prefix='/api/templates')
    app.register_blueprint(activities_bp, url_prefix='/api/activities')

    # - 반려동물 단위 리소스
    app.register_blueprint(pet_activities_bp, url_prefix='/api/pets')
    app.register_blueprint(quick_defaults_bp, url_prefix='/api/pets')

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(MappingError)
    def handle_mapping_error(err):
        return jsonify(err.to_dict()), 400

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        if isinstance(err, HTTPException):
            return err
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "서버 내부에서 예상치 못한 오류가 발생했습니다."}
        return jsonify(response), 500

    # =====================================================================================
    # 8. 로깅 및 앱 반환
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
