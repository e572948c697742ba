# pawdiary/api/quick_defaults/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from .schemas import (
    CategoryQuerySchema,
    DefaultsUpdateSchema,
    UsageRequestSchema,
    SuggestionQuerySchema,
    UsageRecordSchema
)

quick_defaults_bp = Blueprint('quick_defaults_bp', __name__)

def _defaults_payload(service, pet_id, category):
    return {
        "petId": pet_id,
        "category": category,
        "defaults": service.get_category_defaults(pet_id, category),
    }

@quick_defaults_bp.route('/<int:pet_id>/quick-defaults', methods=['GET'])
def get_quick_defaults(pet_id):
    """
    반려동물의 빠른 기본값을 조회합니다.
    category가 주어지면 전역 기본값 위에 카테고리 기본값을 덮어쓴 결과를 반환합니다.
    """
    service = current_app.services['quick_defaults']
    try:
        category = CategoryQuerySchema().load(request.args)['category']
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    if category is None:
        return jsonify(service.get_pet_defaults(pet_id).to_dict()), 200
    return jsonify(_defaults_payload(service, pet_id, category)), 200

@quick_defaults_bp.route('/<int:pet_id>/quick-defaults', methods=['PATCH'])
def update_quick_defaults(pet_id):
    service = current_app.services['quick_defaults']
    try:
        data = DefaultsUpdateSchema().load(request.get_json() or {})
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    if data['category']:
        service.update_category_defaults(pet_id, data['category'], data['defaults'])
    else:
        service.update_global_defaults(pet_id, data['defaults'])
    return jsonify(_defaults_payload(service, pet_id, data['category'])), 200

@quick_defaults_bp.route('/<int:pet_id>/quick-defaults/usage', methods=['POST'])
def record_usage(pet_id):
    """입력값 사용을 기록합니다. 응답의 promoted로 기본값 승격 여부를 알 수 있습니다."""
    service = current_app.services['quick_defaults']
    try:
        data = UsageRequestSchema().load(request.get_json() or {})
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    usage = service.record_usage(pet_id, data['category'], data['field'], data['value'])
    return jsonify(UsageRecordSchema().dump(usage)), 200

@quick_defaults_bp.route('/<int:pet_id>/quick-defaults/suggestions', methods=['GET'])
def get_suggestions(pet_id):
    service = current_app.services['quick_defaults']
    try:
        query = SuggestionQuerySchema().load(request.args)
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    limit = query['limit'] or current_app.config['QUICK_DEFAULTS_SUGGESTION_LIMIT']
    suggestions = service.get_smart_suggestions(pet_id, query['category'], query['field'], limit)
    return jsonify({"field": query['field'], "suggestions": suggestions}), 200

@quick_defaults_bp.route('/<int:pet_id>/quick-defaults', methods=['DELETE'])
def clear_quick_defaults(pet_id):
    service = current_app.services['quick_defaults']
    service.clear_for_pet(pet_id)
    logging.info(f"Quick defaults cleared via API (pet: {pet_id})")
    return '', 204
