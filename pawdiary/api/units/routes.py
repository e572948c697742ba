# pawdiary/api/units/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from pawdiary.models.unit import UnitCategory
from pawdiary.api.units.registry import (
    UNIT_DEFINITIONS, get_units_for_category, convert_units, convert_to_optimal_display_unit
)
from .schemas import (
    UnitDefinitionSchema,
    UnitListQuerySchema,
    UnitConversionRequestSchema,
    UnitPreferenceUpdateSchema,
    PetIdQuerySchema
)

units_bp = Blueprint('units_bp', __name__)

def _preferences_payload(service, pet_id):
    preferences = service.get_unit_preferences()
    return {
        "preferences": preferences.to_dict(),
        "resolved": {c.value: service.get_preferred_unit(c.value, pet_id) for c in UnitCategory},
        "degraded": service.degraded,
    }

@units_bp.route('/', methods=['GET'])
def list_units():
    """단위 선택 목록을 위한 단위 정의를 조회합니다 (category로 필터링 가능)."""
    try:
        query = UnitListQuerySchema().load(request.args)
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    if query.get('category'):
        units = get_units_for_category(query['category'])
    else:
        units = list(UNIT_DEFINITIONS.values())
    return jsonify(UnitDefinitionSchema(many=True).dump(units)), 200

@units_bp.route('/convert', methods=['POST'])
def convert():
    """값을 다른 단위로 변환합니다. 변환이 불가능하면 422를 반환합니다."""
    try:
        data = UnitConversionRequestSchema().load(request.get_json() or {})
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    converted = convert_units(data['value'], data['from_unit'], data['to_unit'])
    if converted is None:
        return jsonify({
            "error_code": "CONVERSION_IMPOSSIBLE",
            "message": f"'{data['from_unit']}'에서 '{data['to_unit']}'(으)로 변환할 수 없습니다."
        }), 422

    unit_id = data['to_unit']
    if data['optimal']:
        converted, unit_id = convert_to_optimal_display_unit(converted, unit_id)
    return jsonify({"value": converted, "unit": unit_id}), 200

@units_bp.route('/preferences', methods=['GET'])
def get_preferences():
    """선호 단위 테이블과 카테고리별로 해석된 선호 단위를 조회합니다."""
    service = current_app.services['unit_preferences']
    try:
        pet_id = PetIdQuerySchema().load(request.args)['pet_id']
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    return jsonify(_preferences_payload(service, pet_id)), 200

@units_bp.route('/preferences', methods=['PUT'])
def update_preference():
    """카테고리의 선호 단위를 설정합니다 (petId가 있으면 해당 반려동물 전용)."""
    service = current_app.services['unit_preferences']
    try:
        data = UnitPreferenceUpdateSchema().load(request.get_json() or {})
        service.set_preferred_unit(data['category'], data['unit_id'], data['pet_id'])
        return jsonify(_preferences_payload(service, data['pet_id'])), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ValueError as e:
        return jsonify({"error_code": "INVALID_UNIT", "message": str(e)}), 400

@units_bp.route('/preferences', methods=['DELETE'])
def clear_preferences():
    """선호 단위를 초기화합니다 (pet_id가 있으면 해당 반려동물만)."""
    service = current_app.services['unit_preferences']
    try:
        pet_id = PetIdQuerySchema().load(request.args)['pet_id']
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    service.clear_unit_preferences(pet_id)
    logging.info(f"Unit preferences cleared (pet: {pet_id})")
    return jsonify(_preferences_payload(service, pet_id)), 200
