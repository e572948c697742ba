# pawdiary/api/activities/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from pawdiary.core.errors import MappingError
from .schemas import ActivityFormSchema, ActivityFormResponseSchema

activities_bp = Blueprint('activities_bp', __name__)
pet_activities_bp = Blueprint('pet_activities_bp', __name__)

@activities_bp.route('/', methods=['POST'])
def create_activity():
    """폼 데이터로 새 활동 기록을 생성합니다."""
    service = current_app.services['activities']
    try:
        form = ActivityFormSchema().load(request.get_json() or {})
        saved = service.save_activity(form)
        return jsonify(saved), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except MappingError as e:
        return jsonify(e.to_dict()), 400

@activities_bp.route('/<int:record_id>', methods=['GET'])
def get_activity(record_id):
    """
    편집용 폼 데이터를 조회합니다.
    display에는 선호 단위로 변환한 표시용 블록이 담깁니다 (저장값은 그대로).
    """
    service = current_app.services['activities']
    try:
        form = service.load_for_edit(record_id)
        display = service.to_display_blocks(form.blocks, form.template_id, form.pet_id)
        return jsonify({"form": ActivityFormResponseSchema().dump(form), "display": display}), 200
    except FileNotFoundError as e:
        return jsonify({"error_code": "ACTIVITY_NOT_FOUND", "message": str(e)}), 404
    except MappingError as e:
        return jsonify(e.to_dict()), 400

@activities_bp.route('/<int:record_id>', methods=['PUT'])
def update_activity(record_id):
    service = current_app.services['activities']
    try:
        form = ActivityFormSchema().load(request.get_json() or {})
        saved = service.save_activity(form, record_id=record_id)
        return jsonify(saved), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except MappingError as e:
        return jsonify(e.to_dict()), 400
    except FileNotFoundError as e:
        return jsonify({"error_code": "ACTIVITY_NOT_FOUND", "message": str(e)}), 404

@activities_bp.route('/<int:record_id>', methods=['DELETE'])
def delete_activity(record_id):
    service = current_app.services['activities']
    try:
        service.delete_activity(record_id)
        return '', 204
    except FileNotFoundError as e:
        return jsonify({"error_code": "ACTIVITY_NOT_FOUND", "message": str(e)}), 404

@activities_bp.route('/<int:record_id>/typed', methods=['GET'])
def get_typed_activity(record_id):
    """기록의 블록을 강타입 ActivityData({"type", "data"}) 형식으로 조회합니다."""
    service = current_app.services['activities']
    try:
        return jsonify(service.load_typed(record_id).to_dict()), 200
    except FileNotFoundError as e:
        return jsonify({"error_code": "ACTIVITY_NOT_FOUND", "message": str(e)}), 404

@pet_activities_bp.route('/<int:pet_id>/activities', methods=['GET'])
def list_pet_activities(pet_id):
    service = current_app.services['activities']
    records = service.list_for_pet(pet_id)
    logging.debug(f"Listed {len(records)} activities for pet {pet_id}")
    return jsonify(records), 200
