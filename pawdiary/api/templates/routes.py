# pawdiary/api/templates/routes.py
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from .schemas import TemplateQuerySchema, ActivityTemplateSchema

templates_bp = Blueprint('templates_bp', __name__)

@templates_bp.route('/', methods=['GET'])
def list_templates():
    """템플릿 목록을 조회합니다. category/subcategory 필터와 q 검색을 지원합니다."""
    registry = current_app.services['templates']
    try:
        query = TemplateQuerySchema().load(request.args)
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    if query.get('subcategory'):
        templates = registry.get_templates_by_subcategory(query['category'], query['subcategory'])
    elif query.get('category'):
        templates = registry.get_templates_by_category(query['category'])
    else:
        templates = registry.get_all_templates()

    if query.get('q'):
        matched = {t.id for t in registry.search_templates(query['q'])}
        templates = [t for t in templates if t.id in matched]

    return jsonify(ActivityTemplateSchema(many=True).dump(templates)), 200

@templates_bp.route('/quick-log', methods=['GET'])
def list_quick_log_templates():
    registry = current_app.services['templates']
    return jsonify(ActivityTemplateSchema(many=True).dump(registry.get_quick_log_templates())), 200

@templates_bp.route('/<string:template_id>', methods=['GET'])
def get_template(template_id):
    registry = current_app.services['templates']
    template = registry.get_template(template_id)
    if template is None:
        return jsonify({"error_code": "TEMPLATE_NOT_FOUND", "message": f"템플릿 '{template_id}'을(를) 찾을 수 없습니다."}), 404
    return jsonify(ActivityTemplateSchema().dump(template)), 200
