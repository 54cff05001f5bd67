"""Category endpoints."""

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required

from api.auth import require_owner
from api.requests import (
    CreateCategoryRequest,
    IdRequest,
    ListCategoriesRequest,
    UpdateCategoryRequest,
    bind,
)
from services.errors import NotFoundError

bp = Blueprint("categories", __name__, url_prefix="/category")


def _services():
    return current_app.extensions["services"]


def _owned_category(category_id: int):
    """Load a category and check the caller owns it."""
    category = _services().categories.find(category_id)
    if category is None:
        raise NotFoundError("Category", category_id)
    require_owner(category.user_id)
    return category


@bp.route("", methods=["POST"])
@jwt_required()
def create_category():
    req = bind(CreateCategoryRequest, request.get_json(silent=True))
    require_owner(req.user_id)

    category = _services().categories.create(
        req.user_id, req.title, req.type, req.description
    )
    return jsonify(category.to_dict())


@bp.route("/<id>", methods=["GET"])
@jwt_required()
def get_category(id):
    req = bind(IdRequest, {"id": id})
    category = _owned_category(req.id)
    return jsonify(category.to_dict())


@bp.route("/<id>", methods=["DELETE"])
@jwt_required()
def delete_category(id):
    req = bind(IdRequest, {"id": id})
    _owned_category(req.id)

    if not _services().categories.delete(req.id):
        raise NotFoundError("Category", req.id)
    return jsonify(True)


@bp.route("", methods=["PUT"])
@jwt_required()
def update_category():
    req = bind(UpdateCategoryRequest, request.get_json(silent=True))
    _owned_category(req.id)

    category = _services().categories.update(
        req.id, title=req.title, description=req.description
    )
    return jsonify(category.to_dict())


@bp.route("", methods=["GET"])
@jwt_required()
def list_categories():
    args = {key: value for key, value in request.args.items() if value != ""}
    req = bind(ListCategoriesRequest, args)
    require_owner(req.user_id)

    categories = _services().categories.find_all(
        req.user_id, req.type, title=req.title, description=req.description
    )
    return jsonify([category.to_dict() for category in categories])
