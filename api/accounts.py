"""Account endpoints."""

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required

from api.auth import require_owner
from api.requests import (
    CreateAccountRequest,
    IdRequest,
    ListAccountsRequest,
    OwnerTypeRequest,
    UpdateAccountRequest,
    bind,
)
from services.errors import NotFoundError

bp = Blueprint("accounts", __name__, url_prefix="/account")


def _services():
    return current_app.extensions["services"]


def _owned_account(account_id: int):
    """Load an account and check the caller owns it."""
    account = _services().accounts.find(account_id)
    if account is None:
        raise NotFoundError("Account", account_id)
    require_owner(account.user_id)
    return account


@bp.route("", methods=["POST"])
@jwt_required()
def create_account():
    req = bind(CreateAccountRequest, request.get_json(silent=True))
    require_owner(req.user_id)

    account = _services().accounts.create(
        user_id=req.user_id,
        category_id=req.category_id,
        title=req.title,
        account_type=req.type,
        description=req.description,
        value=req.value,
        account_date=req.date,
    )
    return jsonify(account.to_dict())


@bp.route("/<id>", methods=["GET"])
@jwt_required()
def get_account(id):
    req = bind(IdRequest, {"id": id})
    account = _owned_account(req.id)
    return jsonify(account.to_dict())


@bp.route("/<id>", methods=["DELETE"])
@jwt_required()
def delete_account(id):
    req = bind(IdRequest, {"id": id})
    _owned_account(req.id)

    if not _services().accounts.delete(req.id):
        raise NotFoundError("Account", req.id)
    return jsonify(True)


@bp.route("", methods=["PUT"])
@jwt_required()
def update_account():
    req = bind(UpdateAccountRequest, request.get_json(silent=True))
    _owned_account(req.id)

    account = _services().accounts.update(
        req.id, title=req.title, description=req.description, value=req.value
    )
    return jsonify(account.to_dict())


@bp.route("", methods=["GET"])
@jwt_required()
def list_accounts():
    # Empty query values count as not supplied
    args = {key: value for key, value in request.args.items() if value != ""}
    req = bind(ListAccountsRequest, args)
    require_owner(req.user_id)

    accounts = _services().accounts.find_all(
        req.user_id,
        req.type,
        category_id=req.category_id,
        title=req.title,
        description=req.description,
        on_date=req.date,
    )
    return jsonify([account.to_dict(include_category_title=True) for account in accounts])


@bp.route("/graph/<user_id>/<type>", methods=["GET"])
@jwt_required()
def get_account_graph(user_id, type):
    req = bind(OwnerTypeRequest, {"user_id": user_id, "type": type})
    require_owner(req.user_id)
    return jsonify(_services().accounts.graph(req.user_id, req.type))


@bp.route("/reports/<user_id>/<type>", methods=["GET"])
@jwt_required()
def get_account_reports(user_id, type):
    req = bind(OwnerTypeRequest, {"user_id": user_id, "type": type})
    require_owner(req.user_id)
    return jsonify(_services().accounts.reports(req.user_id, req.type))
