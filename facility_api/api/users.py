from flask import Blueprint, abort, request

from facility_api.schemas import UserCreateSchema
from facility_api.services.user_service import UserService

bp = Blueprint('users', __name__, url_prefix="/users")


@bp.route("")
def get_users():
    """Get Users
    ---
    get:
        summary: Get all users
        responses:
            200:
                description: Returns every user
                content:
                  application/json:
                    schema: UserListResponseSchema
    """
    return {'data': [user.get_dict() for user in UserService.get_all()]}


@bp.route("/<int:user_id>")
def get_user(user_id):
    """Get User
    ---
    get:
        summary: Get a user by id
        responses:
            200:
                description: Returns the user
                content:
                  application/json:
                    schema: UserResponseSchema
            404:
                description: No user with that id
    """
    user = UserService.get_by_id(user_id)
    if user is None:
        abort(404, "User not found")
    return {'data': user.get_dict()}


@bp.route("/insert", methods=["POST"])
def create_user():
    """Create User
    ---
    post:
        summary: Register a new user
        requestBody:
            content:
              application/json:
                schema: UserCreateSchema
        responses:
            201:
                description: Returns the created user
                content:
                  application/json:
                    schema: UserResponseSchema
            400:
                description: Invalid body or the user already exists
    """
    data = UserCreateSchema().load(request.get_json(silent=True) or {})
    return UserService.create_user(**data)
