import bcrypt
from sqlalchemy import func, or_

from facility_api.extensions import db
from facility_api.models.user import User


class UserService:
    """Service class for user account business logic."""

    @staticmethod
    def get_all():
        return User.query.order_by(User.id).all()

    @staticmethod
    def get_by_id(user_id):
        return db.session.get(User, user_id)

    @staticmethod
    def create_user(user_id, password, user_type, email, display_name=None):
        """Create a new user account."""
        existing_user = User.query.filter(
            or_(
                User.user_id == user_id,
                func.lower(User.email) == email.lower(),
            )
        ).first()

        if existing_user:
            return {"error": "User already exists"}, 400

        user = User(
            user_id=user_id,
            user_type=user_type,
            email=email,
            display_name=display_name,
            password=bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8'),
        )
        db.session.add(user)
        db.session.commit()

        return {"data": user.get_dict()}, 201
