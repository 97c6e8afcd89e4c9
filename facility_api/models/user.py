"""
User-related models.

This module contains models related to user accounts:
- User: User account information
"""

from datetime import datetime

from sqlalchemy import func

from facility_api.extensions import db

# 0: regular member, 1: facility manager, 2: administrator
USER_TYPES = (0, 1, 2)


class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(20), unique=True, nullable=False)
    password = db.Column(db.String, nullable=False)
    user_type = db.Column(db.Integer, nullable=False, default=0)
    email = db.Column(db.String, unique=True, nullable=False)
    display_name = db.Column(db.String)
    profile_img_uri = db.Column(db.String, nullable=False, default="")
    registered_on = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated = db.Column(
        db.DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.current_timestamp(),
    )

    reviews = db.relationship(
        "Review",
        backref=db.backref("author", lazy=True),
        order_by="desc(Review.post_date)",
    )

    def get_dict(self):
        data = {}
        for column in self.__table__.columns:
            column_name = column.name
            # Skip sensitive fields
            if column_name in ["password", "email"]:
                continue
            data[column_name] = getattr(self, column_name)
        return data
