"""
Facility models.

A facility is the place a review is written about.
"""

from datetime import datetime

from sqlalchemy import func

from facility_api.extensions import db


class Facility(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String, nullable=False)
    address = db.Column(db.String)
    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)
    created = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated = db.Column(
        db.DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.current_timestamp(),
    )

    reviews = db.relationship("Review", backref="facility", passive_deletes=True)

    def get_dict(self):
        data = {}
        for column in self.__table__.columns:
            data[column.name] = getattr(self, column.name)
        data["num_reviews"] = len(self.reviews)
        return data
