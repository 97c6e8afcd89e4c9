"""
Review-related models.

This module contains the review aggregate:
- Review: A user's review of a facility
- Hashtag: Globally shared, uniquely named tags attached to reviews
"""

from datetime import datetime

from facility_api.extensions import db

from .base import review_hashtag


class Hashtag(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String, nullable=False)

    __table_args__ = (db.Index("ix_hashtag_name", "name", unique=True),)

    def get_dict(self):
        return {
            "id": self.id,
            "name": self.name,
        }


class Review(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    author_id = db.Column(db.Integer, db.ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    facility_id = db.Column(db.Integer, db.ForeignKey("facility.id", ondelete="CASCADE"), nullable=False)
    score = db.Column(db.Float, nullable=False)
    content = db.Column(db.String, nullable=False, default="")
    # '' means the review has no image
    img_uri = db.Column(db.String, nullable=False, default="")
    post_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    hashtags = db.relationship("Hashtag", secondary=review_hashtag, order_by="Hashtag.id")

    __table_args__ = (
        db.Index("ix_review_facility_id", "facility_id"),
        db.Index("ix_review_author_id", "author_id"),
        db.Index("ix_review_post_date", "post_date"),
    )

    def get_dict(self):
        """Review columns joined with the ids and names of its hashtags."""
        data = {}
        for column in self.__table__.columns:
            data[column.name] = getattr(self, column.name)

        data["hashtag_ids"] = [hashtag.id for hashtag in self.hashtags]
        data["hashtags"] = [hashtag.name for hashtag in self.hashtags]
        return data
