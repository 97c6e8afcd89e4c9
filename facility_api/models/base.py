"""
Association tables shared between models.
"""

from facility_api.extensions import db

# Junction table for the many-to-many relationship between reviews and hashtags
review_hashtag = db.Table(
    "review_hashtag",
    db.Column("review_id", db.Integer, db.ForeignKey("review.id", ondelete="CASCADE"), primary_key=True),
    db.Column("hashtag_id", db.Integer, db.ForeignKey("hashtag.id", ondelete="CASCADE"), primary_key=True),
)
