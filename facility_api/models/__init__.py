"""
Models package for the facility review API.

This package contains all database models organized by domain:
- base: Association tables shared between models
- user: User accounts
- facility: Facilities that can be reviewed
- review: Reviews and the hashtags attached to them
"""

from facility_api.extensions import db

# Import all models to ensure they are registered with SQLAlchemy
from .base import review_hashtag
from .facility import Facility
from .review import Hashtag, Review
from .user import USER_TYPES, User

# Export all models for easy importing
__all__ = [
    # Database instance
    "db",
    # Base
    "review_hashtag",
    # User models
    "User",
    "USER_TYPES",
    # Facility models
    "Facility",
    # Review models
    "Review",
    "Hashtag",
]
