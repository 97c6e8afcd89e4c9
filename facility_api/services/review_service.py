import logging

from sqlalchemy import delete, insert
from sqlalchemy.orm import joinedload

from facility_api.exceptions import StorageCleanupFault, UnknownReference
from facility_api.extensions import db
from facility_api.models.base import review_hashtag
from facility_api.models.facility import Facility
from facility_api.models.review import Hashtag, Review
from facility_api.models.user import User
from facility_api.services.hashtag_service import HashtagService
from facility_api.services.storage_service import StorageService
from facility_api.services.transaction import transaction
from facility_api.utils.parsers import parse_boolean

logger = logging.getLogger(__name__)


class ReviewService:
    """Service class for review reads and transactional review writes.

    Every method returns plain dicts built by ``Review.get_dict()``.
    A review that does not exist is reported as ``None``, never raised.
    """

    @staticmethod
    def get(review_id):
        review = (
            Review.query.options(joinedload(Review.hashtags))
            .filter(Review.id == review_id)
            .first()
        )
        return review.get_dict() if review else None

    @staticmethod
    def get_by_query(filters):
        """Reviews matching every given filter, most recent first.

        ``facility`` and ``user`` match the facility and author ids.
        ``has_image`` is tri-state: true keeps reviews with an image, false
        keeps reviews without one, None/absent does not filter. ``hashtags``
        keeps reviews sharing at least one hashtag id with the given ones.
        """
        query = Review.query.options(joinedload(Review.hashtags))

        if filters.get("facility") is not None:
            query = query.filter(Review.facility_id == filters["facility"])
        if filters.get("user") is not None:
            query = query.filter(Review.author_id == filters["user"])

        has_image = parse_boolean(filters.get("has_image"))
        if has_image is True:
            query = query.filter(Review.img_uri != "")
        elif has_image is False:
            query = query.filter(Review.img_uri == "")

        hashtags = filters.get("hashtags")
        if hashtags:
            query = query.filter(Review.hashtags.any(Hashtag.id.in_(hashtags)))

        reviews = query.order_by(Review.post_date.desc()).all()
        return [review.get_dict() for review in reviews]

    @staticmethod
    def create(args):
        """Insert a review and its hashtag associations in one transaction."""
        with transaction() as tx:
            ReviewService._check_targets(args["author_id"], args["facility_id"])
            hashtag_ids = HashtagService.reconcile(args.get("hashtags", []))

            review = Review(
                author_id=args["author_id"],
                facility_id=args["facility_id"],
                score=args["score"],
                content=args["content"],
                img_uri=args.get("image_uri") or "",
            )
            db.session.add(review)
            db.session.flush()

            ReviewService._insert_associations(review.id, hashtag_ids)
            data = ReviewService._fetch(review.id)
            tx.commit()

        logger.info("Created review %s with hashtags %s", data["id"], data["hashtag_ids"])
        return data

    @staticmethod
    def update(review_id, body):
        """Replace a review's content and its whole hashtag set.

        Associations are deleted and re-inserted rather than diffed. The
        review row is locked for the duration where the database supports
        SELECT ... FOR UPDATE.
        """
        with transaction() as tx:
            hashtag_ids = HashtagService.reconcile(body.get("hashtags", []))

            review = Review.query.filter(Review.id == review_id).with_for_update().first()
            if review is None:
                # leaving without commit discards the reconciled hashtags too
                return None
            review.content = body["content"]

            db.session.execute(delete(review_hashtag).where(review_hashtag.c.review_id == review_id))
            ReviewService._insert_associations(review_id, hashtag_ids)
            data = ReviewService._fetch(review_id)
            tx.commit()

        logger.info("Updated review %s with hashtags %s", review_id, data["hashtag_ids"])
        return data

    @staticmethod
    def delete(review_id):
        """Delete a review, then remove its image from storage.

        Returns ``(deleted_review, cleanup_fault)``. The image is removed
        synchronously, within the request, but only after the delete is
        committed, so the database stays the source of truth. A failure there
        is logged and returned as a StorageCleanupFault; it does not undo the
        delete and is not retried.
        """
        with transaction() as tx:
            review = (
                Review.query.options(joinedload(Review.hashtags))
                .filter(Review.id == review_id)
                .first()
            )
            if review is None:
                return None, None
            data = review.get_dict()
            db.session.delete(review)
            tx.commit()

        cleanup_fault = None
        if data["img_uri"]:
            try:
                StorageService.remove(data["img_uri"])
            except StorageCleanupFault as e:
                logger.warning("Review %s deleted but image cleanup failed: %s", review_id, e)
                cleanup_fault = e
        return data, cleanup_fault

    @staticmethod
    def _check_targets(author_id, facility_id):
        if db.session.get(User, author_id) is None:
            raise UnknownReference("user", [author_id])
        if db.session.get(Facility, facility_id) is None:
            raise UnknownReference("facility", [facility_id])

    @staticmethod
    def _insert_associations(review_id, hashtag_ids):
        # An INSERT with no value tuples is invalid
        if not hashtag_ids:
            return
        db.session.execute(
            insert(review_hashtag),
            [{"review_id": review_id, "hashtag_id": hashtag_id} for hashtag_id in hashtag_ids],
        )

    @staticmethod
    def _fetch(review_id):
        review = (
            Review.query.options(joinedload(Review.hashtags))
            .populate_existing()
            .filter(Review.id == review_id)
            .first()
        )
        return review.get_dict()
