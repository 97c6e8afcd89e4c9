import pytest
from sqlalchemy import delete, insert
from sqlalchemy.exc import IntegrityError

from facility_api.models import Facility, Hashtag, Review, User, review_hashtag


class TestUser:
    """Test cases for User model."""

    def test_user_creation(self, db_session):
        """Test creating a new user."""
        user = User(
            user_id='swimmer',
            password='hashed_password',
            user_type=1,
            email='swimmer@example.com',
            display_name='Swimmer',
        )
        db_session.add(user)
        db_session.commit()

        assert user.id is not None
        assert user.user_id == 'swimmer'
        assert user.user_type == 1
        assert user.profile_img_uri == ''
        assert user.registered_on is not None

    def test_user_get_dict(self, sample_user):
        """Test user get_dict method."""
        user_dict = sample_user.get_dict()
        # Check that sensitive fields are removed
        assert 'password' not in user_dict
        assert 'email' not in user_dict

        assert user_dict['id'] == sample_user.id
        assert user_dict['user_id'] == 'testuser'
        assert user_dict['display_name'] == 'TestUser'


class TestFacility:
    """Test cases for Facility model."""

    def test_facility_get_dict(self, sample_facility, sample_user, review_factory):
        review_factory(author_id=sample_user.id, facility_id=sample_facility.id)

        facility_dict = sample_facility.get_dict()

        assert facility_dict['id'] == sample_facility.id
        assert facility_dict['name'] == 'Riverside Pool'
        assert facility_dict['num_reviews'] == 1


class TestHashtag:
    """Test cases for Hashtag model."""

    def test_hashtag_name_is_unique(self, db_session, hashtag_factory):
        hashtag_factory('sauna')

        db_session.add(Hashtag(name='sauna'))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

        assert Hashtag.query.filter_by(name='sauna').count() == 1


class TestReview:
    """Test cases for Review model."""

    def test_review_defaults(self, db_session, sample_user, sample_facility):
        review = Review(
            author_id=sample_user.id,
            facility_id=sample_facility.id,
            score=3,
        )
        db_session.add(review)
        db_session.commit()

        assert review.id is not None
        assert review.img_uri == ''
        assert review.content == ''
        assert review.post_date is not None

    def test_review_get_dict_includes_hashtags(self, sample_user, sample_facility, hashtag_factory, review_factory):
        quiet = hashtag_factory('quiet')
        clean = hashtag_factory('clean')
        review = review_factory(
            author_id=sample_user.id,
            facility_id=sample_facility.id,
            img_uri='reviews/1_abc',
            hashtags=[clean, quiet],
        )

        review_dict = review.get_dict()

        assert review_dict['id'] == review.id
        assert review_dict['author_id'] == sample_user.id
        assert review_dict['facility_id'] == sample_facility.id
        assert review_dict['img_uri'] == 'reviews/1_abc'
        assert review_dict['hashtag_ids'] == [quiet.id, clean.id]
        assert review_dict['hashtags'] == ['quiet', 'clean']

    def test_deleting_review_removes_associations(self, db_session, sample_user, sample_facility,
                                                  hashtag_factory, review_factory):
        hashtag = hashtag_factory('quiet')
        review = review_factory(author_id=sample_user.id, facility_id=sample_facility.id, hashtags=[hashtag])

        db_session.delete(review)
        db_session.commit()

        assert db_session.query(review_hashtag).count() == 0
        assert Hashtag.query.count() == 1


class TestForeignKeys:
    """Foreign keys and cascades enforced by the database itself."""

    def test_association_to_missing_hashtag_is_rejected(self, db_session, sample_user, sample_facility,
                                                         review_factory):
        review = review_factory(author_id=sample_user.id, facility_id=sample_facility.id)

        with pytest.raises(IntegrityError):
            db_session.execute(insert(review_hashtag).values(review_id=review.id, hashtag_id=4242))
            db_session.commit()
        db_session.rollback()

        assert db_session.query(review_hashtag).count() == 0

    def test_review_for_missing_facility_is_rejected(self, db_session, sample_user):
        db_session.add(Review(author_id=sample_user.id, facility_id=999, score=3.0))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

        assert Review.query.count() == 0

    def test_deleting_facility_cascades_to_reviews_and_associations(self, db_session, sample_user,
                                                                    sample_facility, hashtag_factory,
                                                                    review_factory):
        hashtag = hashtag_factory('quiet')
        review_factory(author_id=sample_user.id, facility_id=sample_facility.id, hashtags=[hashtag])
        review_factory(author_id=sample_user.id, facility_id=sample_facility.id, hashtags=[hashtag])

        db_session.execute(delete(Facility).where(Facility.id == sample_facility.id))
        db_session.commit()

        assert Review.query.count() == 0
        assert db_session.query(review_hashtag).count() == 0
        assert Hashtag.query.count() == 1

    def test_deleting_user_cascades_to_reviews(self, db_session, sample_user, sample_facility, review_factory):
        review_factory(author_id=sample_user.id, facility_id=sample_facility.id)

        db_session.execute(delete(User).where(User.id == sample_user.id))
        db_session.commit()

        assert Review.query.count() == 0
