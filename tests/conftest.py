import os
import tempfile
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import event

from facility_api import create_app
from facility_api.extensions import db
from facility_api.models import Facility, Hashtag, Review, User


class TestConfig:
    TESTING = True
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    S3_BUCKET_NAME = 'test-bucket'
    AWS_REGION = 'us-east-1'
    CORS_ORIGINS = '*'


@pytest.fixture(scope='function')
def app():
    """Create a new app instance backed by an empty database for each test."""
    test_config = TestConfig()
    db_fd, db_path = None, None

    if os.environ.get('TEST_DATABASE_URL'):
        test_config.SQLALCHEMY_DATABASE_URI = os.environ['TEST_DATABASE_URL']
    else:
        db_fd, db_path = tempfile.mkstemp()
        test_config.SQLALCHEMY_DATABASE_URI = f'sqlite:///{db_path}'

    app = create_app(config_object=test_config)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

    # Clean up the temporary database (only for SQLite)
    if db_path:
        os.close(db_fd)
        os.unlink(db_path)


@pytest.fixture(scope='function')
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture(scope='function')
def runner(app):
    """A test runner for the app's Click commands."""
    return app.test_cli_runner()


@pytest.fixture(scope='function')
def db_session(app):
    """The session of the current app context."""
    return db.session


@pytest.fixture
def sql_statements(app):
    """Collect every SQL statement sent to the database while the test runs."""
    statements = []

    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(db.engine, "before_cursor_execute", before_cursor_execute)
    yield statements
    event.remove(db.engine, "before_cursor_execute", before_cursor_execute)


@pytest.fixture
def mock_boto3():
    """Mock AWS Boto3 services."""
    with patch('facility_api.services.storage_service.boto3') as mock:
        mock_client = MagicMock()
        mock.client.return_value = mock_client
        yield mock_client


# Test data factories
@pytest.fixture
def user_factory(db_session):
    """Factory for creating test users."""
    counter = {'n': 0}

    def _create_user(**kwargs):
        counter['n'] += 1
        defaults = {
            'user_id': f'user{counter["n"]}',
            'password': 'hashed_password',
            'user_type': 0,
            'email': f'user{counter["n"]}@example.com',
            'display_name': f'User {counter["n"]}',
        }
        defaults.update(kwargs)

        user = User(**defaults)
        db_session.add(user)
        db_session.commit()
        return user

    return _create_user


@pytest.fixture
def facility_factory(db_session):
    """Factory for creating test facilities."""
    def _create_facility(**kwargs):
        defaults = {
            'name': 'Riverside Pool',
            'address': '1 River Road',
            'latitude': 37.5665,
            'longitude': 126.9780,
        }
        defaults.update(kwargs)

        facility = Facility(**defaults)
        db_session.add(facility)
        db_session.commit()
        return facility

    return _create_facility


@pytest.fixture
def hashtag_factory(db_session):
    """Factory for creating test hashtags."""
    def _create_hashtag(name):
        hashtag = Hashtag(name=name)
        db_session.add(hashtag)
        db_session.commit()
        return hashtag

    return _create_hashtag


@pytest.fixture
def review_factory(db_session):
    """Factory for creating test reviews."""
    def _create_review(**kwargs):
        defaults = {
            'score': 4.0,
            'content': 'Clean and quiet',
            'img_uri': '',
            'post_date': datetime.utcnow(),
        }
        defaults.update(kwargs)

        review = Review(**defaults)
        db_session.add(review)
        db_session.commit()
        return review

    return _create_review


@pytest.fixture
def sample_user(user_factory):
    return user_factory(user_id='testuser', email='test@example.com', display_name='TestUser')


@pytest.fixture
def sample_facility(facility_factory):
    return facility_factory()


@pytest.fixture
def review_args(sample_user, sample_facility):
    """Arguments for ReviewService.create as loaded by ReviewCreateSchema."""
    def _review_args(**kwargs):
        args = {
            'author_id': sample_user.id,
            'facility_id': sample_facility.id,
            'score': 4.5,
            'content': 'Great lanes, crowded on weekends',
            'image_uri': None,
            'hashtags': [],
        }
        args.update(kwargs)
        return args

    return _review_args
