import logging

from facility_api.exceptions import UnknownReference
from facility_api.extensions import db
from facility_api.models.review import Hashtag

logger = logging.getLogger(__name__)


class HashtagService:
    """Service class for hashtag lookups and reconciliation."""

    @staticmethod
    def get_all():
        return Hashtag.query.order_by(Hashtag.id).all()

    @staticmethod
    def get_by_id(hashtag_id):
        return db.session.get(Hashtag, hashtag_id)

    @staticmethod
    def reconcile(refs, session=None):
        """Resolve hashtag references into a list of persisted hashtag ids.

        Each reference is a dict holding either an ``id`` of an existing
        hashtag or a ``name``. Ids must exist, otherwise UnknownReference is
        raised. Names are looked up first and only the ones not stored yet
        are inserted. The result holds no duplicates.

        Nothing is committed here; callers run this inside a transaction.
        """
        session = session or db.session
        hashtag_ids = [ref["id"] for ref in refs if ref.get("id")]
        if hashtag_ids:
            HashtagService._check_exist(session, hashtag_ids)

        new_names = []
        for ref in refs:
            if ref.get("id"):
                continue
            name = ref["name"].strip()
            if name not in new_names:
                new_names.append(name)

        # An INSERT with no value tuples is invalid
        if new_names:
            hashtag_ids += HashtagService._lookup_or_insert(session, new_names)

        return list(dict.fromkeys(hashtag_ids))

    @staticmethod
    def _check_exist(session, hashtag_ids):
        found = {row.id for row in session.query(Hashtag.id).filter(Hashtag.id.in_(hashtag_ids))}
        missing = set(hashtag_ids) - found
        if missing:
            raise UnknownReference("hashtag", missing)

    @staticmethod
    def _lookup_or_insert(session, names):
        existing = {
            hashtag.name: hashtag.id
            for hashtag in session.query(Hashtag).filter(Hashtag.name.in_(names))
        }

        missing = [Hashtag(name=name) for name in names if name not in existing]
        if missing:
            session.add_all(missing)
            session.flush()
            logger.info("Inserted %d new hashtags", len(missing))
            for hashtag in missing:
                existing[hashtag.name] = hashtag.id

        return [existing[name] for name in names]
