from flask import Blueprint, abort

from facility_api.services.hashtag_service import HashtagService

bp = Blueprint("hashtags", __name__, url_prefix="/hashtags")


@bp.route("")
def get_hashtags():
    """Get Hashtags
    ---
    get:
        summary: Get all hashtags
        responses:
            200:
                description: Returns every hashtag
                content:
                  application/json:
                    schema: HashtagListResponseSchema
    """
    return {"data": [hashtag.get_dict() for hashtag in HashtagService.get_all()]}


@bp.route("/<int:hashtag_id>")
def get_hashtag(hashtag_id):
    """Get Hashtag
    ---
    get:
        summary: Get a hashtag by id
        responses:
            200:
                description: Returns the hashtag
                content:
                  application/json:
                    schema: HashtagResponseSchema
            404:
                description: No hashtag with that id
    """
    hashtag = HashtagService.get_by_id(hashtag_id)
    if hashtag is None:
        abort(404, "Hashtag not found")
    return {"data": hashtag.get_dict()}
