from flask import Blueprint, abort, request

from facility_api.schemas import ReviewCreateSchema, ReviewQuerySchema, ReviewUpdateSchema
from facility_api.services.review_service import ReviewService
from facility_api.services.storage_service import StorageService
from facility_api.utils.parsers import split_query_list

bp = Blueprint("reviews", __name__, url_prefix="/reviews")


@bp.route("/<int:review_id>")
def get_review(review_id):
    """Get Review
    ---
    get:
        summary: Get a review by id
        parameters:
            - name: review_id
              in: path
              required: true
              schema:
                type: integer
        responses:
            200:
                description: Returns the review with its hashtags
                content:
                  application/json:
                    schema: ReviewResponseSchema
            404:
                description: No review with that id
    """
    review = ReviewService.get(review_id)
    if review is None:
        abort(404, "Review not found")
    return {"data": review}


@bp.route("", methods=["GET"])
def get_reviews():
    """Get Reviews
    ---
    get:
        summary: Get reviews of a facility and/or a user
        description: Reviews are returned most recent first.
        parameters:
            - name: facility
              in: query
              schema:
                type: integer
            - name: user
              in: query
              schema:
                type: integer
            - name: hasImage
              in: query
              description: true for reviews with an image, false for reviews without one
              schema:
                type: string
                enum: ["true", "false"]
            - name: hashtags
              in: query
              description: reviews tagged with at least one of these hashtag ids
              schema:
                type: array
                items:
                  type: integer
        responses:
            200:
                description: Returns the matching reviews
                content:
                  application/json:
                    schema: ReviewListResponseSchema
    """
    args = {key: request.args.get(key) for key in ("facility", "user", "hasImage") if key in request.args}
    hashtags = split_query_list(request.args.getlist("hashtags"))
    if hashtags:
        args["hashtags"] = hashtags
    filters = ReviewQuerySchema().load(args)
    return {"data": ReviewService.get_by_query(filters)}


@bp.route("", methods=["POST"])
def create_review():
    """Create Review
    ---
    post:
        summary: Create a review
        description: Hashtags are given either by id or, for new ones, by name.
        requestBody:
            content:
              application/json:
                schema: ReviewCreateSchema
        responses:
            201:
                description: Returns the created review with its hashtags
                content:
                  application/json:
                    schema: ReviewResponseSchema
    """
    args = ReviewCreateSchema().load(request.get_json(silent=True) or {})
    return {"data": ReviewService.create(args)}, 201


@bp.route("/<int:review_id>", methods=["PUT"])
def update_review(review_id):
    """Update Review
    ---
    put:
        summary: Update the content and the hashtags of a review
        description: The hashtag list replaces the review's hashtags entirely.
        requestBody:
            content:
              application/json:
                schema: ReviewUpdateSchema
        responses:
            200:
                description: Returns the updated review with its hashtags
                content:
                  application/json:
                    schema: ReviewResponseSchema
            404:
                description: No review with that id
    """
    body = ReviewUpdateSchema().load(request.get_json(silent=True) or {})
    review = ReviewService.update(review_id, body)
    if review is None:
        abort(404, "Review not found")
    return {"data": review}


@bp.route("/<int:review_id>", methods=["DELETE"])
def delete_review(review_id):
    """Delete Review
    ---
    delete:
        summary: Delete a review and its image
        responses:
            200:
                description: Returns the deleted review
                content:
                  application/json:
                    schema: ReviewResponseSchema
            404:
                description: No review with that id
    """
    review, cleanup_fault = ReviewService.delete(review_id)
    if review is None:
        abort(404, "Review not found")
    response = {"data": review}
    if cleanup_fault is not None:
        response["image_cleanup"] = "failed"
    return response


@bp.route("/image", methods=["POST"])
def upload_image():
    """Upload Image
    ---
    post:
        summary: Upload an image so that it can be attached to a review
        requestBody:
            content:
              multipart/form-data:
                schema: ImageUploadRequestSchema
        responses:
            200:
                description: Returns the uri of the stored image
                content:
                  application/json:
                    schema: ImageUploadResponseSchema
    """
    # check if the post request has the file part
    if 'file' not in request.files:
        return {'msg': 'No file included in request'}, 422
    file = request.files['file']
    # If the user does not select a file, the browser submits an
    # empty file without a filename.
    if file.filename == '':
        return {'msg': 'Submitted an empty file'}, 422

    owner_id = request.form.get('userId', 'anonymous')
    uri = StorageService.upload(file.stream, owner_id, file.content_type)
    return {'data': {'uri': uri, 'url': StorageService.public_url(uri)}}
