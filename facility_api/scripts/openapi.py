import json

from apispec import APISpec
from apispec.ext.marshmallow import MarshmallowPlugin
from apispec_webframeworks.flask import FlaskPlugin
from marshmallow import Schema, fields

from facility_api.schemas import (
    FacilityCreateSchema,
    ReviewCreateSchema,
    ReviewUpdateSchema,
    UserCreateSchema,
)


# Response schemas
class HashtagSchema(Schema):
    id = fields.Int()
    name = fields.Str()


class ReviewSchema(Schema):
    id = fields.Int()
    author_id = fields.Int()
    facility_id = fields.Int()
    score = fields.Float()
    content = fields.Str()
    img_uri = fields.Str(metadata={"description": "Empty when the review has no image"})
    post_date = fields.DateTime()
    hashtag_ids = fields.List(fields.Int())
    hashtags = fields.List(fields.Str())


class UserSchema(Schema):
    id = fields.Int()
    user_id = fields.Str()
    user_type = fields.Int()
    display_name = fields.Str()
    profile_img_uri = fields.Str()
    registered_on = fields.DateTime()


class FacilitySchema(Schema):
    id = fields.Int()
    name = fields.Str()
    address = fields.Str()
    latitude = fields.Float()
    longitude = fields.Float()
    num_reviews = fields.Int()


class ReviewResponseSchema(Schema):
    data = fields.Nested(ReviewSchema)


class ReviewListResponseSchema(Schema):
    data = fields.List(fields.Nested(ReviewSchema))


class HashtagResponseSchema(Schema):
    data = fields.Nested(HashtagSchema)


class HashtagListResponseSchema(Schema):
    data = fields.List(fields.Nested(HashtagSchema))


class UserResponseSchema(Schema):
    data = fields.Nested(UserSchema)


class UserListResponseSchema(Schema):
    data = fields.List(fields.Nested(UserSchema))


class FacilityResponseSchema(Schema):
    data = fields.Nested(FacilitySchema)


class FacilityListResponseSchema(Schema):
    data = fields.List(fields.Nested(FacilitySchema))


class ImageUploadRequestSchema(Schema):
    file = fields.Raw(metadata={"type": "string", "format": "binary"})
    userId = fields.Str()


class ImageUploadResponseSchema(Schema):
    data = fields.Dict(keys=fields.Str(), values=fields.Str())


SCHEMAS = [
    ReviewCreateSchema,
    ReviewUpdateSchema,
    UserCreateSchema,
    FacilityCreateSchema,
    ReviewResponseSchema,
    ReviewListResponseSchema,
    HashtagResponseSchema,
    HashtagListResponseSchema,
    UserResponseSchema,
    UserListResponseSchema,
    FacilityResponseSchema,
    FacilityListResponseSchema,
    ImageUploadRequestSchema,
    ImageUploadResponseSchema,
]


def build_spec(app):
    """Build the OpenAPI document from the view docstrings of ``app``."""
    spec = APISpec(
        title='Facility Review API',
        version='1.0.0',
        openapi_version="3.0.2",
        info=dict(
            description='API for facilities, users and their hashtag-tagged reviews'
        ),
        plugins=[
            FlaskPlugin(), MarshmallowPlugin()
        ]
    )

    for schema in SCHEMAS:
        spec.components.schema(schema.__name__, schema=schema)

    with app.test_request_context():
        for endpoint, view in app.view_functions.items():
            if endpoint == "static" or not (view.__doc__ and "---" in view.__doc__):
                continue
            spec.path(view=view)

    return spec


if __name__ == "__main__":
    from facility_api import create_app

    print(json.dumps(build_spec(create_app()).to_dict(), indent=2))
