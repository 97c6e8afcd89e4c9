"""
Request schemas.

Every request body and query string is loaded through one of these schemas
before it reaches a service. A failed load raises marshmallow's
ValidationError, which the error handlers turn into a 400.
"""

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate, validates_schema

from facility_api.models.user import USER_TYPES


class RequestSchema(Schema):
    class Meta:
        unknown = EXCLUDE


class HashtagRefSchema(RequestSchema):
    id = fields.Int(validate=validate.Range(min=0), metadata={"description": "Id of an existing hashtag"})
    name = fields.Str(validate=validate.Length(max=50), metadata={"description": "Name of a new hashtag"})

    @validates_schema
    def validate_reference(self, data, **kwargs):
        if not data.get("id") and not (data.get("name") or "").strip():
            raise ValidationError("Either an existing hashtag id or a name is required.")


class ReviewCreateSchema(RequestSchema):
    author_id = fields.Int(required=True, data_key="authorId", validate=validate.Range(min=0))
    facility_id = fields.Int(required=True, data_key="facilityId", validate=validate.Range(min=0))
    score = fields.Float(required=True, validate=validate.Range(min=0, max=5))
    content = fields.Str(required=True)
    image_uri = fields.Str(data_key="imageUri", allow_none=True, load_default=None)
    hashtags = fields.List(fields.Nested(HashtagRefSchema), load_default=list)


class ReviewUpdateSchema(RequestSchema):
    content = fields.Str(required=True)
    hashtags = fields.List(fields.Nested(HashtagRefSchema), load_default=list)


class ReviewQuerySchema(RequestSchema):
    facility = fields.Int(validate=validate.Range(min=0))
    user = fields.Int(validate=validate.Range(min=0))
    has_image = fields.Str(data_key="hasImage", validate=validate.OneOf(["true", "false"]))
    hashtags = fields.List(fields.Int(validate=validate.Range(min=0)))

    @validates_schema
    def validate_target(self, data, **kwargs):
        if data.get("facility") is None and data.get("user") is None:
            raise ValidationError("Either facility or user is required.")


class UserCreateSchema(RequestSchema):
    user_id = fields.Str(required=True, data_key="userId", validate=validate.Length(min=1, max=20))
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=6, max=20))
    user_type = fields.Int(required=True, data_key="userType", validate=validate.OneOf(USER_TYPES))
    email = fields.Email(required=True)
    display_name = fields.Str(required=True, data_key="displayName")


class FacilityCreateSchema(RequestSchema):
    name = fields.Str(required=True, validate=validate.Length(min=1))
    address = fields.Str(load_default=None)
    latitude = fields.Float(validate=validate.Range(min=-90, max=90), load_default=None)
    longitude = fields.Float(validate=validate.Range(min=-180, max=180), load_default=None)
