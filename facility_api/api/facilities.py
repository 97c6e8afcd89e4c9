from flask import Blueprint, abort, request

from facility_api.extensions import db
from facility_api.models import Facility
from facility_api.schemas import FacilityCreateSchema

bp = Blueprint('facilities', __name__, url_prefix="/facilities")


@bp.route("")
def get_facilities():
    """Get Facilities
    ---
    get:
        summary: Get all facilities
        responses:
            200:
                description: Returns every facility
                content:
                  application/json:
                    schema: FacilityListResponseSchema
    """
    facilities = Facility.query.order_by(Facility.name).all()
    return {'data': [facility.get_dict() for facility in facilities]}


@bp.route("/<int:facility_id>")
def get_facility(facility_id):
    """Get Facility
    ---
    get:
        summary: Get a facility by id
        responses:
            200:
                description: Returns the facility
                content:
                  application/json:
                    schema: FacilityResponseSchema
            404:
                description: No facility with that id
    """
    facility = db.session.get(Facility, facility_id)
    if facility is None:
        abort(404, "Facility not found")
    return {'data': facility.get_dict()}


@bp.route("", methods=["POST"])
def create_facility():
    """Create Facility
    ---
    post:
        summary: Create a facility
        requestBody:
            content:
              application/json:
                schema: FacilityCreateSchema
        responses:
            201:
                description: Returns the created facility
                content:
                  application/json:
                    schema: FacilityResponseSchema
    """
    data = FacilityCreateSchema().load(request.get_json(silent=True) or {})
    facility = Facility(**data)
    db.session.add(facility)
    db.session.commit()
    return {'data': facility.get_dict()}, 201
