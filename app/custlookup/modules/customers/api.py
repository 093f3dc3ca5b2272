from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from app.custlookup.modules.customers.service import (
    CustomerLookup,
    CustomerNotFoundError,
    InvalidInputError,
)
from app.custlookup.modules.customers.utils import parse_timestamp

bp = Blueprint("customers_api", __name__)


def _lookup() -> CustomerLookup:
    return current_app.extensions["customer_lookup"]


def _date_arg(name: str, *, end_of_day: bool = False):
    try:
        return parse_timestamp(request.args.get(name), end_of_day=end_of_day)
    except ValueError as e:
        raise InvalidInputError(str(e), field=name) from e


@bp.get("/customers/<path:customer_id>")
def customer_detail(customer_id: str):
    start_date = _date_arg("start_date")
    end_date = _date_arg("end_date", end_of_day=True)
    customer = _lookup().lookup(customer_id, start_date, end_date)
    return jsonify({"customer": customer.to_dict()})


@bp.errorhandler(InvalidInputError)
def _invalid_input(e: InvalidInputError):
    return jsonify({"error": "invalid_input", "field": e.field, "message": str(e)}), 400


@bp.errorhandler(CustomerNotFoundError)
def _not_found(e: CustomerNotFoundError):
    return (
        jsonify(
            {
                "error": "not_found",
                "customer_id": e.customer_id,
                "date_range_applied": e.date_range_applied,
                "message": str(e),
            }
        ),
        404,
    )
