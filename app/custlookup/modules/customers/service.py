"""
CUSTOMER LOOKUP
===============

One read: fetch a single Customer by id, optionally bounded by created_at.

Date range policy (both-or-neither):

start_date | end_date | Filter applied
-----------|----------|-----------------------------------------------
set        | set      | id == :id AND created_at BETWEEN :start AND :end
set        | None     | id == :id
None       | set      | id == :id
None       | None     | id == :id

A lone bound is ignored, not treated as an open-ended range.

INVARIANTS:
- Blank ids are rejected before a session is opened (zero queries).
- Exactly one SELECT per valid call; all values are bound parameters.
- Returned objects are detached snapshots; nothing is flushed or committed.
- Store errors (connectivity, timeouts) propagate unchanged. No retries.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ColumnElement, and_, select
from sqlalchemy.orm import Session, sessionmaker

from app.custlookup.db import create_db_engine, create_session_factory, read_session
from app.custlookup.modules.customers.models import Customer
from app.custlookup.modules.customers.utils import is_blank

if TYPE_CHECKING:
    from flask import Flask

    from app.custlookup.config import Settings

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Caller passed an unusable argument. Detected before any I/O."""

    def __init__(self, message: str, *, field: str = "id") -> None:
        super().__init__(message)
        self.field = field


class CustomerNotFoundError(LookupError):
    """No customer matched the id (and the date range, when one was applied)."""

    def __init__(self, customer_id: str, *, date_range_applied: bool = False) -> None:
        self.customer_id = customer_id
        self.date_range_applied = date_range_applied
        if date_range_applied:
            msg = f"Customer with ID '{customer_id}' not found or does not match the specified date range."
        else:
            msg = f"Customer with ID '{customer_id}' not found."
        super().__init__(msg)


NotFoundError = CustomerNotFoundError


def validate_customer_id(customer_id: str | None) -> None:
    if customer_id is None or not isinstance(customer_id, str) or is_blank(customer_id):
        raise InvalidInputError("Customer ID cannot be null or empty.", field="id")


def date_range_applies(start_date: datetime | None, end_date: datetime | None) -> bool:
    return start_date is not None and end_date is not None


def build_customer_predicate(
    customer_id: str,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
) -> ColumnElement[bool]:
    clause: ColumnElement[bool] = Customer.id == customer_id
    if date_range_applies(start_date, end_date):
        clause = and_(clause, Customer.created_at.between(start_date, end_date))
    return clause


def get_customer_info(
    s: Session,
    customer_id: str,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
) -> Customer:
    """
    Return the matching Customer, detached from `s`.

    Raises InvalidInputError for a blank id (before touching `s`) and
    CustomerNotFoundError when nothing matches.
    """
    validate_customer_id(customer_id)
    return _fetch_customer(s, customer_id, start_date, end_date)


def _fetch_customer(
    s: Session,
    customer_id: str,
    start_date: datetime | None,
    end_date: datetime | None,
) -> Customer:
    range_applied = date_range_applies(start_date, end_date)

    stmt = select(Customer).where(build_customer_predicate(customer_id, start_date, end_date)).limit(1)
    customer = s.execute(stmt).scalars().first()
    if customer is None:
        logger.info("Customer not found: id=%s date_range_applied=%s", customer_id, range_applied)
        raise CustomerNotFoundError(customer_id, date_range_applied=range_applied)

    s.expunge(customer)
    logger.debug("Customer found: id=%s date_range_applied=%s", customer_id, range_applied)
    return customer


class CustomerLookup:
    """
    Lookup operation bound to an explicit session factory.

    Build it once at startup (`from_settings` / `from_app`); each call opens
    its own session, runs one query and releases the session on every path.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    @classmethod
    def from_settings(cls, settings: Settings) -> CustomerLookup:
        return cls(create_session_factory(create_db_engine(settings)))

    @classmethod
    def from_app(cls, app: Flask) -> CustomerLookup:
        return cls(app.extensions["sqlalchemy_sessionmaker"])

    def lookup(
        self,
        customer_id: str,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> Customer:
        try:
            validate_customer_id(customer_id)
        except InvalidInputError:
            logger.warning("Rejected customer lookup: blank id")
            raise
        with read_session(self._session_factory) as s:
            return _fetch_customer(s, customer_id, start_date, end_date)
