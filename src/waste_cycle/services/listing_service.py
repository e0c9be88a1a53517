"""CRUD helpers for marketplace listings."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import desc
from sqlalchemy.orm import Session

from waste_cycle.core.errors import ForbiddenError, NotFoundError
from waste_cycle.models import Listing, User
from waste_cycle.schemas.listing import ListingCreate, ListingUpdate

__all__ = [
    "get_listing",
    "list_listings",
    "list_owned_listings",
    "create_listing",
    "update_listing",
    "delete_listing",
]

logger = logging.getLogger(__name__)


def get_listing(db: Session, listing_id: str) -> Listing:
    """Return a listing by identifier or raise ``NotFoundError``."""
    listing = db.get(Listing, listing_id)
    if listing is None:
        raise NotFoundError("Product not found")
    return listing


def list_listings(
    db: Session,
    *,
    include_sold: bool = False,
    waste_type: str | None = None,
) -> Sequence[Listing]:
    """Return marketplace listings, newest first."""
    query = db.query(Listing)
    if not include_sold:
        query = query.filter(Listing.sold.is_(False))
    if waste_type:
        query = query.filter(Listing.waste_type == waste_type)
    return query.order_by(desc(Listing.created_at)).all()


def list_owned_listings(db: Session, owner: User) -> Sequence[Listing]:
    """Return every listing owned by ``owner``, newest first."""
    return (
        db.query(Listing)
        .filter(Listing.owner_id == owner.id)
        .order_by(desc(Listing.created_at))
        .all()
    )


def create_listing(db: Session, owner: User, data: ListingCreate) -> Listing:
    """Persist a new listing owned by ``owner``."""
    listing = Listing(owner_id=owner.id, **data.model_dump())
    db.add(listing)
    db.commit()
    db.refresh(listing)
    logger.info("User %s created listing %s", owner.id, listing.id)
    return listing


def _ensure_can_modify(listing: Listing, actor: User) -> None:
    if listing.owner_id != actor.id and not actor.is_admin:
        raise ForbiddenError("Not authorized to modify this product")


def update_listing(db: Session, listing_id: str, actor: User, data: ListingUpdate) -> Listing:
    """Apply a partial update; only the owner or an administrator may do so.

    Chat rooms already opened for the listing keep their title/image snapshot.
    """
    listing = get_listing(db, listing_id)
    _ensure_can_modify(listing, actor)

    for key, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(listing, key, value)

    db.commit()
    db.refresh(listing)
    return listing


def delete_listing(db: Session, listing_id: str, actor: User) -> None:
    """Delete a listing; only the owner or an administrator may do so."""
    listing = get_listing(db, listing_id)
    _ensure_can_modify(listing, actor)
    db.delete(listing)
    db.commit()
    logger.info("User %s deleted listing %s", actor.id, listing_id)
