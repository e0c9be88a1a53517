"""Marketplace listing endpoints."""

from __future__ import annotations

from typing import Sequence

from fastapi import APIRouter, Query, status

from waste_cycle.models import Listing
from waste_cycle.schemas.listing import ListingCreate, ListingResponse, ListingUpdate
from waste_cycle.services import listing_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/listings", tags=["listings"])


@router.get("", response_model=list[ListingResponse])
async def list_listings(
    db: SessionDep,
    include_sold: bool = Query(False, alias="includeSold"),
    waste_type: str | None = Query(None, alias="wasteType"),
) -> Sequence[Listing]:
    """List marketplace listings, newest first."""
    return listing_service.list_listings(db, include_sold=include_sold, waste_type=waste_type)


@router.get("/mine", response_model=list[ListingResponse])
async def list_my_listings(current_user: CurrentUserDep, db: SessionDep) -> Sequence[Listing]:
    """List the caller's own listings."""
    return listing_service.list_owned_listings(db, current_user)


@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(listing_id: str, db: SessionDep) -> Listing:
    """Get a specific listing by ID."""
    return listing_service.get_listing(db, listing_id)


@router.post("", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
async def create_listing(
    listing_data: ListingCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Listing:
    """Create a listing owned by the caller."""
    return listing_service.create_listing(db, current_user, listing_data)


@router.patch("/{listing_id}", response_model=ListingResponse)
async def update_listing(
    listing_id: str,
    update_data: ListingUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Listing:
    """Update a listing (owner or administrator)."""
    return listing_service.update_listing(db, listing_id, current_user, update_data)


@router.delete("/{listing_id}")
async def delete_listing(
    listing_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, str]:
    """Delete a listing (owner or administrator)."""
    listing_service.delete_listing(db, listing_id, current_user)
    return {"status": "deleted"}
