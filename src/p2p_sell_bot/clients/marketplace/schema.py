"""Marketplace response types (clash.gg Steam P2P). Keys match the API (camelCase)."""

from __future__ import annotations

from typing import TypedDict


class SellerSchema(TypedDict, total=False):
    steamId: str
    name: str


class InspectSchema(TypedDict, total=False):
    """Inspect-link parts; `a` is the Steam asset id."""

    s: str
    a: str
    d: str


class ItemSchema(TypedDict, total=False):
    name: str
    inspect: InspectSchema


class ListingSchema(TypedDict, total=False):
    """GET /api/steam-p2p/listings/my-active item."""

    id: int | str
    status: str
    seller: SellerSchema
    item: ItemSchema
    buyerTradelink: str
    price: int


class AccessTokenSchema(TypedDict, total=False):
    """GET /api/auth/access-token response."""

    accessToken: str
