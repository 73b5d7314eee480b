# -*- coding: utf-8 -*-
"""Unit tests for TransferRequest and the offer timeout policy."""

from __future__ import annotations

import pytest

from p2p_sell_bot.models.transfer import TransferRequest, offer_cancel_after


def test_offer_cancel_after_per_source() -> None:
    assert offer_cancel_after("clash") == 10 * 60
    assert offer_cancel_after("empire") == 12 * 60 * 60
    assert offer_cancel_after("other") == 60 * 60


def test_create_sets_cancel_after_from_source_tag() -> None:
    request = TransferRequest.create(
        destination="D1",
        asset_id="A1",
        source_tag="Clash",
        metadata={"item_name": "Skin"},
    )

    assert request.cancel_after_seconds == 10 * 60
    assert request.metadata == {"item_name": "Skin"}


@pytest.mark.parametrize("destination,asset_id", [("", "A1"), ("D1", "")])
def test_create_rejects_missing_destination_or_asset(destination: str, asset_id: str) -> None:
    with pytest.raises(ValueError):
        TransferRequest.create(destination=destination, asset_id=asset_id, source_tag="clash")
