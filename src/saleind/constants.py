from __future__ import annotations

from enum import Enum

# uint256 amounts emitted by the token contracts are scaled by 10**DECIMALS
DECIMALS = 18

# selectors are starknet keccak hashes masked to 250 bits
SELECTOR_MASK = 2**250 - 1


class EventKind(str, Enum):
    """Closed set of event kinds the transforms understand, valued by declared event name."""

    TRANSFER = "Transfer"
    DOMAIN_UPDATE = "starknet_id_update"
    SALE_METADATA = "SaleMetadata"
    AUTO_RENEW = "domain_renewed"
    UPDATE_AUTO_RENEW = "UpdatedRenewal"
    DISABLE_AUTO_RENEW = "DisabledRenewal"
    REFERRAL = "on_commission"
