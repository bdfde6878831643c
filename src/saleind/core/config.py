"""Indexer configuration: resolved once from the environment, then passed by parameter."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from saleind.constants import DECIMALS
from saleind.core.errors import ConfigError

DEFAULT_FINALITY = "DATA_STATUS_ACCEPTED"


@dataclass(frozen=True)
class IndexerConfig:
    """Contract addresses and host/sink settings shared by all indexers."""

    naming_contract: int
    eth_contract: int
    referral_contract: int
    renewal_contract: int
    tax_contract: int
    token_contracts: tuple[int, ...] = ()
    stream_url: str = ""
    starting_block: int = 0
    finality: str = DEFAULT_FINALITY
    db_name: str = ""
    mongo_connection_string: str = ""
    decimals: int = DECIMALS


def _address(env: Mapping[str, str], name: str) -> int:
    raw = env.get(name)
    if not raw:
        raise ConfigError(f"{name} is not set")
    try:
        return int(raw, 16)
    except ValueError as e:
        raise ConfigError(f"{name} is not a hex address: {raw!r}") from e


def _token_contracts(env: Mapping[str, str]) -> tuple[int, ...]:
    raw_len = env.get("TOKEN_CONTRACTS_LEN", "0") or "0"
    try:
        count = int(raw_len)
    except ValueError as e:
        raise ConfigError(f"TOKEN_CONTRACTS_LEN is not an integer: {raw_len!r}") from e
    return tuple(_address(env, f"TOKEN_CONTRACT_{i}") for i in range(count))


def load_config(environ: Mapping[str, str] | None = None) -> IndexerConfig:
    """Build an `IndexerConfig` from environment variables.

    Contract addresses are required. Host and sink settings fall back to
    the dataclass defaults when absent.
    """
    env = os.environ if environ is None else environ

    raw_start = env.get("STARTING_BLOCK", "0") or "0"
    try:
        starting_block = int(raw_start)
    except ValueError as e:
        raise ConfigError(f"STARTING_BLOCK is not an integer: {raw_start!r}") from e

    return IndexerConfig(
        naming_contract=_address(env, "NAMING_CONTRACT"),
        eth_contract=_address(env, "ETH_CONTRACT"),
        referral_contract=_address(env, "REFERRAL_CONTRACT"),
        renewal_contract=_address(env, "RENEWAL_CONTRACT"),
        tax_contract=_address(env, "TAX_CONTRACT"),
        token_contracts=_token_contracts(env),
        stream_url=env.get("STREAM_URL", ""),
        starting_block=starting_block,
        finality=env.get("FINALITY") or DEFAULT_FINALITY,
        db_name=env.get("DB_NAME", ""),
        mongo_connection_string=env.get("MONGO_CONNECTION_STRING", ""),
    )
