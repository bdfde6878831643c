import pytest

from saleind.constants import EventKind
from saleind.decoding.selectors import SELECTOR_KEYS
from saleind.indexers import INDEXERS, build_filter, get_indexer, host_config


@pytest.mark.parametrize("name", sorted(INDEXERS))
def test_filter_selectors_match_handled_kinds(config, name: str) -> None:
    definition = get_indexer(name)
    filt = build_filter(definition, config)

    streamed = {key for entry in filt["events"] for key in entry["keys"]}
    assert streamed == set(definition.selectors.selectors())


def test_sales_filter_uses_configured_emitters(config) -> None:
    filt = build_filter(get_indexer("sales"), config)

    assert filt["header"] == {"weak": True}
    by_key = {entry["keys"][0]: entry["fromAddress"] for entry in filt["events"]}
    assert by_key[hex(SELECTOR_KEYS[EventKind.TRANSFER])] == hex(config.eth_contract)
    assert by_key[hex(SELECTOR_KEYS[EventKind.DOMAIN_UPDATE])] == hex(config.naming_contract)
    assert by_key[hex(SELECTOR_KEYS[EventKind.REFERRAL])] == hex(config.referral_contract)
    assert by_key[hex(SELECTOR_KEYS[EventKind.AUTO_RENEW])] == hex(config.renewal_contract)


def test_tax_filter_has_one_entry_per_token(config) -> None:
    filt = build_filter(get_indexer("tax_txs"), config)
    assert [e["fromAddress"] for e in filt["events"]] == [hex(t) for t in config.token_contracts]


def test_host_config_sink_options(config) -> None:
    declared = host_config(get_indexer("auto_renew_updates"), config)

    assert declared["network"] == "starknet"
    assert declared["startingBlock"] == config.starting_block
    assert declared["sinkOptions"] == {
        "connectionString": config.mongo_connection_string,
        "database": config.db_name,
        "collectionName": "auto_renew_updates",
        "entityMode": True,
    }


def test_unknown_indexer() -> None:
    with pytest.raises(ValueError, match="unknown indexer"):
        get_indexer("mints")
