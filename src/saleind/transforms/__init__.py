"""Block transforms, one module per indexer.

- `sales`: correlates transfer / referral / renewal / domain update events into sale rows
- `auto_renew_updates`: renewal allowance upserts keyed by (domain, renewer)
- `tax_txs`: transfers into the tax collection address
"""
