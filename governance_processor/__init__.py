"""
Governance Event Processor

Folds the ordered stream of token-curated registry contract events produced
by the crawler into queryable governance aggregates: listings, challenges,
polls, appeals, parameter proposals, token transfers and multisig wallets.

Processing is idempotent and resumable:
- Events are applied strictly in delivered order by a single worker
- Progress is tracked by a (timestamp, hashes) watermark
- Missing local state is reconciled from the chain when possible
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
