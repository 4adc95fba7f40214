"""Seed default categories. Idempotent: only inserts missing slugs."""

import logging

from registry.db import Database
from registry.models import Category

logger = logging.getLogger(__name__)

# (slug, display name, description)
DEFAULT_CATEGORIES = [
    ("market", "Market Data", "Prices, charts, volumes and market overviews"),
    ("portfolio", "Portfolio", "Balances, holdings and allocation"),
    ("defi", "DeFi", "Yield, staking and protocol analytics"),
    ("trading", "Trading", "Swaps, orders and exchange access"),
    ("security", "Security", "Audits, risk scans and honeypot checks"),
    ("nft", "NFT", "Collections, mints and marketplaces"),
    ("wallet", "Wallet", "Addresses, transactions and transfers"),
    ("analytics", "Analytics", "History, reports and statistics"),
    ("bridge", "Bridge", "Cross-chain transfers"),
    ("oracle", "Oracle", "Price feeds and oracle data"),
    ("gas", "Gas", "Fees and gas estimation"),
    ("token", "Token", "Token metadata and supply"),
    ("governance", "Governance", "DAOs, votes and proposals"),
    ("lending", "Lending", "Borrowing, lending and collateral"),
    ("social", "Social", "Sentiment, news and social feeds"),
    ("other", "Other", "Everything else"),
]


def seed_categories(db: Database) -> int:
    """Ensure default categories exist. Returns the number inserted."""
    with db.session_scope() as session:
        existing = {slug for (slug,) in session.query(Category.slug).all()}
        to_add = [c for c in DEFAULT_CATEGORIES if c[0] not in existing]
        for slug, name, description in to_add:
            session.add(Category(slug=slug, name=name, description=description))
            logger.info("Seeded category: %s", slug)
        if not to_add:
            logger.debug("Default categories already present")
        return len(to_add)
