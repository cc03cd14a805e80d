"""Composite tool handlers.

Each handler takes the ``Upstreams`` bundle plus tool arguments and returns a
``ToolEnvelope``. Mandatory upstream failures propagate as exceptions.
"""

from .accounts import account_overview
from .ledger import ledger_summary
from .markets import amm_overview, market_snapshot
from .network import amendment_status, network_overview
from .resolver import resolve_entities
from .tokens import token_overview
from .transactions import search_transactions, tx_explain
from .validators import validator_health, validator_set_overview

__all__ = [
    "account_overview",
    "amendment_status",
    "amm_overview",
    "ledger_summary",
    "market_snapshot",
    "network_overview",
    "resolve_entities",
    "search_transactions",
    "token_overview",
    "tx_explain",
    "validator_health",
    "validator_set_overview",
]
