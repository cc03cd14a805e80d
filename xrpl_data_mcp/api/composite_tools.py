"""Agent-facing tools that join several upstreams into one envelope."""

from typing import Annotated, Any, Dict, Optional, Union

from fastmcp import FastMCP
from pydantic import Field

from ..providers import Upstreams
from ..tools import (
    account_overview,
    amendment_status,
    amm_overview,
    ledger_summary,
    market_snapshot,
    network_overview,
    resolve_entities,
    search_transactions,
    token_overview,
    tx_explain,
    validator_health,
    validator_set_overview,
)
from .invoke import invoke

PassthroughObject = Dict[str, Any]


def register_composite_tools(mcp: FastMCP, upstreams: Upstreams) -> None:

    @mcp.tool(name="network_overview")
    async def network_overview_tool():
        """Get network identity, health summary, key rates, and LOS freshness in one call."""
        return await invoke("network_overview", network_overview, upstreams)

    @mcp.tool(name="ledger_summary")
    async def ledger_summary_tool(
        ledger_index: Optional[Union[str, int]] = None,
        ledger_hash: Optional[str] = None,
    ):
        """Get canonical ledger facts plus optional LOS artifact hints."""
        return await invoke("ledger_summary", ledger_summary, upstreams, ledger_index, ledger_hash)

    @mcp.tool(name="tx_explain")
    async def tx_explain_tool(tx_hash: Annotated[str, Field(min_length=32)]):
        """Get a normalized transaction explanation with classifications and related objects."""
        return await invoke("tx_explain", tx_explain, upstreams, tx_hash)

    @mcp.tool(name="account_overview")
    async def account_overview_tool(
        account: Annotated[str, Field(min_length=10)],
        options: Optional[PassthroughObject] = None,
    ):
        """Get an account activity and state summary."""
        return await invoke("account_overview", account_overview, upstreams, account, options)

    @mcp.tool(name="token_overview")
    async def token_overview_tool(
        issuer: Annotated[str, Field(min_length=10)],
        currency: Annotated[str, Field(min_length=1)],
        options: Optional[PassthroughObject] = None,
    ):
        """Get one consolidated issued-token overview."""
        return await invoke("token_overview", token_overview, upstreams, issuer, currency, options)

    @mcp.tool(name="market_snapshot")
    async def market_snapshot_tool(
        base: PassthroughObject,
        quote: PassthroughObject,
        options: Optional[PassthroughObject] = None,
    ):
        """Get a live market snapshot for base/quote including orderbook, AMM, and recent LOS trades."""
        return await invoke("market_snapshot", market_snapshot, upstreams, base, quote, options)

    @mcp.tool(name="amm_overview")
    async def amm_overview_tool(
        amm_id: Optional[str] = None,
        assetA: Optional[PassthroughObject] = None,
        assetB: Optional[PassthroughObject] = None,
        options: Optional[PassthroughObject] = None,
    ):
        """Get AMM state and recent swap activity."""
        return await invoke("amm_overview", amm_overview, upstreams, amm_id, assetA, assetB, options)

    @mcp.tool(name="validator_set_overview")
    async def validator_set_overview_tool(options: Optional[PassthroughObject] = None):
        """Get validator set composition and recent change-oriented summary."""
        return await invoke("validator_set_overview", validator_set_overview, upstreams, options)

    @mcp.tool(name="validator_health")
    async def validator_health_tool(
        pubkey_or_node: Annotated[str, Field(min_length=8)],
        window: Optional[str] = None,
    ):
        """Get validator performance summary over a report window."""
        return await invoke("validator_health", validator_health, upstreams, pubkey_or_node, window)

    @mcp.tool(name="amendment_status")
    async def amendment_status_tool(network: Optional[str] = None):
        """Get enabled amendments and governance context."""
        return await invoke("amendment_status", amendment_status, upstreams, network)

    @mcp.tool(name="search_transactions")
    async def search_transactions_tool(
        filters: PassthroughObject,
        cursor: Optional[str] = None,
        size: Optional[Annotated[int, Field(gt=0, le=1000)]] = None,
    ):
        """Search LOS transactions with open-ended filters and return aggregate summary."""
        return await invoke("search_transactions", search_transactions, upstreams, filters, cursor, size)

    @mcp.tool(name="resolve_entities")
    async def resolve_entities_tool(input: Annotated[str, Field(min_length=1)]):
        """Resolve user input into canonical XRPL/LOS entity identifiers and suggested next tools."""
        return await invoke("resolve_entities", resolve_entities, input)
