"""Thin tools that forward validated arguments to one upstream call.

Results are returned as the upstream sent them; only ``xrplmeta_get`` wraps
its payload in an envelope. Optional arguments the caller leaves out are not
forwarded.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from fastmcp import FastMCP
from pydantic import Field

from ..providers import Upstreams
from ..providers.rippled import DEFAULT_RPC_ID, RECOMMENDED_METHODS
from ..types import Source, envelope
from .invoke import invoke, supplied

NonEmpty = Annotated[str, Field(min_length=1)]
TokenId = Annotated[str, Field(min_length=3)]
LedgerSpecifier = Optional[Union[str, int]]
Limit = Optional[Annotated[int, Field(gt=0, le=1000)]]
PassthroughObject = Dict[str, Any]
QueryParams = Optional[Dict[str, Union[str, int, float, bool]]]


def register_los_tools(mcp: FastMCP, upstreams: Upstreams) -> None:
    los = upstreams.los

    @mcp.tool(name="los_get_token")
    async def los_get_token(tokenID: TokenId):
        """Get a single LOS token by tokenID (format: currencyHex.issuer)."""
        return await invoke("los_get_token", los.get_token, tokenID)

    @mcp.tool(name="los_batch_get_tokens")
    async def los_batch_get_tokens(tokenIds: Annotated[List[TokenId], Field(min_length=1)]):
        """Batch fetch LOS token objects. Requires tokenIds as an array of tokenID strings."""
        return await invoke("los_batch_get_tokens", los.batch_get_tokens, tokenIds)

    @mcp.tool(name="los_get_trusted_tokens")
    async def los_get_trusted_tokens():
        """Get trusted/KYCed tokens from LOS."""
        return await invoke("los_get_trusted_tokens", los.get_trusted_tokens)

    @mcp.tool(name="los_get_transactions")
    async def los_get_transactions(
        token: Optional[str] = None,
        transactionType: Optional[str] = None,
        size: Limit = None,
        direction: Optional[Literal["next", "prev"]] = None,
        sort_field: Optional[str] = None,
        sort_order: Optional[Literal["asc", "desc"]] = None,
        marker: Optional[str] = None,
        ledger_index_min: Optional[Annotated[int, Field(ge=0)]] = None,
        ledger_index_max: Optional[Annotated[int, Field(ge=0)]] = None,
    ):
        """Query LOS token transactions with pagination and sorting."""
        query = supplied(
            token=token,
            transactionType=transactionType,
            size=size,
            direction=direction,
            sort_field=sort_field,
            sort_order=sort_order,
            marker=marker,
            ledger_index_min=ledger_index_min,
            ledger_index_max=ledger_index_max,
        )
        return await invoke("los_get_transactions", los.get_transactions, query)


def register_validator_history_tools(mcp: FastMCP, upstreams: Upstreams) -> None:
    vhs = upstreams.vhs

    @mcp.tool(name="vh_list_networks")
    async def vh_list_networks():
        """Get all tracked networks from validator history service."""
        return await invoke("vh_list_networks", vhs.list_networks)

    @mcp.tool(name="vh_topology_nodes")
    async def vh_topology_nodes(network: Optional[str] = None):
        """Get topology nodes for all networks or a specific network."""
        return await invoke("vh_topology_nodes", vhs.topology_nodes, network)

    @mcp.tool(name="vh_topology_node")
    async def vh_topology_node(pubkey: NonEmpty):
        """Get topology information for a specific validator pubkey."""
        return await invoke("vh_topology_node", vhs.topology_node, pubkey)

    @mcp.tool(name="vh_list_validators")
    async def vh_list_validators(group: Optional[str] = None):
        """Get validators or validators filtered by group (UNL/network identifier)."""
        return await invoke("vh_list_validators", vhs.list_validators, group)

    @mcp.tool(name="vh_get_validator")
    async def vh_get_validator(pubkey: NonEmpty):
        """Get details for a specific validator pubkey."""
        return await invoke("vh_get_validator", vhs.get_validator, pubkey)

    @mcp.tool(name="vh_get_validator_manifests")
    async def vh_get_validator_manifests(pubkey: NonEmpty):
        """Get manifest history for a specific validator pubkey."""
        return await invoke("vh_get_validator_manifests", vhs.get_validator_manifests, pubkey)

    @mcp.tool(name="vh_get_validator_reports")
    async def vh_get_validator_reports(pubkey: NonEmpty):
        """Get report history for a specific validator pubkey."""
        return await invoke("vh_get_validator_reports", vhs.get_validator_reports, pubkey)

    @mcp.tool(name="vh_get_daily_validator_reports")
    async def vh_get_daily_validator_reports():
        """Get daily validator reports collection."""
        return await invoke("vh_get_daily_validator_reports", vhs.get_daily_validator_reports)

    @mcp.tool(name="vh_get_amendments_info")
    async def vh_get_amendments_info():
        """Get general amendment information."""
        return await invoke("vh_get_amendments_info", vhs.get_amendments_info)

    @mcp.tool(name="vh_get_amendment_info")
    async def vh_get_amendment_info(amendment: NonEmpty):
        """Get amendment information by amendment name or id."""
        return await invoke("vh_get_amendment_info", vhs.get_amendment_info, amendment)

    @mcp.tool(name="vh_get_amendments_vote")
    async def vh_get_amendments_vote(network: NonEmpty):
        """Get all amendment votes for a network."""
        return await invoke("vh_get_amendments_vote", vhs.get_amendments_vote, network)

    @mcp.tool(name="vh_get_amendment_vote")
    async def vh_get_amendment_vote(network: NonEmpty, identifier: NonEmpty):
        """Get amendment vote details for network and amendment identifier."""
        return await invoke("vh_get_amendment_vote", vhs.get_amendment_vote, network, identifier)

    @mcp.tool(name="vh_health")
    async def vh_health():
        """Get validator history service health summary."""
        return await invoke("vh_health", vhs.health)

    @mcp.tool(name="vh_metrics")
    async def vh_metrics():
        """Get validator history service Prometheus metrics exposition."""
        return await invoke("vh_metrics", vhs.metrics)

    @mcp.tool(name="validator_history_get")
    async def validator_history_get(path: NonEmpty, query: QueryParams = None):
        """GET any validator history endpoint by path and optional query params."""
        return await invoke("validator_history_get", vhs.get, path, query)


def register_rpc_tools(mcp: FastMCP, upstreams: Upstreams) -> None:
    rippled = upstreams.rippled

    @mcp.tool(name="xrpl_account_info")
    async def xrpl_account_info(
        account: NonEmpty,
        ledger_index: LedgerSpecifier = None,
        queue: Optional[bool] = None,
        signer_lists: Optional[bool] = None,
    ):
        """Get basic account data."""
        params = supplied(account=account, ledger_index=ledger_index, queue=queue, signer_lists=signer_lists)
        return await invoke("xrpl_account_info", rippled.rpc, "account_info", [params])

    @mcp.tool(name="xrpl_account_objects")
    async def xrpl_account_objects(
        account: NonEmpty,
        ledger_index: LedgerSpecifier = None,
        type: Optional[str] = None,
        deletion_blockers_only: Optional[bool] = None,
        limit: Limit = None,
        marker: Optional[PassthroughObject] = None,
    ):
        """Get ledger objects owned by an account."""
        params = supplied(
            account=account,
            ledger_index=ledger_index,
            type=type,
            deletion_blockers_only=deletion_blockers_only,
            limit=limit,
            marker=marker,
        )
        return await invoke("xrpl_account_objects", rippled.rpc, "account_objects", [params])

    @mcp.tool(name="xrpl_account_lines")
    async def xrpl_account_lines(
        account: NonEmpty,
        ledger_index: LedgerSpecifier = None,
        peer: Optional[str] = None,
        limit: Limit = None,
        marker: Optional[PassthroughObject] = None,
    ):
        """Get trust lines for an account."""
        params = supplied(account=account, ledger_index=ledger_index, peer=peer, limit=limit, marker=marker)
        return await invoke("xrpl_account_lines", rippled.rpc, "account_lines", [params])

    @mcp.tool(name="xrpl_account_tx")
    async def xrpl_account_tx(
        account: NonEmpty,
        ledger_index_min: Optional[int] = None,
        ledger_index_max: Optional[int] = None,
        binary: Optional[bool] = None,
        forward: Optional[bool] = None,
        limit: Limit = None,
        marker: Optional[PassthroughObject] = None,
    ):
        """Get account transaction history."""
        params = supplied(
            account=account,
            ledger_index_min=ledger_index_min,
            ledger_index_max=ledger_index_max,
            binary=binary,
            forward=forward,
            limit=limit,
            marker=marker,
        )
        return await invoke("xrpl_account_tx", rippled.rpc, "account_tx", [params])

    @mcp.tool(name="xrpl_ledger")
    async def xrpl_ledger(
        ledger_hash: Optional[str] = None,
        ledger_index: LedgerSpecifier = None,
        transactions: Optional[bool] = None,
        expand: Optional[bool] = None,
        owner_funds: Optional[bool] = None,
        binary: Optional[bool] = None,
        queue: Optional[bool] = None,
    ):
        """Get one ledger version and optional transaction/state expansion."""
        params = supplied(
            ledger_hash=ledger_hash,
            ledger_index=ledger_index,
            transactions=transactions,
            expand=expand,
            owner_funds=owner_funds,
            binary=binary,
            queue=queue,
        )
        return await invoke("xrpl_ledger", rippled.rpc, "ledger", [params])

    @mcp.tool(name="xrpl_ledger_data")
    async def xrpl_ledger_data(
        ledger_hash: Optional[str] = None,
        ledger_index: LedgerSpecifier = None,
        binary: Optional[bool] = None,
        limit: Optional[Annotated[int, Field(gt=0, le=2048)]] = None,
        marker: Optional[PassthroughObject] = None,
        type: Optional[str] = None,
    ):
        """Get raw ledger state data."""
        params = supplied(
            ledger_hash=ledger_hash,
            ledger_index=ledger_index,
            binary=binary,
            limit=limit,
            marker=marker,
            type=type,
        )
        return await invoke("xrpl_ledger_data", rippled.rpc, "ledger_data", [params])

    @mcp.tool(name="xrpl_ledger_entry")
    async def xrpl_ledger_entry(
        ledger_hash: Optional[str] = None,
        ledger_index: LedgerSpecifier = None,
        index: Optional[str] = None,
        account_root: Optional[PassthroughObject] = None,
        check: Optional[PassthroughObject] = None,
        deposit_preauth: Optional[PassthroughObject] = None,
        directory: Optional[PassthroughObject] = None,
        escrow: Optional[PassthroughObject] = None,
        offer: Optional[PassthroughObject] = None,
        payment_channel: Optional[PassthroughObject] = None,
        ripple_state: Optional[PassthroughObject] = None,
        ticket: Optional[PassthroughObject] = None,
    ):
        """Get a specific ledger entry by index or typed locator fields."""
        params = supplied(
            ledger_hash=ledger_hash,
            ledger_index=ledger_index,
            index=index,
            account_root=account_root,
            check=check,
            deposit_preauth=deposit_preauth,
            directory=directory,
            escrow=escrow,
            offer=offer,
            payment_channel=payment_channel,
            ripple_state=ripple_state,
            ticket=ticket,
        )
        return await invoke("xrpl_ledger_entry", rippled.rpc, "ledger_entry", [params])

    @mcp.tool(name="xrpl_tx")
    async def xrpl_tx(
        transaction: NonEmpty,
        binary: Optional[bool] = None,
        min_ledger: Optional[int] = None,
        max_ledger: Optional[int] = None,
    ):
        """Get a transaction by hash."""
        params = supplied(transaction=transaction, binary=binary, min_ledger=min_ledger, max_ledger=max_ledger)
        return await invoke("xrpl_tx", rippled.rpc, "tx", [params])

    @mcp.tool(name="xrpl_book_offers")
    async def xrpl_book_offers(
        taker_gets: PassthroughObject,
        taker_pays: PassthroughObject,
        taker: Optional[str] = None,
        ledger_index: LedgerSpecifier = None,
        limit: Limit = None,
        marker: Optional[PassthroughObject] = None,
    ):
        """Get offers in one order book."""
        params = supplied(
            taker_gets=taker_gets,
            taker_pays=taker_pays,
            taker=taker,
            ledger_index=ledger_index,
            limit=limit,
            marker=marker,
        )
        return await invoke("xrpl_book_offers", rippled.rpc, "book_offers", [params])

    @mcp.tool(name="xrpl_amm_info")
    async def xrpl_amm_info(
        asset: PassthroughObject,
        asset2: PassthroughObject,
        ledger_hash: Optional[str] = None,
        ledger_index: LedgerSpecifier = None,
    ):
        """Get Automated Market Maker pool info."""
        params = supplied(asset=asset, asset2=asset2, ledger_hash=ledger_hash, ledger_index=ledger_index)
        return await invoke("xrpl_amm_info", rippled.rpc, "amm_info", [params])

    @mcp.tool(name="xrpl_nft_info")
    async def xrpl_nft_info(nft_id: NonEmpty, ledger_hash: Optional[str] = None, ledger_index: LedgerSpecifier = None):
        """Get metadata and state for one NFToken (Clio method)."""
        params = supplied(nft_id=nft_id, ledger_hash=ledger_hash, ledger_index=ledger_index)
        return await invoke("xrpl_nft_info", rippled.rpc, "nft_info", [params])

    @mcp.tool(name="xrpl_nft_history")
    async def xrpl_nft_history(
        nft_id: NonEmpty,
        ledger_index_min: Optional[int] = None,
        ledger_index_max: Optional[int] = None,
        limit: Limit = None,
        marker: Optional[PassthroughObject] = None,
    ):
        """Get ownership and transfer history for one NFToken (Clio method)."""
        params = supplied(
            nft_id=nft_id,
            ledger_index_min=ledger_index_min,
            ledger_index_max=ledger_index_max,
            limit=limit,
            marker=marker,
        )
        return await invoke("xrpl_nft_history", rippled.rpc, "nft_history", [params])

    @mcp.tool(name="xrpl_nfts_by_issuer")
    async def xrpl_nfts_by_issuer(
        issuer: NonEmpty,
        ledger_index: LedgerSpecifier = None,
        limit: Limit = None,
        marker: Optional[PassthroughObject] = None,
    ):
        """List NFTs issued by an account (Clio method)."""
        params = supplied(issuer=issuer, ledger_index=ledger_index, limit=limit, marker=marker)
        return await invoke("xrpl_nfts_by_issuer", rippled.rpc, "nfts_by_issuer", [params])

    @mcp.tool(name="xrpl_server_info")
    async def xrpl_server_info():
        """Get server status and validated range."""
        return await invoke("xrpl_server_info", rippled.rpc, "server_info", [{}])

    @mcp.tool(name="xrpl_fee")
    async def xrpl_fee():
        """Get current transaction cost metrics."""
        return await invoke("xrpl_fee", rippled.rpc, "fee", [{}])

    @mcp.tool(name="xrpl_public_api_call")
    async def xrpl_public_api_call(
        method: NonEmpty,
        params: Optional[List[PassthroughObject]] = None,
        id: Optional[Union[str, int]] = None,
    ):
        """Call any XRPL JSON-RPC public API method against rippled/Clio endpoint."""
        request_id = id if id is not None else DEFAULT_RPC_ID
        return await invoke("xrpl_public_api_call", rippled.rpc, method, params or [], request_id)

    @mcp.tool(name="xrpl_list_recommended_methods")
    async def xrpl_list_recommended_methods():
        """List the curated high-utility XRPL methods this MCP server exposes as dedicated tools."""
        return {"methods": list(RECOMMENDED_METHODS)}


def register_xrplmeta_tools(mcp: FastMCP, upstreams: Upstreams) -> None:
    meta = upstreams.meta

    async def _get(path: str, query: Optional[Dict[str, Any]]):
        data = await meta.get(path, query)
        return envelope(data, sources=[Source(system="XRPLMeta", method=f"GET {path}")])

    @mcp.tool(name="xrplmeta_get")
    async def xrplmeta_get(path: NonEmpty, query: QueryParams = None):
        """GET XRPLMeta public API path with optional query params."""
        return await invoke("xrplmeta_get", _get, path, query)


def register_passthrough_tools(mcp: FastMCP, upstreams: Upstreams) -> None:
    register_los_tools(mcp, upstreams)
    register_validator_history_tools(mcp, upstreams)
    register_rpc_tools(mcp, upstreams)
    register_xrplmeta_tools(mcp, upstreams)
