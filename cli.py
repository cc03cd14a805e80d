#!/usr/bin/env python3
"""Local CLI for exercising the XRPL data tools without an MCP client."""

import argparse
import asyncio
import json
import sys

from fastmcp import Client

from xrpl_data_mcp.config import get_settings
from xrpl_data_mcp.logging_config import setup_logging
from xrpl_data_mcp.providers import build_upstreams
from xrpl_data_mcp.server import create_server


def print_result(result):
    """Pretty print a tool result, envelope summary first"""
    text = "".join(getattr(block, "text", "") for block in result.content)
    if result.is_error:
        print(f"❌ Error: {text}")
        return

    try:
        payload = json.loads(text)
    except ValueError:
        print(text)
        return

    if isinstance(payload, dict) and "freshness" in payload:
        freshness = payload["freshness"]
        systems = ", ".join(f"{s['system']} {s['method']}" for s in payload.get("sources", []))
        print(f"Ledger: {freshness.get('asOfLedger')}  Time: {freshness.get('asOfTime')}")
        print(f"Sources: {systems or '-'}")
        if payload.get("warnings"):
            print(f"⚠️  Warnings: {'; '.join(payload['warnings'])}")
        print("=" * 50)
        payload = payload.get("data")

    print(json.dumps(payload, indent=2))


async def cli_list_tools(client: Client):
    tools = await client.list_tools()
    for tool in sorted(tools, key=lambda t: t.name):
        print(f"{tool.name:<32} {tool.description or ''}".rstrip())


async def cli_call(client: Client, name: str, arguments: dict):
    print(f"🔍 Calling {name}...")
    result = await client.call_tool(name, arguments, raise_on_error=False)
    print_result(result)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="XRPL data MCP CLI")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("tools", help="List registered tools")

    call_parser = subparsers.add_parser("call", help="Call any tool by name")
    call_parser.add_argument("name", help="Tool name")
    call_parser.add_argument("--args", default="{}", help="Tool arguments as a JSON object")

    resolve_parser = subparsers.add_parser("resolve", help="Classify an identifier")
    resolve_parser.add_argument("value", help="Hash, address, token id, ledger index or domain")

    subparsers.add_parser("network", help="Network overview")

    account_parser = subparsers.add_parser("account", help="Account overview")
    account_parser.add_argument("account", help="Classic address")
    account_parser.add_argument("--tx-limit", type=int, help="Transactions to profile (default: 100)")

    return parser


async def main():
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    settings = get_settings()
    setup_logging(settings.log_level, stream=sys.stderr)
    server = create_server(build_upstreams(settings))

    async with Client(server) as client:
        if args.command == "tools":
            await cli_list_tools(client)

        elif args.command == "call":
            try:
                arguments = json.loads(args.args)
            except ValueError as exc:
                parser.error(f"--args is not valid JSON: {exc}")
            await cli_call(client, args.name, arguments)

        elif args.command == "resolve":
            await cli_call(client, "resolve_entities", {"input": args.value})

        elif args.command == "network":
            await cli_call(client, "network_overview", {})

        elif args.command == "account":
            options = {"tx_limit": args.tx_limit} if args.tx_limit else {}
            await cli_call(client, "account_overview", {"account": args.account, "options": options})


if __name__ == "__main__":
    asyncio.run(main())
