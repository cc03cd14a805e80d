"""MCP gateway over LOS, the validator history service, rippled/Clio and XRPLMeta."""

__version__ = "0.1.0"
