from .composite_tools import register_composite_tools
from .passthrough_tools import register_passthrough_tools

__all__ = ["register_composite_tools", "register_passthrough_tools"]
