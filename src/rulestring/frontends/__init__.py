"""Frontend interfaces for rule strings."""

from .cli import CLIRuleString

__all__ = ["CLIRuleString"]
