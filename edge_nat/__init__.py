"""Edge NAT Compiler: NAT rule intents to edge gateway NatService configuration."""

__version__ = "1.0.0"
