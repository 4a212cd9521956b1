"""
Errors raised while compiling a NAT service.

Every error aborts the whole compilation. Each one carries enough context
(rule index, field, network id) for the caller to find the offending intent.
"""
from typing import Any, Dict, Optional


class NatCompilationError(Exception):
    """Base class for NAT compilation failures."""

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = {k: v for k, v in context.items() if v is not None}


class GatewayNotFoundError(NatCompilationError):
    """The gateway directory has no gateway with the requested identity."""

    def __init__(self, gateway_id: str):
        super().__init__(f"Edge gateway not found: {gateway_id}", gateway_id=gateway_id)
        self.gateway_id = gateway_id


class UnknownNetworkError(NatCompilationError):
    """A rule references a network the gateway has no interface for."""

    def __init__(self, gateway_id: str, network_id: str, index: Optional[int] = None):
        location = f" (rule {index})" if index is not None else ""
        super().__init__(
            f"Edge gateway {gateway_id} has no interface on network {network_id}{location}",
            gateway_id=gateway_id,
            network_id=network_id,
            index=index,
        )
        self.gateway_id = gateway_id
        self.network_id = network_id
        self.index = index


class UnsupportedRuleTypeError(NatCompilationError):
    """rule_type is neither SNAT nor DNAT."""

    def __init__(self, index: int, rule_type: Any):
        super().__init__(
            f"Rule {index}: unsupported rule_type {rule_type!r} (expected SNAT or DNAT)",
            index=index,
            rule_type=rule_type,
        )
        self.index = index
        self.rule_type = rule_type


class MissingFieldError(NatCompilationError):
    """A field required for the rule's type is absent."""

    def __init__(self, index: int, field: str):
        super().__init__(f"Rule {index}: missing required field '{field}'", index=index, field=field)
        self.index = index
        self.field = field


class InvalidFieldError(NatCompilationError):
    """A field is present but cannot be used as given."""

    def __init__(self, index: Optional[int], field: str, reason: str):
        prefix = f"Rule {index}: " if index is not None else ""
        super().__init__(f"{prefix}invalid field '{field}': {reason}", index=index, field=field)
        self.index = index
        self.field = field
        self.reason = reason


class IdRangeExhaustedError(NatCompilationError):
    """Auto-assigning an id would leave the service's id range."""

    def __init__(self, index: int, rule_id: int, maximum: int):
        super().__init__(
            f"Rule {index}: auto-assigned id {rule_id} exceeds the NAT id range maximum {maximum}",
            index=index,
            rule_id=rule_id,
        )
        self.index = index
        self.rule_id = rule_id
        self.maximum = maximum
