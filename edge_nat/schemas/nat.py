"""Schemas for NAT rule intents and compiled NAT service documents."""
import enum
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Interface descriptors are opaque to the compiler: whatever the gateway
# directory returns (type, name, href) is copied into each rule verbatim.
InterfaceDescriptor = Dict[str, Any]


class NatRuleType(str, enum.Enum):
    """NAT rule types supported by the edge gateway."""
    SNAT = "SNAT"
    DNAT = "DNAT"


def _bool_to_flag(v: Any) -> Any:
    """Render booleans the way the provider expects them ("true"/"false")."""
    if isinstance(v, bool):
        return "true" if v else "false"
    return v


class RuleIntentBase(BaseModel, ABC):
    """Fields shared by every NAT rule intent."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    network_id: str
    original_ip: str
    translated_ip: str
    enabled: str = "true"
    id: Optional[str] = None

    @field_validator("enabled", mode="before")
    @classmethod
    def normalize_enabled(cls, v: Any) -> Any:
        if v is None:
            return "true"
        return _bool_to_flag(v)

    @field_validator("id", mode="before")
    @classmethod
    def blank_id_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    @classmethod
    def required_fields(cls) -> List[str]:
        """Names of the fields an intent of this type must supply, in declaration order."""
        return [name for name, info in cls.model_fields.items() if info.is_required()]

    @abstractmethod
    def gateway_nat_rule(self, interface: InterfaceDescriptor) -> Dict[str, Any]:
        """Build the provider's GatewayNatRule block for this intent."""
        pass


class SnatRuleIntent(RuleIntentBase):
    """
    Source NAT intent.

    Has no protocol or port fields; any such keys in the raw intent are dropped.
    """
    rule_type: Literal["SNAT"]

    def gateway_nat_rule(self, interface: InterfaceDescriptor) -> Dict[str, Any]:
        return {
            "Interface": interface,
            "OriginalIp": self.original_ip,
            "TranslatedIp": self.translated_ip,
        }


class DnatRuleIntent(RuleIntentBase):
    """Destination NAT intent (port forward)."""
    rule_type: Literal["DNAT"]
    original_port: str
    translated_port: str
    protocol: str = "tcp"

    @field_validator("protocol", mode="before")
    @classmethod
    def default_protocol(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and v.strip() == ""):
            return "tcp"
        return v

    def gateway_nat_rule(self, interface: InterfaceDescriptor) -> Dict[str, Any]:
        return {
            "Interface": interface,
            "OriginalIp": self.original_ip,
            "TranslatedIp": self.translated_ip,
            "OriginalPort": self.original_port,
            "TranslatedPort": self.translated_port,
            "Protocol": self.protocol,
        }


RuleIntent = Union[SnatRuleIntent, DnatRuleIntent]

RULE_INTENT_TYPES = {
    NatRuleType.SNAT.value: SnatRuleIntent,
    NatRuleType.DNAT.value: DnatRuleIntent,
}


class NatServiceIntent(BaseModel):
    """Request schema for a NAT service description."""
    enabled: str = Field("true", description="Whether the NAT service is enabled")
    nat_rules: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Ordered NAT rule intents; order is preserved in the compiled document",
    )

    @field_validator("enabled", mode="before")
    @classmethod
    def normalize_enabled(cls, v: Any) -> Any:
        if v is None:
            return "true"
        return _bool_to_flag(v)


class NatCompileResponse(BaseModel):
    """Response schema for a compiled NAT service."""
    gateway_id: str
    rule_count: int
    config: Dict[str, Any]


class IdRangeResponse(BaseModel):
    """Response schema for the configured NAT rule id range."""
    minimum: int
    maximum: int
