"""
Service for compiling NAT rule intents into the edge gateway's NatService document.
"""
import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional

from pydantic import ValidationError

from edge_nat.core.config import IdRange
from edge_nat.core.exceptions import (
    IdRangeExhaustedError,
    InvalidFieldError,
    MissingFieldError,
    UnsupportedRuleTypeError,
)
from edge_nat.schemas.nat import RULE_INTENT_TYPES, NatServiceIntent, RuleIntent
from edge_nat.services.gateway_directory import GatewayDirectory
from edge_nat.services.interface_resolver import InterfaceResolverCache

logger = logging.getLogger(__name__)


class NatRuleCompiler:
    """
    Compiles one NAT service intent for one edge gateway.

    Usage:
        compiler = NatRuleCompiler(gateway_id, intent, directory, id_range)
        config = compiler.compile()

    The compiled document looks like:

        {
            "IsEnabled": "true",
            "NatRule": [
                {
                    "Id": "65537",
                    "IsEnabled": "true",
                    "RuleType": "DNAT",
                    "GatewayNatRule": {
                        "Interface": {...},
                        "OriginalIp": ..., "TranslatedIp": ...,
                        "OriginalPort": ..., "TranslatedPort": ..., "Protocol": "tcp",
                    },
                },
            ],
        }
    """

    def __init__(
        self,
        gateway_id: str,
        intent: Mapping[str, Any],
        directory: GatewayDirectory,
        id_range: IdRange,
    ):
        """
        Initialize the compiler.

        Args:
            gateway_id: Identity of the edge gateway
            intent: Service intent ({"enabled": ..., "nat_rules": [...]})
            directory: Gateway directory used to resolve rule interfaces
            id_range: NAT rule id range; auto-assigned ids start at its minimum
        """
        self.gateway_id = gateway_id
        self.intent = intent
        self.directory = directory
        self.id_range = id_range

    def compile(self) -> Dict[str, Any]:
        """
        Generate the NatService configuration.

        Returns:
            Compiled NAT service document with rules in input order

        Raises:
            NatCompilationError: On any invalid rule or unresolvable network;
                no partial document is returned
        """
        try:
            service = NatServiceIntent.model_validate(self.intent)
        except ValidationError as e:
            raise _invalid_field(None, e) from e

        resolver = InterfaceResolverCache(self.directory, self.gateway_id)
        next_ids = self._id_sequence()

        logger.info(f"Compiling {len(service.nat_rules)} NAT rules for gateway {self.gateway_id}")

        nat_rules: List[Dict[str, Any]] = []
        for index, raw_rule in enumerate(service.nat_rules):
            rule = self._parse_rule(index, raw_rule)
            if rule.id is not None:
                rule_id = rule.id
            else:
                rule_id = next(next_ids)
                if rule_id not in self.id_range:
                    raise IdRangeExhaustedError(index, rule_id, self.id_range.maximum)
                rule_id = str(rule_id)

            interface = resolver.resolve(rule.network_id, index=index)
            nat_rules.append({
                "Id": rule_id,
                "IsEnabled": rule.enabled,
                "RuleType": rule.rule_type,
                "GatewayNatRule": rule.gateway_nat_rule(interface),
            })

        logger.info(
            f"Compiled {len(nat_rules)} NAT rules for gateway {self.gateway_id} "
            f"({len(resolver)} networks resolved)"
        )
        return {
            "IsEnabled": service.enabled,
            "NatRule": nat_rules,
        }

    def _id_sequence(self) -> Iterator[int]:
        rule_id = self.id_range.minimum
        while True:
            yield rule_id
            rule_id += 1

    def _parse_rule(self, index: int, raw_rule: Mapping[str, Any]) -> RuleIntent:
        """Select the intent variant by rule_type and check its required fields."""
        rule_type = raw_rule.get("rule_type")
        if rule_type is None:
            raise MissingFieldError(index, "rule_type")

        intent_type = RULE_INTENT_TYPES.get(rule_type) if isinstance(rule_type, str) else None
        if intent_type is None:
            raise UnsupportedRuleTypeError(index, rule_type)

        for field in intent_type.required_fields():
            if raw_rule.get(field) is None:
                raise MissingFieldError(index, field)

        try:
            return intent_type.model_validate(raw_rule)
        except ValidationError as e:
            raise _invalid_field(index, e) from e


def _invalid_field(index: Optional[int], error: ValidationError) -> InvalidFieldError:
    first = error.errors()[0]
    loc = list(first["loc"])
    if not loc:
        # The intent itself is not a mapping
        return InvalidFieldError(index, "intent", first["msg"])
    if index is None and loc[0] == "nat_rules" and len(loc) > 1 and isinstance(loc[1], int):
        index = loc[1]
        loc = loc[2:] or ["nat_rules"]
    field = ".".join(str(part) for part in loc)
    return InvalidFieldError(index, field, first["msg"])


def compile_nat_service(
    gateway_id: str,
    intent: Mapping[str, Any],
    directory: GatewayDirectory,
    id_range: IdRange,
) -> Dict[str, Any]:
    """
    Convenience function to compile a NAT service intent.
    """
    return NatRuleCompiler(gateway_id, intent, directory, id_range).compile()
