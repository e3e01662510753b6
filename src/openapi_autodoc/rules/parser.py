"""Turn one field's validation rules into a FieldDescriptor.

Rules may be pipe strings (``"required|string|max:255"``), lists of
tokens, ``(name, params)`` pairs, or rule objects. Rule objects that
implement ``Parsable`` document themselves; any other object is skipped
with a warning.
"""

import re
from datetime import datetime
from typing import Any, Iterable, Mapping

import structlog
from faker import Faker

from openapi_autodoc.errors import RuleArityError, UnknownRuleError

from .contracts import Parsable
from .descriptor import FieldDescriptor
from .messages import message_for
from .registry import REGISTRY, RuleContext

logger = structlog.get_logger()

# Shown through the schema's "required" list rather than in raw_rules.
INTEGRATED_RULES = {"required"}

# Rules whose single parameter may legitimately contain commas.
UNSPLIT_PARAM_RULES = {"regex", "not_regex"}


def normalize_rule_name(name: str) -> str:
    """``RequiredIf`` / ``required-if`` / ``required_if`` -> ``required_if``"""
    name = name.strip().replace("-", "_")
    name = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name)
    return name.lower()


def split_rule(token: str) -> tuple[str, list[str]]:
    """``"between:1,10"`` -> ``("between", ["1", "10"])``"""
    name, sep, raw = token.partition(":")
    name = normalize_rule_name(name)
    if not sep:
        return name, []
    if name in UNSPLIT_PARAM_RULES:
        return name, [raw]
    return name, [p.strip() for p in raw.split(",")]


class RuleParser:
    """Parses rule lists into descriptors using the static rule registry."""

    def __init__(
        self,
        faker: Faker | None = None,
        custom_messages: Mapping[tuple[str, str], str] | None = None,
        now: datetime | None = None,
    ):
        self.faker = faker or Faker()
        self.custom_messages = dict(custom_messages or {})
        self.now = now

    def parse(self, field_name: str, rules: Any) -> FieldDescriptor:
        """Build the descriptor for ``field_name`` from ``rules``."""
        descriptor = FieldDescriptor(name=field_name)
        ctx = RuleContext(faker=self.faker, now=self.now or datetime.now().replace(microsecond=0))
        for rule in _flatten(rules):
            self._parse_rule(descriptor, rule, ctx)
        return descriptor

    def _parse_rule(self, descriptor: FieldDescriptor, raw: Any, ctx: RuleContext) -> None:
        if isinstance(raw, str):
            if not raw.strip():
                return
            name, params = split_rule(raw)
        elif isinstance(raw, tuple):
            name, params = normalize_rule_name(str(raw[0])), [str(p) for p in _params(raw[1:])]
        elif isinstance(raw, Parsable):
            raw.parse(descriptor)
            descriptor.raw_rules = [*descriptor.raw_rules, raw]
            return
        else:
            logger.warning(
                "Rule object does not implement parse() and will not be documented",
                field=descriptor.name,
                rule=type(raw).__qualname__,
            )
            return

        spec = REGISTRY.get(name)
        if spec is None:
            raise UnknownRuleError(name, descriptor.name)
        if len(params) < spec.arity:
            raise RuleArityError(name, spec.arity, descriptor.name)

        # Size messages depend on the type resolved by earlier rules.
        message = message_for(descriptor.name, name, params, descriptor.type, self.custom_messages)
        spec.handler(descriptor, params, ctx)

        if message is not None:
            descriptor.messages = [*descriptor.messages, message]
        if name not in INTEGRATED_RULES:
            descriptor.raw_rules = [*descriptor.raw_rules, _display(name, params)]


def _flatten(rules: Any) -> Iterable[Any]:
    if rules is None:
        return
    if isinstance(rules, str):
        yield from _split_pipes(rules)
    elif isinstance(rules, list):
        for rule in rules:
            yield from _flatten(rule)
    else:
        yield rules


def _split_pipes(text: str) -> Iterable[str]:
    """``"required|regex:/^(a|b)$/"`` -> ``"required"``, ``"regex:/^(a|b)$/"``

    Once the leading token is a regex rule, the rest of the string is its
    parameter.
    """
    name = text.partition(":")[0]
    if "|" in text and ("|" in name or normalize_rule_name(name) not in UNSPLIT_PARAM_RULES):
        head, _, rest = text.partition("|")
        yield head
        yield from _split_pipes(rest)
    else:
        yield text


def _params(values: tuple) -> list[Any]:
    # ("between", 1, 10) and ("between", [1, 10]) are both accepted.
    if len(values) == 1 and isinstance(values[0], (list, tuple)):
        return list(values[0])
    return list(values)


def _display(name: str, params: list[str]) -> str:
    return f"{name}:{','.join(params)}" if params else name
