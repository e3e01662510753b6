"""Static table mapping rule keywords to descriptor handlers.

Each handler receives the descriptor being built, the rule's parameters and
the parse context, and mutates the descriptor in place.
"""

import json
import string
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from faker import Faker

from .dates import format_example, parse_reference_date, render_format
from .descriptor import (
    TYPE_ARRAY,
    TYPE_BOOLEAN,
    TYPE_FILE,
    TYPE_INTEGER,
    TYPE_NUMBER,
    TYPE_STRING,
    FieldDescriptor,
)

ALPHA = list(string.ascii_lowercase) + list(string.ascii_uppercase)
DIGITS = list(string.digits)
IMAGE_EXTENSIONS = ["jpeg", "png", "gif", "bmp", "svg", "webp"]
CROCKFORD_BASE32 = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"


@dataclass
class RuleContext:
    """Shared state for one parse: example generator and reference time."""

    faker: Faker
    now: datetime


Handler = Callable[[FieldDescriptor, list[str], RuleContext], None]


@dataclass(frozen=True)
class RuleSpec:
    name: str
    handler: Handler
    arity: int = 0


REGISTRY: dict[str, RuleSpec] = {}


def rule(*names: str, arity: int = 0) -> Callable[[Handler], Handler]:
    """Register ``handler`` under each of ``names``."""

    def register(handler: Handler) -> Handler:
        for name in names:
            REGISTRY[name] = RuleSpec(name=name, handler=handler, arity=arity)
        return handler

    return register


def _number(value: str) -> int | float | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


# -- no schema effect ---------------------------------------------------------

def _noop(descriptor: FieldDescriptor, params: list[str], ctx: RuleContext) -> None:
    return None


rule("bail", "sometimes", "confirmed", "distinct", "current_password", "password", "exclude", "prohibited")(_noop)
rule("same", "different", "exists", "unique", "in_array", "not_in", "prohibits", arity=1)(_noop)
rule("exclude_if", "exclude_unless", "prohibited_if", "prohibited_unless", arity=2)(_noop)
rule("doesnt_start_with", "doesnt_end_with", "mimetypes", "dimensions", arity=1)(_noop)


@rule("nullable")
def parse_nullable(descriptor, params, ctx):
    descriptor.nullable = True


# -- presence -----------------------------------------------------------------

@rule("required", "present")
def parse_required(descriptor, params, ctx):
    descriptor.required = True


@rule("required_with", "required_with_all", "required_without", "required_without_all", arity=1)
def parse_required_with(descriptor, params, ctx):
    descriptor.required = True


@rule("required_if", "required_unless", arity=2)
def parse_required_if(descriptor, params, ctx):
    descriptor.required = True


@rule("accepted")
def parse_accepted(descriptor, params, ctx):
    descriptor.required = True
    descriptor.add_enum(["yes", "on", "1", 1, True, "true"])


@rule("accepted_if", arity=2)
def parse_accepted_if(descriptor, params, ctx):
    descriptor.add_enum(["yes", "on", "1", 1, True, "true"])


@rule("declined")
def parse_declined(descriptor, params, ctx):
    descriptor.required = True
    descriptor.add_enum(["no", "off", "0", 0, False, "false"])


@rule("declined_if", arity=2)
def parse_declined_if(descriptor, params, ctx):
    descriptor.add_enum(["no", "off", "0", 0, False, "false"])


@rule("filled")
def parse_filled(descriptor, params, ctx):
    if not descriptor.min or descriptor.min < 1:
        descriptor.min = 1


# -- types --------------------------------------------------------------------

@rule("string")
def parse_string(descriptor, params, ctx):
    descriptor.type = TYPE_STRING


@rule("integer")
def parse_integer(descriptor, params, ctx):
    descriptor.type = TYPE_INTEGER


@rule("numeric")
def parse_numeric(descriptor, params, ctx):
    descriptor.type = TYPE_NUMBER


@rule("decimal", arity=1)
def parse_decimal(descriptor, params, ctx):
    descriptor.type = TYPE_NUMBER


@rule("boolean")
def parse_boolean(descriptor, params, ctx):
    descriptor.type = TYPE_BOOLEAN
    descriptor.add_enum([True, False, 0, 1, "0", "1"])


@rule("array")
def parse_array(descriptor, params, ctx):
    descriptor.type = TYPE_ARRAY


@rule("file")
def parse_file(descriptor, params, ctx):
    descriptor.type = TYPE_FILE


@rule("image")
def parse_image(descriptor, params, ctx):
    descriptor.type = TYPE_FILE
    descriptor.add_file_extensions(IMAGE_EXTENSIONS)


@rule("mimes", "extensions", arity=1)
def parse_mimes(descriptor, params, ctx):
    descriptor.type = TYPE_FILE
    descriptor.add_file_extensions([p.lower().lstrip(".") for p in params])


@rule("json")
def parse_json(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.example = json.dumps({"name": ctx.faker.name()})


@rule("date")
def parse_date(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.format = "date-time"


@rule("timezone")
def parse_timezone(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.example = ctx.faker.timezone()


@rule("email")
def parse_email(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.format = "email"
    descriptor.example = ctx.faker.safe_email()


@rule("url", "active_url")
def parse_url(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.format = "uri"
    descriptor.example = ctx.faker.url()


@rule("uuid")
def parse_uuid(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.format = "uuid"
    descriptor.example = ctx.faker.uuid4()


@rule("ulid")
def parse_ulid(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.example = ctx.faker.pystr_format("0" + "?" * 25, letters=CROCKFORD_BASE32)


@rule("ip", "ipv4")
def parse_ipv4(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.format = "ipv4"
    descriptor.example = ctx.faker.ipv4()


@rule("ipv6")
def parse_ipv6(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.format = "ipv6"
    descriptor.example = ctx.faker.ipv6()


@rule("mac_address")
def parse_mac_address(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.example = ctx.faker.mac_address()


@rule("hex_color")
def parse_hex_color(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.example = ctx.faker.hex_color()


@rule("lowercase")
def parse_lowercase(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.pattern = "^[^A-Z]*$"


@rule("uppercase")
def parse_uppercase(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.pattern = "^[^a-z]*$"


@rule("ascii")
def parse_ascii(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.pattern = "^[\\x00-\\x7F]*$"


# -- character sets -----------------------------------------------------------

@rule("alpha")
def parse_alpha(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.add_valid_characters(ALPHA)


@rule("alpha_num")
def parse_alpha_num(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.add_valid_characters(ALPHA + DIGITS)


@rule("alpha_dash")
def parse_alpha_dash(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.add_valid_characters(ALPHA + DIGITS + ["_", "-"])


# -- bounds -------------------------------------------------------------------

@rule("size", arity=1)
def parse_size(descriptor, params, ctx):
    value = _number(params[0])
    if value is not None:
        descriptor.min = descriptor.max = value


@rule("between", arity=2)
def parse_between(descriptor, params, ctx):
    low, high = _number(params[0]), _number(params[1])
    if low is not None:
        descriptor.min = low
        descriptor.exclusive_min = False
    if high is not None:
        descriptor.max = high
        descriptor.exclusive_max = False


@rule("min", "gte", arity=1)
def parse_min(descriptor, params, ctx):
    value = _number(params[0])
    if value is not None:
        descriptor.min = value
        descriptor.exclusive_min = False


@rule("max", "lte", arity=1)
def parse_max(descriptor, params, ctx):
    value = _number(params[0])
    if value is not None:
        descriptor.max = value
        descriptor.exclusive_max = False


@rule("gt", arity=1)
def parse_gt(descriptor, params, ctx):
    value = _number(params[0])
    if value is not None:
        descriptor.min = value
        descriptor.exclusive_min = True


@rule("lt", arity=1)
def parse_lt(descriptor, params, ctx):
    value = _number(params[0])
    if value is not None:
        descriptor.max = value
        descriptor.exclusive_max = True


@rule("multiple_of", arity=1)
def parse_multiple_of(descriptor, params, ctx):
    if descriptor.type not in (TYPE_INTEGER, TYPE_NUMBER):
        descriptor.type = TYPE_NUMBER


def _smallest_with_digits(length: int) -> int:
    return 10 ** (length - 1) if length > 1 else 0


def _largest_with_digits(length: int) -> int:
    return 10**length - 1


@rule("digits", arity=1)
def parse_digits(descriptor, params, ctx):
    descriptor.type = TYPE_INTEGER
    length = _number(params[0])
    if length is not None:
        descriptor.min = _smallest_with_digits(int(length))
        descriptor.max = _largest_with_digits(int(length))


@rule("digits_between", arity=2)
def parse_digits_between(descriptor, params, ctx):
    descriptor.type = TYPE_INTEGER
    low, high = _number(params[0]), _number(params[1])
    if low is not None:
        descriptor.min = _smallest_with_digits(int(low))
    if high is not None:
        descriptor.max = _largest_with_digits(int(high))


@rule("min_digits", arity=1)
def parse_min_digits(descriptor, params, ctx):
    descriptor.type = TYPE_INTEGER
    length = _number(params[0])
    if length is not None:
        descriptor.min = _smallest_with_digits(int(length))


@rule("max_digits", arity=1)
def parse_max_digits(descriptor, params, ctx):
    descriptor.type = TYPE_INTEGER
    length = _number(params[0])
    if length is not None:
        descriptor.max = _largest_with_digits(int(length))


# -- sets and strings ---------------------------------------------------------

@rule("in")
def parse_in(descriptor, params, ctx):
    descriptor.add_enum(params)


@rule("starts_with", arity=1)
def parse_starts_with(descriptor, params, ctx):
    descriptor.starts_with = params[0]


@rule("ends_with", arity=1)
def parse_ends_with(descriptor, params, ctx):
    descriptor.ends_with = params[0]


@rule("regex", arity=1)
def parse_regex(descriptor, params, ctx):
    descriptor.type = descriptor.type or TYPE_STRING
    descriptor.pattern = _strip_delimiters(params[0])


@rule("not_regex", arity=1)
def parse_not_regex(descriptor, params, ctx):
    descriptor.type = descriptor.type or TYPE_STRING


def _strip_delimiters(pattern: str) -> str:
    """``/^[a-z]+$/i`` -> ``^[a-z]+$``"""
    if len(pattern) >= 2 and pattern[0] in "/#~":
        end = pattern.rfind(pattern[0])
        if end > 0:
            return pattern[1:end]
    return pattern


# -- dates --------------------------------------------------------------------

def _date_rule(offset: timedelta) -> Handler:
    def handler(descriptor: FieldDescriptor, params: list[str], ctx: RuleContext) -> None:
        descriptor.type = TYPE_STRING
        reference = parse_reference_date(params[0], ctx.now)
        if reference is not None:
            descriptor.example = format_example(reference + offset)

    return handler


rule("after", arity=1)(_date_rule(timedelta(days=1)))
rule("before", arity=1)(_date_rule(timedelta(days=-1)))
rule("after_or_equal", "before_or_equal", "date_equals", arity=1)(_date_rule(timedelta(0)))


@rule("date_format", arity=1)
def parse_date_format(descriptor, params, ctx):
    descriptor.type = TYPE_STRING
    descriptor.example = render_format(params[0], ctx.now)
