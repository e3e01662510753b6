"""Human readable rule descriptions used as schema documentation."""

from typing import Mapping

from .descriptor import NUMERIC_TYPES, TYPE_ARRAY, TYPE_FILE

SIZE_RULES = {"size", "between", "min", "max", "gt", "lt", "gte", "lte"}

MESSAGES: dict[str, str] = {
    "accepted": "The :attribute must be accepted.",
    "accepted_if": "The :attribute must be accepted when :other is :value.",
    "active_url": "The :attribute must be a valid URL.",
    "after": "The :attribute must be a date after :date.",
    "after_or_equal": "The :attribute must be a date after or equal to :date.",
    "alpha": "The :attribute must only contain letters.",
    "alpha_dash": "The :attribute must only contain letters, numbers, dashes and underscores.",
    "alpha_num": "The :attribute must only contain letters and numbers.",
    "array": "The :attribute must be an array.",
    "ascii": "The :attribute must only contain single-byte alphanumeric characters and symbols.",
    "before": "The :attribute must be a date before :date.",
    "before_or_equal": "The :attribute must be a date before or equal to :date.",
    "boolean": "The :attribute field must be true or false.",
    "confirmed": "The :attribute confirmation does not match.",
    "current_password": "The password is incorrect.",
    "date": "The :attribute is not a valid date.",
    "date_equals": "The :attribute must be a date equal to :date.",
    "date_format": "The :attribute does not match the format :format.",
    "decimal": "The :attribute must have :decimal decimal places.",
    "declined": "The :attribute must be declined.",
    "declined_if": "The :attribute must be declined when :other is :value.",
    "different": "The :attribute and :other must be different.",
    "digits": "The :attribute must be :digits digits.",
    "digits_between": "The :attribute must be between :min and :max digits.",
    "dimensions": "The :attribute has invalid image dimensions.",
    "distinct": "The :attribute field has a duplicate value.",
    "doesnt_end_with": "The :attribute may not end with one of the following: :values.",
    "doesnt_start_with": "The :attribute may not start with one of the following: :values.",
    "email": "The :attribute must be a valid email address.",
    "ends_with": "The :attribute must end with one of the following: :values.",
    "exists": "The selected :attribute is invalid.",
    "extensions": "The :attribute must have one of the following extensions: :values.",
    "file": "The :attribute must be a file.",
    "filled": "The :attribute field must have a value.",
    "hex_color": "The :attribute must be a valid hexadecimal color.",
    "image": "The :attribute must be an image.",
    "in": "The selected :attribute is invalid.",
    "in_array": "The :attribute field does not exist in :other.",
    "integer": "The :attribute must be an integer.",
    "ip": "The :attribute must be a valid IP address.",
    "ipv4": "The :attribute must be a valid IPv4 address.",
    "ipv6": "The :attribute must be a valid IPv6 address.",
    "json": "The :attribute must be a valid JSON string.",
    "lowercase": "The :attribute must be lowercase.",
    "mac_address": "The :attribute must be a valid MAC address.",
    "max_digits": "The :attribute must not have more than :max digits.",
    "mimes": "The :attribute must be a file of type: :values.",
    "mimetypes": "The :attribute must be a file of type: :values.",
    "min_digits": "The :attribute must have at least :min digits.",
    "multiple_of": "The :attribute must be a multiple of :value.",
    "not_in": "The selected :attribute is invalid.",
    "not_regex": "The :attribute format is invalid.",
    "numeric": "The :attribute must be a number.",
    "password": "The password is incorrect.",
    "present": "The :attribute field must be present.",
    "prohibited": "The :attribute field is prohibited.",
    "prohibited_if": "The :attribute field is prohibited when :other is :value.",
    "prohibited_unless": "The :attribute field is prohibited unless :other is in :values.",
    "prohibits": "The :attribute field prohibits :other from being present.",
    "regex": "The :attribute format is invalid.",
    "required": "The :attribute field is required.",
    "required_if": "The :attribute field is required when :other is :value.",
    "required_unless": "The :attribute field is required unless :other is in :values.",
    "required_with": "The :attribute field is required when :values is present.",
    "required_with_all": "The :attribute field is required when :values are present.",
    "required_without": "The :attribute field is required when :values is not present.",
    "required_without_all": "The :attribute field is required when none of :values are present.",
    "same": "The :attribute and :other must match.",
    "starts_with": "The :attribute must start with one of the following: :values.",
    "string": "The :attribute must be a string.",
    "timezone": "The :attribute must be a valid timezone.",
    "ulid": "The :attribute must be a valid ULID.",
    "unique": "The :attribute has already been taken.",
    "uppercase": "The :attribute must be uppercase.",
    "url": "The :attribute must be a valid URL.",
    "uuid": "The :attribute must be a valid UUID.",
}

SIZE_MESSAGES: dict[str, dict[str, str]] = {
    "between": {
        "numeric": "The :attribute must be between :min and :max.",
        "file": "The :attribute must be between :min and :max kilobytes.",
        "string": "The :attribute must be between :min and :max characters.",
        "array": "The :attribute must have between :min and :max items.",
    },
    "gt": {
        "numeric": "The :attribute must be greater than :value.",
        "file": "The :attribute must be greater than :value kilobytes.",
        "string": "The :attribute must be greater than :value characters.",
        "array": "The :attribute must have more than :value items.",
    },
    "gte": {
        "numeric": "The :attribute must be greater than or equal to :value.",
        "file": "The :attribute must be greater than or equal to :value kilobytes.",
        "string": "The :attribute must be greater than or equal to :value characters.",
        "array": "The :attribute must have :value items or more.",
    },
    "lt": {
        "numeric": "The :attribute must be less than :value.",
        "file": "The :attribute must be less than :value kilobytes.",
        "string": "The :attribute must be less than :value characters.",
        "array": "The :attribute must have less than :value items.",
    },
    "lte": {
        "numeric": "The :attribute must be less than or equal to :value.",
        "file": "The :attribute must be less than or equal to :value kilobytes.",
        "string": "The :attribute must be less than or equal to :value characters.",
        "array": "The :attribute must not have more than :value items.",
    },
    "max": {
        "numeric": "The :attribute must not be greater than :max.",
        "file": "The :attribute must not be greater than :max kilobytes.",
        "string": "The :attribute must not be greater than :max characters.",
        "array": "The :attribute must not have more than :max items.",
    },
    "min": {
        "numeric": "The :attribute must be at least :min.",
        "file": "The :attribute must be at least :min kilobytes.",
        "string": "The :attribute must be at least :min characters.",
        "array": "The :attribute must have at least :min items.",
    },
    "size": {
        "numeric": "The :attribute must be :size.",
        "file": "The :attribute must be :size kilobytes.",
        "string": "The :attribute must be :size characters.",
        "array": "The :attribute must contain :size items.",
    },
}


def size_category(field_type: str | None) -> str:
    """Map a descriptor type to the size message family."""
    if field_type in NUMERIC_TYPES:
        return "numeric"
    if field_type == TYPE_FILE:
        return "file"
    if field_type == TYPE_ARRAY:
        return "array"
    return "string"


def attribute_label(name: str) -> str:
    """``first_name`` -> ``first name``, ``address.city`` -> ``address city``."""
    label = name.replace("_", " ").replace(".*", "").replace(".", " ")
    return " ".join(label.split())


def message_for(
    field: str,
    rule: str,
    params: list[str],
    field_type: str | None,
    custom_messages: Mapping[tuple[str, str], str] | None = None,
) -> str | None:
    """Build the description for one rule, or None when the rule has none."""
    template = None
    if custom_messages:
        template = custom_messages.get((field, rule))
    if template is None and rule in SIZE_RULES:
        template = SIZE_MESSAGES[rule][size_category(field_type)]
    if template is None:
        template = MESSAGES.get(rule)
    if template is None:
        return None
    return _replace(template, field, rule, params)


def _replace(template: str, field: str, rule: str, params: list[str]) -> str:
    replacements = {":attribute": attribute_label(field)}
    first = params[0] if params else ""
    replacements[":values"] = ", ".join(str(p) for p in params)

    if rule in ("between", "digits_between"):
        replacements[":min"] = first
        replacements[":max"] = params[1] if len(params) > 1 else ""
    elif rule in ("min", "min_digits"):
        replacements[":min"] = first
    elif rule in ("max", "max_digits"):
        replacements[":max"] = first
    elif rule == "size":
        replacements[":size"] = first
    elif rule == "digits":
        replacements[":digits"] = first
    elif rule == "decimal":
        replacements[":decimal"] = "-".join(params[:2])
    elif rule == "date_format":
        replacements[":format"] = first
    elif rule in ("after", "after_or_equal", "before", "before_or_equal", "date_equals"):
        replacements[":date"] = first
    elif rule in ("gt", "gte", "lt", "lte", "multiple_of"):
        replacements[":value"] = first
    elif rule in ("same", "different", "in_array", "prohibits"):
        replacements[":other"] = attribute_label(first.removesuffix(".*")) if first else ""
        replacements[":values"] = ", ".join(attribute_label(p) for p in params)
    elif rule in ("required_with", "required_with_all", "required_without", "required_without_all"):
        replacements[":values"] = " / ".join(attribute_label(p) for p in params)
    elif rule in ("accepted_if", "declined_if", "required_if", "prohibited_if"):
        replacements[":other"] = attribute_label(first)
        replacements[":value"] = params[1] if len(params) > 1 else ""
    elif rule in ("required_unless", "prohibited_unless"):
        replacements[":other"] = attribute_label(first)
        replacements[":values"] = ", ".join(params[1:])
    elif rule == "confirmed":
        replacements[":other"] = attribute_label(f"{field}_confirmation")

    message = template
    # Longest placeholders first so ":values" is not clobbered by ":value".
    for placeholder in sorted(replacements, key=len, reverse=True):
        message = message.replace(placeholder, str(replacements[placeholder]))
    return message
