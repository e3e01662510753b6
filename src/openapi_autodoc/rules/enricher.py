"""Fill descriptor attributes the rules left empty."""

from faker import Faker

from .descriptor import (
    TYPE_ARRAY,
    TYPE_BOOLEAN,
    TYPE_FILE,
    TYPE_INTEGER,
    TYPE_NUMBER,
    TYPE_OBJECT,
    FieldDescriptor,
)

# Attributes that may be guessed when no rule set them.
GUESSABLE = ("example",)

DEFAULT_STRING_LENGTH = 8


class DescriptorEnricher:
    """Guesses blanks from the descriptor's type and rule hints.

    Only attributes that are still ``None`` are filled, so enriching twice
    changes nothing.
    """

    def __init__(self, faker: Faker | None = None):
        self.faker = faker or Faker()

    def enrich(self, descriptor: FieldDescriptor) -> FieldDescriptor:
        for attribute in GUESSABLE:
            if getattr(descriptor, attribute) is None:
                guess = getattr(self, f"guess_{attribute}")
                setattr(descriptor, attribute, guess(descriptor))
        return descriptor

    def guess_example(self, d: FieldDescriptor):
        if d.enum:
            return d.enum[0]

        field_type = d.resolved_type()
        if field_type == TYPE_BOOLEAN:
            return True
        if field_type in (TYPE_INTEGER, TYPE_NUMBER):
            return self._number_example(d, field_type)
        if field_type == TYPE_ARRAY:
            return []
        if field_type == TYPE_OBJECT:
            return {}
        if field_type == TYPE_FILE:
            extension = d.file_extensions[0] if d.file_extensions else "txt"
            return self.faker.file_name(extension=extension)
        return self._string_example(d)

    def _number_example(self, d: FieldDescriptor, field_type: str):
        low = d.min if d.min is not None else 0
        high = d.max if d.max is not None else max(low, 0) + 100
        if d.exclusive_min:
            low = low + 1
        if d.exclusive_max:
            high = high - 1
        if high < low:
            high = low
        if field_type == TYPE_INTEGER:
            return self.faker.random_int(min=int(low), max=int(high))
        return round(self.faker.pyfloat(min_value=low, max_value=high), 2) if high > low else float(low)

    def _string_example(self, d: FieldDescriptor) -> str:
        prefix = d.starts_with or ""
        suffix = d.ends_with or ""
        length = DEFAULT_STRING_LENGTH
        if d.min is not None:
            length = max(length, int(d.min))
        if d.max is not None:
            length = min(length, int(d.max))
        length = max(length - len(prefix) - len(suffix), 0)

        if d.valid_characters and length:
            body = "".join(self.faker.random_elements(d.valid_characters, length=length))
        else:
            body = self.faker.pystr(min_chars=length, max_chars=length) if length else ""
        required = [c for c in d.required_characters if c not in body]
        if required:
            body = "".join(required) + body[len(required):]
        return f"{prefix}{body}{suffix}"
