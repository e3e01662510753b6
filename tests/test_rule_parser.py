import pytest
from structlog.testing import capture_logs

from openapi_autodoc.errors import RuleArityError, UnknownRuleError
from openapi_autodoc.rules.descriptor import FieldDescriptor
from openapi_autodoc.rules.parser import RuleParser, normalize_rule_name, split_rule
from openapi_autodoc.rules.registry import REGISTRY


class TestSplitRule:
    def test_plain_rule(self):
        assert split_rule("required") == ("required", [])

    def test_rule_with_params(self):
        assert split_rule("between:1,10") == ("between", ["1", "10"])

    def test_regex_keeps_commas(self):
        assert split_rule("regex:/^[a-z]{2,4}$/") == ("regex", ["/^[a-z]{2,4}$/"])

    def test_normalizes_studly_names(self):
        assert normalize_rule_name("RequiredIf") == "required_if"
        assert normalize_rule_name("required-with") == "required_with"


class TestRegistry:
    def test_has_the_full_keyword_table(self):
        assert len(REGISTRY) >= 60

    @pytest.mark.parametrize("rule", ["bail", "sometimes", "nullable"])
    def test_no_op_rules_are_known(self, parser, rule):
        d = parser.parse("name", rule)
        assert d.type is None
        assert d.required is False


class TestParse:
    def test_required_string_max(self, parser):
        d = parser.parse("title", "required|string|max:255")
        assert d.type == "string"
        assert d.required is True
        assert d.max == 255

    def test_list_of_tokens(self, parser):
        d = parser.parse("title", ["required", "string", "min:3"])
        assert (d.type, d.required, d.min) == ("string", True, 3)

    def test_pipe_strings_inside_list_are_expanded(self, parser):
        d = parser.parse("title", ["required|string", "max:20"])
        assert d.required is True
        assert d.max == 20

    def test_structured_pairs(self, parser):
        d = parser.parse("age", [("integer",), ("between", ["18", "99"])])
        assert d.type == "integer"
        assert (d.min, d.max) == (18, 99)

    def test_scalar_last_write_wins(self, parser):
        assert parser.parse("n", "max:5|max:10").max == 10
        assert parser.parse("n", "string|integer").type == "integer"

    def test_enum_accumulates(self, parser):
        d = parser.parse("status", "in:a,b|in:c")
        assert d.enum == ["a", "b", "c"]

    def test_enum_union_keeps_distinct_literals(self, parser):
        d = parser.parse("flag", "boolean|in:yes")
        assert d.enum == [True, False, 0, 1, "0", "1", "yes"]

    def test_required_is_monotonic(self, parser):
        assert parser.parse("n", "required|nullable|sometimes").required is True

    def test_no_type_rule_leaves_type_absent(self, parser):
        d = parser.parse("n", "max:3")
        assert d.type is None
        assert d.resolved_type() == "string"

    def test_nullable_flag(self, parser):
        assert parser.parse("n", "nullable|string").nullable is True

    def test_between_sets_both_bounds(self, parser):
        d = parser.parse("n", "numeric|between:1.5,9")
        assert (d.min, d.max) == (1.5, 9)

    def test_gt_is_exclusive(self, parser):
        d = parser.parse("n", "integer|gt:0|lte:10")
        assert d.min == 0 and d.exclusive_min is True
        assert d.max == 10 and d.exclusive_max is False

    def test_gt_against_another_field_sets_no_bound(self, parser):
        d = parser.parse("end", "integer|gt:start")
        assert d.min is None
        assert d.messages == ["The end must be an integer.", "The end must be greater than start."]

    def test_digits(self, parser):
        d = parser.parse("pin", "digits:4")
        assert d.type == "integer"
        assert (d.min, d.max) == (1000, 9999)

    def test_alpha_family_unions_characters(self, parser):
        d = parser.parse("slug", "alpha|alpha_dash")
        assert d.type == "string"
        assert "a" in d.valid_characters and "-" in d.valid_characters
        assert len(d.valid_characters) == len(set(d.valid_characters))

    def test_image_is_file_with_extensions(self, parser):
        d = parser.parse("avatar", "image|mimes:tiff")
        assert d.type == "file"
        assert "png" in d.file_extensions
        assert d.file_extensions[-1] == "tiff"

    def test_regex_sets_pattern(self, parser):
        d = parser.parse("code", "regex:/^[A-Z]{3}$/")
        assert d.pattern == "^[A-Z]{3}$"

    def test_regex_alternation_in_list_form(self, parser):
        d = parser.parse("code", ["required", "regex:/^(foo|bar)$/"])
        assert d.required is True
        assert d.pattern == "^(foo|bar)$"
        assert d.raw_rules == ["regex:/^(foo|bar)$/"]

    def test_regex_alternation_ends_a_pipe_string(self, parser):
        d = parser.parse("code", "required|string|regex:/^(foo|bar)$/")
        assert (d.required, d.type, d.pattern) == (True, "string", "^(foo|bar)$")

    def test_starts_and_ends_with(self, parser):
        d = parser.parse("ref", "starts_with:INV-|ends_with:-X")
        assert (d.starts_with, d.ends_with) == ("INV-", "-X")

    def test_accepted_implies_required(self, parser):
        d = parser.parse("terms", "accepted")
        assert d.required is True
        assert "yes" in d.enum

    def test_raw_rules_exclude_required(self, parser):
        d = parser.parse("title", "required|string|max:255")
        assert d.raw_rules == ["string", "max:255"]


class TestExamples:
    def test_email_example(self, parser):
        d = parser.parse("email", ["required", "email"])
        assert d.type == "string"
        assert "@" in d.example

    def test_url_and_uuid(self, parser):
        assert parser.parse("site", "url").example.startswith("http")
        assert len(parser.parse("id", "uuid").example) == 36

    def test_ip_example(self, parser):
        assert parser.parse("ip", "ip").example.count(".") == 3

    def test_after_is_the_next_day(self, parser):
        assert parser.parse("starts", "after:2024-01-01").example == "2024-01-02 00:00:00"

    def test_before_is_the_previous_day(self, parser):
        assert parser.parse("ends", "before:2024-01-01").example == "2023-12-31 00:00:00"

    def test_relative_reference_date(self, parser):
        assert parser.parse("starts", "after_or_equal:today").example == "2024-03-15 00:00:00"

    def test_reference_to_another_field_has_no_example(self, parser):
        d = parser.parse("ends", "date|after:starts")
        assert d.type == "string"
        assert d.example is None

    def test_date_format(self, parser):
        assert parser.parse("day", "date_format:Y-m-d").example == "2024-03-15"


class TestErrors:
    def test_unknown_rule_names_rule_and_field(self, parser):
        with pytest.raises(UnknownRuleError) as exc:
            parser.parse("name", "required|frobnicate")
        assert exc.value.rule == "frobnicate"
        assert exc.value.field == "name"
        assert "frobnicate" in str(exc.value) and "name" in str(exc.value)

    def test_arity_error(self, parser):
        with pytest.raises(RuleArityError) as exc:
            parser.parse("age", "between:1")
        assert exc.value.rule == "between"
        assert exc.value.count == 2

    def test_missing_parameter(self, parser):
        with pytest.raises(RuleArityError):
            parser.parse("age", "max")


class TestCustomRules:
    def test_parsable_rule_is_invoked(self, parser):
        class Uppercase:
            def parse(self, descriptor: FieldDescriptor) -> None:
                descriptor.type = "string"
                descriptor.pattern = "^[A-Z]+$"

        rule = Uppercase()
        d = parser.parse("code", ["required", rule])
        assert d.pattern == "^[A-Z]+$"
        assert d.required is True
        assert rule in d.raw_rules

    def test_non_parsable_rule_is_skipped_with_warning(self, parser):
        class Opaque:
            def passes(self, value) -> bool:
                return True

        with capture_logs() as logs:
            d = parser.parse("code", ["string", Opaque()])

        assert d.type == "string"
        assert any(log["log_level"] == "warning" and log["field"] == "code" for log in logs)


class TestMessages:
    def test_messages_follow_rule_order(self, parser):
        d = parser.parse("first_name", "required|string")
        assert d.messages == [
            "The first name field is required.",
            "The first name must be a string.",
        ]

    def test_size_message_uses_type_from_prior_rules(self, parser):
        assert parser.parse("n", "string|max:5").messages[-1] == "The n must not be greater than 5 characters."
        assert parser.parse("n", "integer|max:5").messages[-1] == "The n must not be greater than 5."
        assert parser.parse("n", "array|max:5").messages[-1] == "The n must not have more than 5 items."
        assert parser.parse("n", "file|max:5").messages[-1] == "The n must not be greater than 5 kilobytes."

    def test_size_message_defaults_to_string(self, parser):
        assert parser.parse("n", "max:5|integer").messages[0] == "The n must not be greater than 5 characters."

    def test_values_placeholder(self, parser):
        assert parser.parse("ref", "starts_with:a,b").messages == [
            "The ref must start with one of the following: a, b."
        ]

    def test_custom_message_override(self, faker):
        parser = RuleParser(faker=faker, custom_messages={("email", "required"): "We need your :attribute!"})
        d = parser.parse("email", "required|email")
        assert d.messages[0] == "We need your email!"
        assert d.messages[1] == "The email must be a valid email address."

    def test_no_op_rules_add_no_message(self, parser):
        assert parser.parse("n", "bail|sometimes").messages == []
