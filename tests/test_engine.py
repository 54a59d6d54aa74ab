import unittest
from typing import Annotated, Any

from rulekit.constraints import Rules
from rulekit.engine import ValidationEngine
from rulekit.errors import RuleConstructionError
from rulekit.metrics import PrometheusMetrics
from rulekit.rules import ValidationRule


class RejectAllRule(ValidationRule):
    error_message = "Rejected."

    def passes(self, value: Any) -> bool:
        return False


class EvenRule(ValidationRule):
    error_message = "The value must be even."

    def passes(self, value: Any) -> bool:
        return isinstance(value, int) and value % 2 == 0


class Account:
    email: Annotated[str, Rules("required|email")] = "not-an-email"
    handle: Annotated[str, Rules("required|minLength:3")] = "octocat"


class TestValidationEngine(unittest.TestCase):
    def setUp(self):
        self.engine = ValidationEngine()

    def test_between_passes_inside_range(self):
        self.assertTrue(self.engine.validate(5, "between:1:10"))
        self.assertEqual(self.engine.get_errors(), {})

    def test_between_fails_on_boundary(self):
        self.assertFalse(self.engine.validate(1, "between:1:10"))
        self.assertEqual(list(self.engine.get_errors()), ["between"])

    def test_alpha_rejects_digits(self):
        self.assertFalse(self.engine.validate("a1", "alpha"))
        self.assertIn("alpha", self.engine.get_errors())

    def test_empty_string_against_required_string_min_length(self):
        self.assertFalse(self.engine.validate("", "required|string|minLength:3"))
        self.assertEqual(list(self.engine.get_errors()), ["required", "minLength"])

    def test_messages_come_from_the_rules(self):
        self.engine.validate("", "required|minLength:3")
        errors = self.engine.get_errors()
        self.assertEqual(errors["required"], "The value is required.")
        self.assertEqual(errors["minLength"], "The value must be at least 3 characters long.")

    def test_unknown_rule_is_skipped(self):
        self.assertTrue(self.engine.validate("anything", "bogusRule:x"))
        self.assertNotIn("bogusRule", self.engine.get_errors())
        self.assertEqual(self.engine.last_result.unresolved, ["bogusRule"])

    def test_unknown_rule_does_not_mask_real_failures(self):
        self.assertFalse(self.engine.validate("", "bogusRule|required"))
        self.assertEqual(list(self.engine.get_errors()), ["required"])

    def test_empty_spec_passes(self):
        self.assertTrue(self.engine.validate(None, ""))
        self.assertEqual(self.engine.last_result.spec, ())

    def test_errors_accumulate_across_calls(self):
        self.assertFalse(self.engine.validate(None, "required"))
        self.assertFalse(self.engine.validate("abc", "string"))
        self.assertIn("required", self.engine.get_errors())
        self.assertTrue(self.engine.fails())

        self.engine.clear_errors()
        self.assertTrue(self.engine.passes())
        self.assertTrue(self.engine.validate("abc", "string"))

    def test_later_failure_overwrites_same_rule_name(self):
        self.engine.validate(50, "max:10")
        self.engine.validate(50, "max:20")
        self.assertEqual(self.engine.get_errors(), {"max": "The value must not be greater than 20."})

    def test_accumulate_disabled_resets_before_each_call(self):
        engine = ValidationEngine(accumulate=False)
        self.assertFalse(engine.validate(None, "required"))
        self.assertTrue(engine.validate("abc", "string"))
        self.assertEqual(engine.get_errors(), {})

    def test_check_leaves_error_map_untouched(self):
        result = self.engine.check("", "required|string|minLength:3")
        self.assertFalse(result.passed)
        self.assertEqual(list(result.errors), ["required", "minLength"])
        self.assertEqual(result.failed_rules, ["required", "minLength"])
        self.assertTrue(self.engine.passes())

    def test_get_errors_returns_a_copy(self):
        self.engine.validate(None, "required")
        self.engine.get_errors().clear()
        self.assertIn("required", self.engine.get_errors())

    def test_at_most_one_entry_per_rule_name(self):
        result = self.engine.check(3, "min:1|min:5|max:2")
        self.assertEqual(list(result.errors), ["min", "max"])
        # the last occurrence's arguments are used
        self.assertEqual(result.errors["min"], "The value must be at least 5.")
        self.assertLessEqual(len(result.errors), len(result.spec))

    def test_override_builtin_with_add_rule(self):
        self.assertTrue(self.engine.validate("text", "string"))
        self.engine.add_rule("string", RejectAllRule)
        self.assertFalse(self.engine.validate("text", "string"))
        self.assertEqual(self.engine.get_errors(), {"string": "Rejected."})

    def test_constructor_rules_override_builtins(self):
        engine = ValidationEngine({"string": RejectAllRule})
        self.assertFalse(engine.validate("text", "string"))

    def test_add_all_rules(self):
        self.engine.add_all_rules({"even": EvenRule, "reject": RejectAllRule})
        self.assertTrue(self.engine.validate(4, "even"))
        self.assertFalse(self.engine.validate(4, "even|reject"))
        self.assertEqual(list(self.engine.get_errors()), ["reject"])

    def test_factory_entry(self):
        self.engine.add_rule("even", lambda: EvenRule())
        self.assertFalse(self.engine.validate(3, "even"))
        self.assertEqual(self.engine.get_errors(), {"even": "The value must be even."})

    def test_opaque_entry_is_skipped(self):
        with self.assertLogs("rulekit.engine", level="WARNING"):
            self.engine.add_rule("legacy", "LegacyRuleClassName")
            self.assertTrue(self.engine.validate("x", "legacy"))
        self.assertEqual(self.engine.get_errors(), {})

    def test_construction_error_is_fatal(self):
        with self.assertRaises(RuleConstructionError):
            self.engine.validate(5, "between:1")
        with self.assertRaises(RuleConstructionError):
            self.engine.validate(5, "min:five")

    def test_construction_error_happens_before_evaluation(self):
        with self.assertRaises(RuleConstructionError):
            self.engine.validate("", "required|between:1")
        self.assertEqual(self.engine.get_errors(), {})

    def test_phone_rule_takes_region_argument(self):
        self.assertTrue(self.engine.validate("0955 456 000", "required|phone:ZM"))
        self.assertFalse(self.engine.validate("044 668 18 00", "phone:ZM"))
        self.assertEqual(self.engine.get_errors(), {"phone": "The value must be a valid phone number for region ZM."})
        with self.assertRaises(RuleConstructionError):
            self.engine.validate("0955 456 000", "phone:XX")

    def test_rule_args_are_passed_as_strings(self):
        received = []

        class RecordingRule(ValidationRule):
            def __init__(self, *args):
                received.extend(args)

            def passes(self, value: Any) -> bool:
                return True

        self.engine.add_rule("record", RecordingRule)
        self.engine.validate(1, "record:1:two: 3")
        self.assertEqual(received, ["1", "two", " 3"])


class TestStrictMode(unittest.TestCase):
    def test_unknown_rule_becomes_failure(self):
        engine = ValidationEngine(strict=True)
        with self.assertLogs("rulekit.engine.validator", level="WARNING"):
            self.assertFalse(engine.validate("x", "string|bogusRule"))
        self.assertEqual(engine.get_errors(), {"bogusRule": "Unknown validation rule 'bogusRule'."})

    def test_unknown_rule_failures_follow_spec_order(self):
        engine = ValidationEngine(strict=True)
        result = engine.check("", "bogus|required|typo|bogus")
        self.assertEqual(list(result.errors), ["bogus", "required", "typo"])
        self.assertEqual(result.failed_rules, ["bogus", "required", "typo"])
        self.assertEqual(result.unresolved, ["bogus", "typo"])

    def test_per_call_override(self):
        engine = ValidationEngine()
        self.assertFalse(engine.check("x", "bogusRule", strict=True).passed)
        self.assertTrue(engine.check("x", "bogusRule").passed)


class TestEngineStatistics(unittest.TestCase):
    def test_statistics(self):
        engine = ValidationEngine()
        engine.check("abc", "string")
        engine.check("", "required|minLength:3|nope")

        stats = engine.get_statistics()
        self.assertEqual(stats["total_validated"], 2)
        self.assertEqual(stats["passed"], 1)
        self.assertEqual(stats["failed"], 1)
        self.assertEqual(stats["total_failures"], 2)
        self.assertEqual(stats["unresolved"], 1)
        self.assertEqual(stats["pass_rate"], 0.5)

        engine.reset_statistics()
        self.assertEqual(engine.get_statistics()["total_validated"], 0)

    def test_metrics_are_recorded(self):
        metrics = PrometheusMetrics()
        engine = ValidationEngine(metrics=metrics)
        engine.validate("", "required")
        self.assertEqual(metrics.total_validations, 1)
        self.assertEqual(metrics.failures_by_rule["required"], 1)


class TestValidateClass(unittest.TestCase):
    def test_errors_are_collected_into_given_list(self):
        errors = []
        self.assertFalse(ValidationEngine.validate_class(Account, errors))
        self.assertEqual(errors, ["The value must be a valid email address."])

    def test_instance_values_are_used(self):
        account = Account()
        account.email = "octocat@github.com"
        self.assertTrue(ValidationEngine.validate_class(account))

    def test_existing_errors_count_as_failure(self):
        account = Account()
        account.email = "octocat@github.com"
        errors = ["earlier failure"]
        self.assertFalse(ValidationEngine.validate_class(account, errors))
        self.assertEqual(errors, ["earlier failure"])


if __name__ == '__main__':
    unittest.main()
