import unittest

from rulekit.engine import ValidationEngine
from rulekit.metrics import PrometheusMetrics, escape_label_value, get_metrics, metrics_endpoint, reset_metrics


class TestPrometheusMetrics(unittest.TestCase):
    def setUp(self):
        self.metrics = PrometheusMetrics()
        self.engine = ValidationEngine(metrics=self.metrics)

    def test_counters(self):
        self.engine.check("octocat", "required|string")
        self.engine.check("", "required|minLength:3|typo")

        self.assertEqual(self.metrics.total_validations, 2)
        self.assertEqual(self.metrics.passed_validations, 1)
        self.assertEqual(self.metrics.failed_validations, 1)
        self.assertEqual(dict(self.metrics.failures_by_rule), {"required": 1, "minLength": 1})
        self.assertEqual(dict(self.metrics.unresolved_rules), {"typo": 1})
        self.assertEqual(len(self.metrics.recent_failures), 1)
        self.assertEqual(self.metrics.recent_failures[0]["failed_rules"], ["required", "minLength"])

    def test_export_text(self):
        self.engine.check("", "required")
        text = self.metrics.export_text()

        self.assertIn("rulekit_validation_total 1", text)
        self.assertIn("rulekit_validation_failed 1", text)
        self.assertIn('rulekit_validation_rule_failures{rule="required"} 1', text)
        self.assertIn('rulekit_validation_duration_seconds_bucket{le="+Inf"} 1', text)
        self.assertIn("# TYPE rulekit_validation_duration_seconds histogram", text)

    def test_export_json_and_reset(self):
        self.engine.check("abc", "alpha")
        data = self.metrics.export_json()
        self.assertEqual(data["total_validations"], 1)
        self.assertEqual(data["pass_rate"], 1.0)

        self.metrics.reset()
        self.assertEqual(self.metrics.export_json()["total_validations"], 0)

    def test_alert_conditions(self):
        self.assertEqual(self.metrics.get_alert_conditions(), {"no_data": True})
        self.engine.check("x", "unknownRule")
        self.assertTrue(self.metrics.get_alert_conditions()["unresolved_rules_seen"])

    def test_label_values_are_escaped(self):
        self.engine.check("x", 'bad"} 999\nfake_metric{a="1')
        text = self.metrics.export_text()

        self.assertIn('rulekit_validation_unresolved_rules{rule="bad\\"} 999\\nfake_metric{a=\\"1"} 1', text)
        for line in text.splitlines():
            if line and not line.startswith("#"):
                self.assertTrue(line.startswith("rulekit_validation_"), line)

    def test_rule_series_are_capped(self):
        metrics = PrometheusMetrics(max_rule_series=3)
        engine = ValidationEngine(metrics=metrics)
        for i in range(10):
            engine.check("x", f"typo{i}", strict=True)

        self.assertEqual(dict(metrics.unresolved_rules), {"typo0": 1, "typo1": 1, "typo2": 1, "other": 7})
        self.assertEqual(metrics.failures_by_rule["other"], 7)
        self.assertEqual(len(metrics.failures_by_rule), 4)

        # names already tracked keep their own series
        engine.check("x", "typo1")
        self.assertEqual(metrics.unresolved_rules["typo1"], 2)


class TestEscapeLabelValue(unittest.TestCase):
    def test_escapes(self):
        self.assertEqual(escape_label_value("required"), "required")
        self.assertEqual(escape_label_value('a"b'), 'a\\"b')
        self.assertEqual(escape_label_value("a\\b"), "a\\\\b")
        self.assertEqual(escape_label_value("a\nb"), "a\\nb")


class TestGlobalMetrics(unittest.TestCase):
    def test_singleton(self):
        self.assertIs(get_metrics(), get_metrics())

    def test_reset_and_endpoint(self):
        get_metrics().record_validation(ValidationEngine().check("", "required"))
        reset_metrics()
        self.assertIn("rulekit_validation_total 0", metrics_endpoint())


if __name__ == '__main__':
    unittest.main()
