import os
import tempfile
import textwrap
import unittest
from unittest.mock import patch

from rulekit.config import ValidatorSettings, import_rule, load_settings, parse_bool
from rulekit.errors import ConfigurationError
from rulekit.rules import StringValidationRule


def clean_env(**overrides):
    env = {k: v for k, v in os.environ.items() if not k.startswith("RULEKIT_")}
    env.update(overrides)
    return patch.dict("os.environ", env, clear=True)


@patch("rulekit.config.load_dotenv")
class TestLoadSettings(unittest.TestCase):
    def write_config(self, content):
        handle = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False)
        handle.write(textwrap.dedent(content))
        handle.close()
        self.addCleanup(os.unlink, handle.name)
        return handle.name

    def test_defaults(self, mock_dotenv):
        with clean_env():
            settings = load_settings()
        self.assertEqual(settings, ValidatorSettings())
        mock_dotenv.assert_called_once()

    def test_yaml_file(self, mock_dotenv):
        path = self.write_config("""
            strict: true
            accumulate: false
            log_level: debug
            log_format: text
            enable_metrics: false
            custom_rules:
              text: rulekit.rules.type_rules:StringValidationRule
        """)
        with clean_env():
            settings = load_settings(path)

        self.assertTrue(settings.strict)
        self.assertFalse(settings.accumulate)
        self.assertEqual(settings.log_level, "DEBUG")
        self.assertEqual(settings.log_format, "text")
        self.assertFalse(settings.enable_metrics)
        self.assertIs(settings.custom_rules["text"], StringValidationRule)

    def test_config_path_from_environment(self, mock_dotenv):
        path = self.write_config("strict: true\n")
        with clean_env(RULEKIT_CONFIG=path):
            self.assertTrue(load_settings().strict)

    def test_environment_overrides_file(self, mock_dotenv):
        path = self.write_config("strict: true\nlog_format: text\n")
        with clean_env(RULEKIT_STRICT="false", RULEKIT_LOG_FORMAT="json", RULEKIT_ACCUMULATE="0"):
            settings = load_settings(path)
        self.assertFalse(settings.strict)
        self.assertFalse(settings.accumulate)
        self.assertEqual(settings.log_format, "json")

    def test_missing_file(self, mock_dotenv):
        with clean_env():
            with self.assertRaises(ConfigurationError):
                load_settings("/nonexistent/rulekit.yaml")

    def test_invalid_yaml(self, mock_dotenv):
        path = self.write_config("strict: [unclosed\n")
        with clean_env():
            with self.assertRaises(ConfigurationError):
                load_settings(path)

    def test_unknown_setting(self, mock_dotenv):
        path = self.write_config("stric: true\n")
        with clean_env():
            with self.assertRaises(ConfigurationError) as ctx:
                load_settings(path)
        self.assertIn("stric", str(ctx.exception))

    def test_invalid_log_format(self, mock_dotenv):
        with clean_env(RULEKIT_LOG_FORMAT="xml"):
            with self.assertRaises(ConfigurationError):
                load_settings()

    def test_invalid_boolean(self, mock_dotenv):
        with clean_env(RULEKIT_STRICT="maybe"):
            with self.assertRaises(ConfigurationError):
                load_settings()


class TestHelpers(unittest.TestCase):
    def test_parse_bool(self):
        self.assertTrue(parse_bool("Yes", "x"))
        self.assertFalse(parse_bool("off", "x"))
        self.assertTrue(parse_bool(True, "x"))

    def test_import_rule(self):
        self.assertIs(import_rule("rulekit.rules:StringValidationRule"), StringValidationRule)

    def test_import_rule_errors(self):
        for path in ["no_colon", "rulekit.missing_module:Rule", "rulekit.rules:MissingRule"]:
            with self.assertRaises(ConfigurationError):
                import_rule(path)


if __name__ == '__main__':
    unittest.main()
