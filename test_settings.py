import os
import unittest
from unittest.mock import patch

import config
from settings import RelaySettings

REQUIRED_ENV = {
    "SLACK_BOT_TOKEN": "xoxb-test",
    "SLACK_APP_TOKEN": "xapp-test",
    "REDMINE_ENDPOINT": "https://redmine.example.com",
    "REDMINE_APIKEY": "secret",
}


class TestRelaySettings(unittest.TestCase):
    @patch.dict(os.environ, REQUIRED_ENV, clear=True)
    def test_defaults(self):
        settings = RelaySettings.load()
        self.assertEqual(settings.redmine.endpoint, "https://redmine.example.com")
        self.assertEqual(settings.redmine.timeout_seconds, 10)
        self.assertIsNone(settings.slack.notify_channel)
        self.assertEqual(settings.aliases.path, "./usermapping.json")
        self.assertEqual(settings.notification.assignee_title, "Assignee")
        self.assertEqual(settings.logging.level, "INFO")

    @patch.dict(
        os.environ,
        {
            **REQUIRED_ENV,
            "SLACK_NOTIFY_CHANNEL": "C-NOTIFY",
            "ASSIGNEE_FIELD_TITLE": "担当者",
            "STATUS_FIELD_TITLE": "ステータス",
            "REDMINE_TIMEOUT": "3.5",
        },
        clear=True,
    )
    def test_overrides_reach_config_accessors(self):
        settings = RelaySettings.load()
        with patch("config._cached_settings", return_value=settings):
            self.assertEqual(config.get_notify_channel(), "C-NOTIFY")
            self.assertEqual(config.get_redmine_timeout(), 3.5)
            self.assertEqual(
                config.get_field_titles(), {"assignee": "担当者", "status": "ステータス"}
            )

    @patch.dict(os.environ, {"SLACK_BOT_TOKEN": "xoxb-test"}, clear=True)
    def test_missing_values_named(self):
        with self.assertRaises(RuntimeError) as ctx:
            RelaySettings.load()
        self.assertIn("SLACK_APP_TOKEN", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
