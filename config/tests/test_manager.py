import os
import unittest
from unittest import mock
from pathlib import Path
import tempfile

from config.manager import EnvironmentManager
from config.types import HarnessSettings


class TestEnvironmentManager(unittest.TestCase):
    """Test cases for the EnvironmentManager class."""

    def setUp(self):
        """Set up test fixtures."""
        # Create a new instance for each test to avoid singleton issues
        EnvironmentManager._instance = None
        self.env_manager = EnvironmentManager()
        for key, (default_value, _) in EnvironmentManager.DEFAULT_SETTINGS.items():
            self.env_manager.settings[key] = default_value

        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Clean up after tests."""
        import shutil

        shutil.rmtree(self.temp_dir, ignore_errors=True)
        EnvironmentManager._instance = None

    def create_env_file(self, content):
        """Create a temporary .env file with the given content."""
        env_file = Path(self.temp_dir) / ".env"
        env_file.write_text(content)
        return env_file

    def test_singleton_pattern(self):
        """Test that EnvironmentManager follows singleton pattern."""
        manager1 = EnvironmentManager()
        manager2 = EnvironmentManager()

        self.assertIs(manager1, manager2)

    def test_default_settings(self):
        """Test that defaults match the documented configuration."""
        self.assertEqual(
            self.env_manager.get_base_url(), "https://the-internet.herokuapp.com"
        )
        self.assertEqual(
            self.env_manager.get_api_base_url(), "https://jsonplaceholder.typicode.com"
        )
        self.assertEqual(self.env_manager.get_timeout(), 10)
        self.assertEqual(self.env_manager.get_browser_type(), "chrome")
        self.assertTrue(self.env_manager.is_headless())
        self.assertEqual(self.env_manager.get_setting("http_pool_size"), 5)

    def test_parse_env_file(self):
        """Test parsing an environment file with typed values."""
        env_file = self.create_env_file(
            """
            # Test environment file
            BASE_URL=https://staging.example.com
            API_BASE_URL="https://api.staging.example.com"
            TIMEOUT=30
            BROWSER_TYPE=firefox
            HEADLESS=false
            POLL_INTERVAL=0.25
            UNRELATED_VARIABLE=value
            """
        )

        self.env_manager._parse_env_file(env_file)

        self.assertEqual(self.env_manager.get_base_url(), "https://staging.example.com")
        self.assertEqual(
            self.env_manager.get_api_base_url(), "https://api.staging.example.com"
        )
        self.assertEqual(self.env_manager.get_timeout(), 30)
        self.assertEqual(self.env_manager.get_browser_type(), "firefox")
        self.assertFalse(self.env_manager.is_headless())
        self.assertEqual(self.env_manager.get_setting("poll_interval"), 0.25)
        self.assertEqual(
            self.env_manager.env_variables.get("UNRELATED_VARIABLE"), "value"
        )

    def test_parse_env_file_invalid_value_keeps_default(self):
        """Test that an unparseable value does not replace the default."""
        env_file = self.create_env_file("TIMEOUT=soon\n")

        self.env_manager._parse_env_file(env_file)

        self.assertEqual(self.env_manager.get_timeout(), 10)

    def test_load_from_os_environment(self):
        """Test that OS environment variables override defaults."""
        with mock.patch.dict(
            os.environ, {"HEADLESS": "0", "HTTP_POOL_SIZE": "8"}, clear=False
        ):
            self.env_manager.load()

        self.assertFalse(self.env_manager.is_headless())
        self.assertEqual(self.env_manager.get_setting("http_pool_size"), 8)

    def test_set_and_reset_setting(self):
        """Test setting values explicitly and resetting them."""
        self.env_manager.set_setting("timeout", "3")
        self.assertEqual(self.env_manager.get_timeout(), 3)

        self.env_manager.reset_setting("timeout")
        self.assertEqual(self.env_manager.get_timeout(), 10)

    def test_explicit_setting_survives_reload(self):
        """Test that repeated loads do not overwrite explicitly set values."""
        self.env_manager.set_setting("browser_type", "edge")

        with mock.patch.dict(
            os.environ, {"BROWSER_TYPE": "firefox", "TIMEOUT": "4"}, clear=False
        ):
            self.env_manager.load()
            self.assertEqual(self.env_manager.get_browser_type(), "edge")
            self.assertEqual(self.env_manager.get_timeout(), 4)

            self.env_manager.reset_setting("browser_type")
            self.env_manager.load()
            self.assertEqual(self.env_manager.get_browser_type(), "firefox")

    def test_set_unknown_setting(self):
        """Test that unknown settings are rejected."""
        with self.assertRaises(KeyError):
            self.env_manager.set_setting("not_a_setting", 1)

    def test_get_settings_snapshot(self):
        """Test the validated settings snapshot."""
        self.env_manager.set_setting("browser_type", "edge")

        settings = self.env_manager.get_settings()

        self.assertIsInstance(settings, HarnessSettings)
        self.assertEqual(settings.browser_type, "edge")
        self.assertEqual(settings.http_pool_size, 5)


if __name__ == "__main__":
    unittest.main()
