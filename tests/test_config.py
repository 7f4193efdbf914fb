"""Tests for configuration checks: production refuses development fallbacks."""

import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from botadmin.admin.server import create_app
from botadmin.config import DEV_ADMIN_PASS, DEV_SESSION_SECRET, check_config
from botadmin.errors import ConfigError


class TestCheckConfig(unittest.TestCase):
    def test_explicit_values_win(self):
        self.assertEqual(
            check_config(admin_pass="p", session_secret="s", app_env="production"),
            ("p", "s"),
        )

    def test_development_uses_fallbacks(self):
        self.assertEqual(
            check_config(admin_pass="", session_secret="", app_env="development"),
            (DEV_ADMIN_PASS, DEV_SESSION_SECRET),
        )

    def test_production_requires_both(self):
        with self.assertRaises(ConfigError) as cm:
            check_config(admin_pass="p", session_secret="", app_env="production")
        self.assertIn("SESSION_SECRET", str(cm.exception))
        with self.assertRaises(ConfigError) as cm:
            check_config(admin_pass="", session_secret="", app_env="prod")
        self.assertIn("ADMIN_PASS", str(cm.exception))

    def test_create_app_refuses_insecure_production(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigError):
                create_app(data_dir=tmp, admin_pass="", session_secret="", app_env="production")

    def test_create_app_creates_data_dirs(self):
        with tempfile.TemporaryDirectory() as tmp:
            data_dir = Path(tmp) / "nested" / "data"
            app = create_app(data_dir=data_dir, admin_pass="p", session_secret="s", app_env="development")
            self.assertTrue((data_dir / "produk").is_dir())
            self.assertEqual(app.state.store.data_dir, data_dir)


if __name__ == "__main__":
    unittest.main()
