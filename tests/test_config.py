from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from poleregistry import generate_placeholder_number, load_config_overrides_from_file, load_registry_config


class OverrideFileTests(unittest.TestCase):
    def test_parses_key_value_lines(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "config.txt"
            path.write_text(
                "# registry overrides\n"
                "nearby_check_radius: 8   # metres\n"
                "suggestion_deltas: -2, 1, 4\n"
                "geo_reject_zero: false\n"
                "session_path: state/tab.json\n"
                "session_key: 12\n"
                "not a setting\n",
                encoding="utf-8",
            )
            overrides = load_config_overrides_from_file(path)
        self.assertEqual(overrides["nearby_check_radius"], 8)
        self.assertEqual(overrides["suggestion_deltas"], "-2, 1, 4")
        self.assertIs(overrides["geo_reject_zero"], False)
        self.assertEqual(overrides["session_path"], "state/tab.json")
        self.assertEqual(overrides["session_key"], "12")
        self.assertNotIn("not a setting", overrides)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config_overrides_from_file("/nonexistent/config.txt")
        self.assertEqual(load_config_overrides_from_file("/nonexistent/config.txt", allow_missing=True), {})


class RegistryConfigTests(unittest.TestCase):
    def test_defaults(self):
        cfg = load_registry_config(None, base_path=Path("/tmp/registry"))
        self.assertEqual(cfg.duplicate_check.nearby_check_radius_m, 5.0)
        self.assertEqual(cfg.duplicate_check.verification_radius_m, 50.0)
        self.assertEqual(cfg.sequence.suggestion_deltas, (-1, 1, 2, 3))
        self.assertEqual(cfg.sequence.continuous_step, 1)
        self.assertEqual(cfg.geo.max_image_bytes, 5 * 1024 * 1024)
        self.assertEqual(cfg.session.state_path, Path("/tmp/registry/state/session.json"))
        self.assertEqual(cfg.output_root, Path("/tmp/registry/output"))
        self.assertIsNone(cfg.seed)

    def test_aliases_and_overrides(self):
        cfg = load_registry_config(
            {
                "dup_radius_m": 8,
                "verify_radius_m": 30,
                "seq_deltas": "-2, 1, 4",
                "seq_step": 2,
                "reject_zero_fix": False,
                "state_path": "/var/lib/poles/session.json",
                "random_seed": "11",
            },
            base_path=Path("/tmp/registry"),
        )
        self.assertEqual(cfg.duplicate_check.nearby_check_radius_m, 8.0)
        self.assertEqual(cfg.duplicate_check.verification_radius_m, 30.0)
        self.assertEqual(cfg.sequence.suggestion_deltas, (-2, 1, 4))
        self.assertEqual(cfg.sequence.continuous_step, 2)
        self.assertFalse(cfg.geo.reject_zero_fix)
        self.assertEqual(cfg.session.state_path, Path("/var/lib/poles/session.json"))
        self.assertEqual(cfg.seed, 11)

    def test_bad_seed_is_dropped(self):
        self.assertIsNone(load_registry_config({"seed": "abc"}).seed)

    def test_seed_makes_placeholders_reproducible(self):
        hash_seed = os.environ.get("PYTHONHASHSEED")
        load_registry_config({"seed": 5})
        first = generate_placeholder_number()
        load_registry_config({"seed": "5"})
        self.assertEqual(generate_placeholder_number(), first)
        self.assertEqual(os.environ.get("PYTHONHASHSEED"), hash_seed)


if __name__ == "__main__":
    unittest.main()
