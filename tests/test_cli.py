from __future__ import annotations

import contextlib
import io
import json
import os
import tempfile
import unittest
from pathlib import Path

from _images import plate_photo

from poleregistry import ContinuousModeError, RegistrationSession, SessionStore


class _InTempDir(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self._cwd = os.getcwd()
        os.chdir(self.root)

    def tearDown(self):
        os.chdir(self._cwd)
        self._tmp.cleanup()


class RoutePhotosTests(_InTempDir):
    def test_batch_routing(self):
        from route_photos import run_routing

        photos = self.root / "photos"
        photos.mkdir()
        (photos / "img1.jpg").write_bytes(plate_photo(35.681236, 139.767125))
        (photos / "img2.jpg").write_bytes(plate_photo(35.0, 135.0))
        (photos / "img3.png").write_bytes(plate_photo(image_format="PNG"))
        poles = self.root / "poles.json"
        poles.write_text(
            json.dumps([{"id": 9, "latitude": 35.681250, "longitude": 139.767125, "numbers": ["247エ714"]}]),
            encoding="utf-8",
        )

        results = run_routing(photos, poles)

        self.assertEqual(results["img1.jpg"]["branch"], "proximity-check")
        self.assertTrue(results["img1.jpg"]["needs_confirmation"])
        self.assertEqual(results["img1.jpg"]["candidates"], [9])
        self.assertEqual(results["img2.jpg"]["branch"], "proximity-check")
        self.assertFalse(results["img2.jpg"]["needs_confirmation"])
        self.assertEqual(results["img3.png"]["branch"], "manual-entry")
        self.assertTrue((self.root / "output" / "routing.json").exists())


class SuggestNextTests(_InTempDir):
    def test_record_then_suggest(self):
        from suggest_next import record, suggest

        with self.assertRaises(ContinuousModeError):
            suggest("electric", 1)

        saved = record("electric", ["２４７ｴ７１４", "ｎｔｔ12"], 2)
        self.assertEqual(saved.last_identifiers, ["247エ714", "NTT12"])

        lines = suggest("electric", 2)
        self.assertEqual(lines[:2], ["input[0]: 247エ715", "input[1]: "])
        self.assertIn("+2: 247エ716", lines)

        with self.assertRaises(ContinuousModeError):
            suggest("other", 1)


class CleanupTests(_InTempDir):
    def _populate(self):
        output = self.root / "output"
        (output / "crops").mkdir(parents=True)
        (output / "routing.json").write_text("{}", encoding="utf-8")
        store = SessionStore(self.root / "state" / "session.json")
        store.save(RegistrationSession(["247エ714"], "electric", 1))
        return output, store

    def test_dry_run_keeps_everything(self):
        from cleanup import main

        output, store = self._populate()
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            self.assertEqual(main(["--dry-run", "--session"], repo_root=self.root), 0)

        self.assertIn("Dry run requested", buffer.getvalue())
        self.assertIn(str(store.path), buffer.getvalue())
        self.assertEqual(sorted(p.name for p in output.iterdir()), ["crops", "routing.json"])
        self.assertIsNotNone(store.load())

    def test_session_yes_clears_outputs_and_slot(self):
        from cleanup import main

        output, store = self._populate()
        with contextlib.redirect_stdout(io.StringIO()):
            self.assertEqual(main(["--session", "--yes"], repo_root=self.root), 0)

        self.assertEqual(list(output.iterdir()), [])
        self.assertIsNone(store.load())
        self.assertFalse(store.path.exists())

    def test_outputs_only_leaves_slot(self):
        from cleanup import main

        output, store = self._populate()
        with contextlib.redirect_stdout(io.StringIO()):
            self.assertEqual(main(["--yes"], repo_root=self.root), 0)
            self.assertEqual(main(["--yes"], repo_root=self.root), 0)

        self.assertEqual(list(output.iterdir()), [])
        self.assertEqual(store.load().last_identifiers, ["247エ714"])


if __name__ == "__main__":
    unittest.main()
