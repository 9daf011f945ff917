# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


# Author: Mohammad Saif Ul Haq
# Last Modified: 2026-10-19

"""Remove routing summaries and, on request, the saved registration slot."""

from __future__ import annotations

import argparse
import shutil
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from poleregistry import SessionStore, load_config_overrides_from_file, load_registry_config


@dataclass
class CleanupPlan:
    output_root: Path
    outputs: List[Path] = field(default_factory=list)
    session: Optional[SessionStore] = None

    @property
    def empty(self) -> bool:
        has_session = self.session is not None and self.session.path.exists()
        return not self.outputs and not has_session

    def describe(self) -> List[str]:
        lines = [f"{len(self.outputs)} routing output(s) under {self.output_root}"]
        lines.extend(f"  {path}" for path in self.outputs)
        if self.session is not None and self.session.path.exists():
            lines.append(f"saved registration slot {self.session.path}")
        return lines


def plan_cleanup(repo_root: Path, config_path: Optional[Path] = None, include_session: bool = False) -> CleanupPlan:
    """Work out what a cleanup run would delete, without touching anything."""

    overrides = load_config_overrides_from_file(config_path or repo_root / "config.txt", allow_missing=True)
    registry_cfg = load_registry_config(overrides, base_path=repo_root)
    outputs = sorted(registry_cfg.output_root.iterdir()) if registry_cfg.output_root.is_dir() else []
    session = None
    if include_session:
        session = SessionStore(registry_cfg.session.state_path, registry_cfg.session.session_key or None)
    return CleanupPlan(output_root=registry_cfg.output_root, outputs=outputs, session=session)


def apply_cleanup(plan: CleanupPlan) -> List[Path]:
    """Delete everything in ``plan``; returns the paths that could not be removed."""

    failed: List[Path] = []
    for path in plan.outputs:
        try:
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as exc:
            print(f"Failed to remove {path}: {exc}", file=sys.stderr)
            failed.append(path)
    if plan.session is not None:
        try:
            plan.session.clear()
        except OSError as exc:
            print(f"Failed to clear {plan.session.path}: {exc}", file=sys.stderr)
            failed.append(plan.session.path)
    return failed


def main(argv: Optional[Sequence[str]] = None, repo_root: Optional[Path] = None) -> int:
    parser = argparse.ArgumentParser(description="Remove generated routing outputs")
    parser.add_argument("--config", type=Path, default=None, help="Config overrides file (default: ./config.txt)")
    parser.add_argument("--session", action="store_true", help="Also forget the last registration")
    parser.add_argument("--dry-run", action="store_true", help="List what would be deleted and stop")
    parser.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    args = parser.parse_args(argv)

    plan = plan_cleanup(repo_root or Path(__file__).resolve().parent, args.config, args.session)
    if plan.empty:
        print(f"Nothing to remove under {plan.output_root}")
        return 0
    print("\n".join(plan.describe()))

    if args.dry_run:
        print("Dry run requested; no files were removed.")
        return 0
    if not args.yes and input("Proceed? [y/N] ").strip().lower() not in {"y", "yes"}:
        print("Aborted; no files were removed.")
        return 0

    if apply_cleanup(plan):
        return 1
    print("Cleanup complete.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
