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

"""Continuous entry from the command line: suggest and record pole numbers."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from poleregistry import (
    ContinuousEntry,
    RegistrationSession,
    SessionStore,
    canonicalize,
    load_config_overrides_from_file,
    load_registry_config,
    resolve_registered_numbers,
)


def suggest(pole_type: str, plate_count: int, config: Optional[Mapping[str, object]] = None) -> List[str]:
    """
    Return the pre-filled inputs and offset suggestions for the next pole.

    Raises:
        ContinuousModeError: no previous registration, or a different pole type
    """
    registry_cfg = load_registry_config(dict(config or {}), base_path=Path.cwd())
    store = SessionStore(registry_cfg.session.state_path, registry_cfg.session.session_key or None)
    entry = ContinuousEntry(
        store.load(),
        pole_type,
        deltas=registry_cfg.sequence.suggestion_deltas,
        step=registry_cfg.sequence.continuous_step,
    )
    lines = [f"input[{idx}]: {value}" for idx, value in enumerate(entry.initial_numbers(plate_count))]
    lines.extend(f"{s.delta:+d}: {s.identifier}" for s in entry.suggestions())
    return lines


def record(
    pole_type: str,
    numbers: Sequence[str],
    plate_count: int,
    config: Optional[Mapping[str, object]] = None,
) -> RegistrationSession:
    """Store a completed registration as the seed for the next one."""

    registry_cfg = load_registry_config(dict(config or {}), base_path=Path.cwd())
    store = SessionStore(registry_cfg.session.state_path, registry_cfg.session.session_key or None)
    final_numbers = resolve_registered_numbers([canonicalize(n) for n in numbers], plate_count)
    session = RegistrationSession.record(final_numbers, pole_type)
    store.save(session)
    return session


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Continuous pole-number entry")
    parser.add_argument("pole_type", type=str, help="Pole type category, e.g. electric")
    parser.add_argument("--plates", type=int, default=1, help="Number of identifier plates on the pole")
    parser.add_argument("--record", nargs="*", default=None, help="Record these numbers as the latest registration")
    parser.add_argument("--config", type=str, default=None, help="Optional config overrides file")
    args = parser.parse_args()

    overrides = None
    if args.config:
        try:
            overrides = load_config_overrides_from_file(args.config)
        except FileNotFoundError:
            print(f"Config overrides not found: {args.config}")
        except Exception as exc:
            print(f"Failed to parse overrides {args.config}: {exc}")

    try:
        if args.record is not None:
            saved = record(args.pole_type, args.record, args.plates, overrides)
            print(f"Recorded {', '.join(saved.last_identifiers)} ({saved.pole_type_category})")
        else:
            for line in suggest(args.pole_type, args.plates, overrides):
                print(line)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        raise SystemExit(1)
