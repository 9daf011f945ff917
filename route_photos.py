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

"""Route a batch of plate photos to the duplicate check or manual entry."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from poleregistry import RegistrationRouter, StaticPoleFinder, load_config_overrides_from_file, load_registry_config
from poleregistry.io_utils import collect_images, load_candidates, read_image_bytes, save_text


def run_routing(
    input_path: Union[str, Path],
    poles_path: Optional[Union[str, Path]] = None,
    config: Optional[Mapping[str, object]] = None,
) -> Dict[str, Dict[str, object]]:
    """
    Route every plate photo under ``input_path``.

    Photos with an embedded GPS fix are checked against the known poles in
    ``poles_path`` (a JSON list); the rest are sent to manual location entry.

    Args:
        input_path: Directory or single image
        poles_path: Optional JSON file of existing pole records
        config: Optional configuration dictionary to override defaults

    Returns:
        Dictionary mapping image names to the routing summary

    Example:
        >>> results = run_routing("photos", "poles.json")
        >>> results["IMG_0001.jpg"]["branch"]
        'proximity-check'
    """
    overrides = dict(config or {})
    registry_cfg = load_registry_config(overrides, base_path=Path.cwd())
    candidates = load_candidates(Path(poles_path)) if poles_path else []
    router = RegistrationRouter(registry_cfg, StaticPoleFinder(candidates))

    results: Dict[str, Dict[str, object]] = {}
    for image_path in collect_images(Path(input_path)):
        outcome = router.run(read_image_bytes(image_path))
        summary = outcome.decision.as_dict()
        summary["needs_confirmation"] = outcome.needs_confirmation
        summary["candidates"] = [candidate.pole_id for candidate in outcome.candidates]
        summary["closest_distance_m"] = outcome.closest_distance_m
        results[image_path.name] = summary

    save_text(registry_cfg.output_root / "routing.json", json.dumps(results, ensure_ascii=False, indent=2) + "\n")
    return results


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Route plate photos for duplicate checking")
    parser.add_argument("input", type=str, help="Directory or image path for processing")
    parser.add_argument("--poles", type=str, default=None, help="JSON list of existing poles")
    parser.add_argument("--config", type=str, default=None, help="Optional config overrides file")
    parser.add_argument("--verbose", action="store_true", help="Log why photos lack a GPS fix")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    overrides = None
    if args.config:
        try:
            overrides = load_config_overrides_from_file(args.config)
        except FileNotFoundError:
            print(f"Config overrides not found: {args.config}")
        except Exception as exc:
            print(f"Failed to parse overrides {args.config}: {exc}")

    summary = run_routing(args.input, args.poles, overrides)
    for name, info in summary.items():
        if info["branch"] == "manual-entry":
            print(f"{name}: manual location entry")
        elif info["needs_confirmation"]:
            print(f"{name}: confirm duplicate of {info['candidates']} ({info['closest_distance_m']:.1f} m)")
        else:
            print(f"{name}: new pole at {info['coordinate']['latitude']:.6f},{info['coordinate']['longitude']:.6f}")
