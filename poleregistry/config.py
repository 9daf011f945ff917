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

"""Configuration helpers for the registration core."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .utils import set_global_seed


def _strip_inline_comment(value: str) -> str:
    if "#" not in value:
        return value.strip()
    return value.split("#", 1)[0].strip()


def _parse_override_value(value: str, key: str = "") -> object:
    text = _strip_inline_comment(value)
    if not text:
        return ""
    if key.lower().endswith(("path", "key")):
        return text
    lowered = text.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    try:
        if any(sep in text for sep in (".", "e", "E")):
            return float(text)
        return int(text)
    except ValueError:
        return text


def load_config_overrides_from_file(path: Union[str, Path], *, allow_missing: bool = False) -> Dict[str, object]:
    """Parse a minimal ``key: value`` override file (no JSON required)."""

    file_path = Path(path)
    if not file_path.exists():
        if allow_missing:
            return {}
        raise FileNotFoundError(f"Config file not found: {file_path}")

    overrides: Dict[str, object] = {}
    with file_path.open("r", encoding="utf-8") as handle:
        for raw_line in handle:
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            if ":" not in line:
                continue
            key, value = line.split(":", 1)
            key = key.strip()
            overrides[key] = _parse_override_value(value, key)
    return overrides


@dataclass
class DuplicateCheckConfig:
    # Registration-time dedup radius; not the field-verification radius below.
    nearby_check_radius_m: float = 5.0
    verification_radius_m: float = 50.0
    nearby_display_radius_m: float = 50.0


@dataclass
class SequenceConfig:
    suggestion_deltas: Tuple[int, ...] = (-1, 1, 2, 3)
    continuous_step: int = 1


@dataclass
class GeoConfig:
    max_image_bytes: int = 5 * 1024 * 1024
    reject_zero_fix: bool = True


@dataclass
class SessionConfig:
    state_path: Path = Path("state/session.json")
    session_key: str = ""


@dataclass
class RegistryConfig:
    output_root: Path = Path("output")
    seed: Optional[int] = None
    duplicate_check: DuplicateCheckConfig = field(default_factory=DuplicateCheckConfig)
    sequence: SequenceConfig = field(default_factory=SequenceConfig)
    geo: GeoConfig = field(default_factory=GeoConfig)
    session: SessionConfig = field(default_factory=SessionConfig)


def _pop_first(keys: Iterable[str], source: Dict[str, object], default: object) -> Any:
    for key in keys:
        if key in source:
            return source.pop(key)
    return default


def _ensure_path(value: object, base_path: Path) -> Path:
    path = Path(str(value))
    if not path.is_absolute():
        path = base_path / path
    return path


def _ensure_tuple_of_ints(value: object) -> Tuple[int, ...]:
    if isinstance(value, tuple):
        return tuple(int(v) for v in value)
    if isinstance(value, list):
        return tuple(int(v) for v in value)
    if value is None:
        return tuple()
    text = str(value).replace(",", " ")
    numbers = [token for token in text.split() if token]
    return tuple(int(token) for token in numbers)


def load_registry_config(config_dict: Optional[Dict[str, object]], base_path: Optional[Path] = None) -> RegistryConfig:
    data = dict(config_dict or {})
    base = Path(base_path or Path.cwd())

    seed_value = _pop_first(["seed", "random_seed"], data, None)
    output_root = _ensure_path(_pop_first(["output_root", "output_dir"], data, "output"), base)

    duplicate_check = DuplicateCheckConfig(
        nearby_check_radius_m=float(_pop_first(["nearby_check_radius", "dup_radius_m"], data, 5.0)),
        verification_radius_m=float(_pop_first(["verification_radius", "verify_radius_m"], data, 50.0)),
        nearby_display_radius_m=float(_pop_first(["nearby_display_radius", "display_radius_m"], data, 50.0)),
    )

    sequence = SequenceConfig(
        suggestion_deltas=_ensure_tuple_of_ints(_pop_first(["suggestion_deltas", "seq_deltas"], data, ())),
        continuous_step=int(_pop_first(["continuous_step", "seq_step"], data, 1)),
    )
    if not sequence.suggestion_deltas:
        sequence.suggestion_deltas = (-1, 1, 2, 3)

    geo = GeoConfig(
        max_image_bytes=int(_pop_first(["geo_max_bytes", "max_image_bytes"], data, 5 * 1024 * 1024)),
        reject_zero_fix=bool(_pop_first(["geo_reject_zero", "reject_zero_fix"], data, True)),
    )

    session = SessionConfig(
        state_path=_ensure_path(_pop_first(["session_path", "state_path"], data, "state/session.json"), base),
        session_key=str(_pop_first(["session_key"], data, "")),
    )

    seed: Optional[int] = None
    if seed_value is not None:
        try:
            seed = int(seed_value)
        except (TypeError, ValueError):
            seed = None
        set_global_seed(seed)

    return RegistryConfig(
        output_root=output_root,
        seed=seed,
        duplicate_check=duplicate_check,
        sequence=sequence,
        geo=geo,
        session=session,
    )
