"""Configuration loading and management for riskmap.

Every component receives only the parameters it needs; this module builds
those parameters once per run. Sources are overlaid field-by-field in
priority order:
    1. Defaults (``DEFAULT_CONFIG``)
    2. Project config (``<repo>/riskmap.toml``) or an explicit config file
    3. Environment variables (``RISKMAP_<SECTION>_<FIELD>``, scalars only)
    4. Keyword overrides (``section__field=value``, typically CLI flags)

List options (exclusions) are de-duplicated and appended to the defaults,
the alias table is merged, scalars replace.

Example TOML:

    [authors.aliases]
    "jdoe@example.com" = "Jane Doe"

    [exclude]
    paths = ["vendor/"]
    globs = ["**/*.svg"]

    [metrics.coupling]
    min_cochange = 4

    [metrics.risk]
    w_churn = 0.5
    w_cc = 0.3
    w_ownership = 0.2
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Optional

from .exceptions import InvalidConfigError, InvalidPathError

PROJECT_CONFIG_NAME = "riskmap.toml"
ENV_PREFIX = "RISKMAP_"


@dataclass(frozen=True)
class AuthorsConfig:
    """Author identity normalization.

    Attributes:
        aliases: Author name or email -> canonical author name
    """

    aliases: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ExcludeConfig:
    """Paths and commits removed from the commit stream before analysis.

    Attributes:
        paths: Substrings; a file change whose path contains one is dropped
        globs: Glob patterns matched against the full repo-relative path
        commits: SHA prefixes of commits to drop entirely
        git_pathspecs: Globs excluded at ``git log`` time
    """

    paths: tuple[str, ...] = (
        "node_modules/",
        "target/",
        ".shadow-cljs/",
        ".clj-kondo/",
        ".clj-kondo",
    )
    globs: tuple[str, ...] = ()
    commits: tuple[str, ...] = ()
    git_pathspecs: tuple[str, ...] = (".clj-kondo/**", ".clj-kondo")


@dataclass(frozen=True)
class CouplingConfig:
    """Temporal coupling parameters.

    Attributes:
        min_cochange: Pairs sharing fewer commits are dropped from the ranked list
        top_k: Number of hottest files forming the coupling universe (and heatmap)
        top_n: Length of the ranked pair list
    """

    min_cochange: int = 3
    top_k: int = 25
    top_n: int = 100

    def __post_init__(self) -> None:
        if self.min_cochange < 1:
            raise ValueError("min_cochange must be at least 1")
        if self.top_k < 1:
            raise ValueError("top_k must be at least 1")
        if self.top_n < 1:
            raise ValueError("top_n must be at least 1")


@dataclass(frozen=True)
class HotspotConfig:
    # Complexity is computed only for the hottest files
    top_n: int = 200

    def __post_init__(self) -> None:
        if self.top_n < 1:
            raise ValueError("top_n must be at least 1")


@dataclass(frozen=True)
class RiskWeights:
    """Composite risk weights.

    Expected, but not required, to sum to 1.0.
    """

    w_churn: float = 0.45
    w_cc: float = 0.35
    w_ownership: float = 0.20

    def __post_init__(self) -> None:
        for name in ("w_churn", "w_cc", "w_ownership"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")


@dataclass(frozen=True)
class RollupConfig:
    depth: int = 2  # leading directory segments kept

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError("depth must be at least 1")


@dataclass(frozen=True)
class ReportConfig:
    title: str = "Risk Map"
    theme: str = "light"


@dataclass(frozen=True)
class RiskmapConfig:
    """Complete configuration for one run."""

    authors: AuthorsConfig = field(default_factory=AuthorsConfig)
    exclude: ExcludeConfig = field(default_factory=ExcludeConfig)
    coupling: CouplingConfig = field(default_factory=CouplingConfig)
    hotspots: HotspotConfig = field(default_factory=HotspotConfig)
    risk: RiskWeights = field(default_factory=RiskWeights)
    rollup: RollupConfig = field(default_factory=RollupConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["authors"]["aliases"] = dict(self.authors.aliases)
        for key, value in data["exclude"].items():
            data["exclude"][key] = list(value)
        return data


# Constructed once; components get the sections they need passed explicitly
DEFAULT_CONFIG = RiskmapConfig()

# Section name -> attribute of RiskmapConfig. "metrics.*" TOML tables
# map onto the same sections.
_SECTIONS = ("authors", "exclude", "coupling", "hotspots", "risk", "rollup", "report")

# Spellings accepted from older config files
_KEY_ALIASES = {"topk": "top_k", "topn": "top_n"}


def load_config(
    repo: str | Path = ".",
    config_file: Optional[Path] = None,
    **overrides: Any,
) -> RiskmapConfig:
    """Load configuration with project discovery and overrides.

    Args:
        repo: Repository root; ``riskmap.toml`` there is used when present
        config_file: Explicit TOML file; takes the place of the project file
        **overrides: ``section__field=value`` pairs; ``None`` values are ignored

    Returns:
        Validated RiskmapConfig instance

    Raises:
        InvalidPathError: If ``config_file`` does not exist
        InvalidConfigError: If a source holds an unknown or invalid option

    Example:
        >>> cfg = load_config(".", coupling__min_cochange=5)
        >>> cfg.coupling.min_cochange
        5
    """
    config = DEFAULT_CONFIG

    if config_file is not None:
        config_path = Path(config_file)
        if not config_path.is_file():
            raise InvalidPathError(config_path, "config file not found")
    else:
        config_path = Path(repo) / PROJECT_CONFIG_NAME

    if config_path.is_file():
        config = _apply_sections(config, _flatten_sections(_load_toml_file(config_path)))

    config = _apply_sections(config, _load_env_vars())

    sections: dict[str, dict[str, Any]] = {}
    for key, value in overrides.items():
        if value is None:
            continue
        section, sep, name = key.partition("__")
        if not sep:
            raise InvalidConfigError(key, value, "override keys must look like section__field")
        sections.setdefault(section, {})[name] = value
    return _apply_sections(config, sections)


def _flatten_sections(data: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
    """Map parsed TOML onto section tables, unfolding ``[metrics.*]``."""
    sections: dict[str, dict[str, Any]] = {}
    for key, value in data.items():
        if not isinstance(value, Mapping):
            raise InvalidConfigError(key, value, "expected a table")
        if key == "metrics":
            for sub, table in value.items():
                if not isinstance(table, Mapping):
                    raise InvalidConfigError(f"metrics.{sub}", table, "expected a table")
                sections.setdefault(sub, {}).update(table)
        else:
            sections.setdefault(key, {}).update(value)
    return sections


def _apply_sections(
    config: RiskmapConfig, sections: Mapping[str, Mapping[str, Any]]
) -> RiskmapConfig:
    updates = {}
    for section, values in sections.items():
        if section not in _SECTIONS:
            raise InvalidConfigError(section, dict(values), "unknown configuration section")
        updates[section] = _overlay(getattr(config, section), values, section)
    return replace(config, **updates) if updates else config


def _normalize_key(key: str) -> str:
    key = str(key).replace("-", "_")
    return _KEY_ALIASES.get(key.lower(), key)


def _overlay(base: Any, values: Mapping[str, Any], section: str) -> Any:
    """Overlay ``values`` onto one frozen section, field by field."""
    known = {f.name for f in fields(base)}
    updates: dict[str, Any] = {}
    for raw_key, value in values.items():
        key = _normalize_key(raw_key)
        dotted = f"{section}.{raw_key}"
        if key not in known:
            raise InvalidConfigError(dotted, value, "unknown option")
        current = getattr(base, key)
        if isinstance(current, tuple):
            if isinstance(value, str) or not isinstance(value, (list, tuple)):
                raise InvalidConfigError(dotted, value, "expected a list of strings")
            updates[key] = tuple(dict.fromkeys([*current, *(str(v) for v in value)]))
        elif isinstance(current, Mapping):
            if not isinstance(value, Mapping):
                raise InvalidConfigError(dotted, value, "expected a table")
            updates[key] = {**current, **{str(k): str(v) for k, v in value.items()}}
        else:
            updates[key] = _coerce(value, type(current), dotted)
    try:
        return replace(base, **updates)
    except ValueError as e:
        raise InvalidConfigError(section, dict(values), str(e))


def _coerce(value: Any, expected: type, key: str) -> Any:
    if isinstance(value, bool):
        raise InvalidConfigError(key, value, f"expected {expected.__name__}")
    if expected is str:
        return str(value)
    if isinstance(value, str):
        try:
            return expected(value.strip())
        except ValueError:
            raise InvalidConfigError(key, value, f"expected {expected.__name__}")
    if expected is float and isinstance(value, (int, float)):
        return float(value)
    if expected is int and isinstance(value, int):
        return value
    raise InvalidConfigError(key, value, f"expected {expected.__name__}")


def _load_env_vars() -> dict[str, dict[str, Any]]:
    """Collect RISKMAP_<SECTION>_<FIELD> variables for scalar fields.

    e.g. RISKMAP_COUPLING_MIN_COCHANGE=5, RISKMAP_RISK_W_CC=0.4
    """
    result: dict[str, dict[str, Any]] = {}
    for section in _SECTIONS:
        for f in fields(getattr(DEFAULT_CONFIG, section)):
            default = getattr(getattr(DEFAULT_CONFIG, section), f.name)
            if isinstance(default, (tuple, Mapping)):
                continue
            env_key = f"{ENV_PREFIX}{section.upper()}_{f.name.upper()}"
            env_value = os.environ.get(env_key)
            if env_value is None:
                continue
            result.setdefault(section, {})[f.name] = env_value
    return result


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        InvalidConfigError: If the file is not valid TOML
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise InvalidConfigError(str(path), "<file>", f"invalid TOML: {e}")
