"""Structured profiler configuration backed by OmegaConf."""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from tickprof.core.exceptions import ConfigurationError


@dataclass
class DurationsConfig:
    stream: int = 10
    email: int = 100
    profile: int = 100
    callgrind: int = 100


@dataclass
class SessionConfig:
    durations: DurationsConfig = field(default_factory=DurationsConfig)


@dataclass
class ReportConfig:
    # Number of top-level functions shown by output().
    limit: int = 20
    # Character budget of output(); null disables it.
    max_chars: Optional[int] = 1000


@dataclass
class CyclesConfig:
    start: int = 0
    auto_advance: bool = True


@dataclass
class InstrumentConfig:
    # Extra member names that register_object/register_class never wrap.
    blacklist: List[str] = field(default_factory=list)


@dataclass
class ProfilerConfig:
    enabled: bool = False
    # "package.module" or "package.module:Attribute" paths registered on enable().
    targets: List[str] = field(default_factory=list)
    session: SessionConfig = field(default_factory=SessionConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    cycles: CyclesConfig = field(default_factory=CyclesConfig)
    instrument: InstrumentConfig = field(default_factory=InstrumentConfig)


ConfigOverrides = Union[DictConfig, Mapping[str, Any], None]


def load_profiler_config(overrides: ConfigOverrides = None) -> DictConfig:
    """Merge user overrides onto the structured defaults and validate them."""

    schema = OmegaConf.structured(ProfilerConfig)
    try:
        cfg = OmegaConf.merge(schema, overrides) if overrides is not None else schema
    except OmegaConfBaseException as exc:
        raise ConfigurationError(f"Invalid profiler configuration: {exc}") from exc
    validate_profiler_config(cfg)
    return cfg  # type: ignore[return-value]


def validate_profiler_config(cfg: DictConfig) -> None:
    for name, value in cfg.session.durations.items():
        if int(value) < 1:
            raise ConfigurationError(
                f"session.durations.{name} must be a positive number of ticks, got {value}."
            )
    if int(cfg.report.limit) < 1:
        raise ConfigurationError(f"report.limit must be positive, got {cfg.report.limit}.")
    max_chars = cfg.report.max_chars
    if max_chars is not None and int(max_chars) < 1:
        raise ConfigurationError(f"report.max_chars must be positive or null, got {max_chars}.")


def default_duration(cfg: DictConfig, session_type: str) -> Optional[int]:
    """Default window length for a session type; None means unbounded."""

    durations = cfg.session.durations
    if session_type not in durations:
        return None
    return int(durations[session_type])
