"""
Button Configuration Models

Typed containers mirroring the `buttons:` section of buttons.yaml.
ConfigManager parses the YAML dict into these; values are validated
on construction.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any

from models.enums import GPIOPullMode, PinNumbering, LogLevel


DEFAULT_DEBOUNCE_MS = 30
DEFAULT_PRESSED_MS = 200
DEFAULT_CLICKED_MS = 200


# ============================================================
#  Timing
# ============================================================

@dataclass(frozen=True)
class TimingConfig:
    """
    Gesture timing windows (milliseconds)

    debounce_ms: settling window for raw edges
    pressed_ms: hold longer than this = long press ("pressed")
    clicked_ms: second press within this after release = double click
    """
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    pressed_ms: int = DEFAULT_PRESSED_MS
    clicked_ms: int = DEFAULT_CLICKED_MS

    def __post_init__(self):
        for name in ("debounce_ms", "pressed_ms", "clicked_ms"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"TimingConfig.{name} must be an integer (got {value!r})")
            if value <= 0:
                raise ValueError(f"TimingConfig.{name} must be > 0 (got {value})")

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ============================================================
#  Buttons
# ============================================================

@dataclass(frozen=True)
class ButtonsConfig:
    """All button pins handled by one ButtonRegistry"""
    pins: List[int] = field(default_factory=list)
    pull_mode: GPIOPullMode = GPIOPullMode.PULL_UP
    numbering: PinNumbering = PinNumbering.BCM
    timing: TimingConfig = field(default_factory=TimingConfig)

    def __post_init__(self):
        seen = set()
        for pin in self.pins:
            if isinstance(pin, bool) or not isinstance(pin, int) or pin < 0:
                raise ValueError(f"ButtonsConfig.pins must be non-negative integers (got {pin!r})")
            if pin in seen:
                raise ValueError(f"ButtonsConfig.pins contains duplicate pin {pin}")
            seen.add(pin)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "pins": list(self.pins),
            "pull_mode": self.pull_mode.name,
            "numbering": self.numbering.name,
            "timing": self.timing.as_dict(),
        }


# ============================================================
#  Logging
# ============================================================

@dataclass(frozen=True)
class LoggingConfig:
    level: LogLevel = LogLevel.INFO
    colors: bool = True


@dataclass(frozen=True)
class AppConfig:
    """Root model for buttons.yaml"""
    buttons: ButtonsConfig = field(default_factory=ButtonsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
