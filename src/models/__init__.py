"""
Models package - Data models for GPIO buttons
"""

from .enums import (
    GestureState,
    LogicalLevel,
    ButtonGesture,
    TimerPurpose,
    GPIOPullMode,
    GPIOEdge,
    PinNumbering,
    LogLevel,
    LogCategory,
)
from .button_state import ButtonState, PendingTimer
from .config import TimingConfig, ButtonsConfig, LoggingConfig, AppConfig
from .errors import ButtonError, PinConfigurationError, PinReadError, TeardownError

__all__ = [
    'GestureState',
    'LogicalLevel',
    'ButtonGesture',
    'TimerPurpose',
    'GPIOPullMode',
    'GPIOEdge',
    'PinNumbering',
    'LogLevel',
    'LogCategory',
    'ButtonState',
    'PendingTimer',
    'TimingConfig',
    'ButtonsConfig',
    'LoggingConfig',
    'AppConfig',
    'ButtonError',
    'PinConfigurationError',
    'PinReadError',
    'TeardownError',
]
