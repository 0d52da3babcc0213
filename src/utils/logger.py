from datetime import datetime
from typing import Optional
from models.enums import LogLevel, LogCategory


# === ANSI COLORS ===
class Colors:
    RESET = '\033[0m'
    DIM = '\033[2m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'


CATEGORY_COLORS = {
    LogCategory.CONFIG: Colors.CYAN,
    LogCategory.HARDWARE: Colors.BRIGHT_BLUE,
    LogCategory.BUTTON: Colors.BRIGHT_CYAN,
    LogCategory.GESTURE: Colors.BRIGHT_GREEN,
    LogCategory.TIMER: Colors.BRIGHT_YELLOW,
    LogCategory.EVENT: Colors.BRIGHT_MAGENTA,
    LogCategory.SYSTEM: Colors.BRIGHT_WHITE,
    LogCategory.SHUTDOWN: Colors.MAGENTA,
    LogCategory.TASK: Colors.BLUE,
}

LEVEL_STYLE = {
    # level: (symbol, color, priority)
    LogLevel.DEBUG: ('·', Colors.DIM, 0),
    LogLevel.INFO: ('✓', Colors.GREEN, 1),
    LogLevel.WARN: ('⚠', Colors.YELLOW, 2),
    LogLevel.ERROR: ('✗', Colors.RED, 3),
}

DETAIL_INDENT = " " * 11


# === CORE LOGGER ===
class Logger:
    """
    Structured logger with compact output format

    [HH:MM:SS] CATEGORY  ✓ Message
               ├─ key: value
               └─ key: value

    Example:
        get_logger().info(LogCategory.GESTURE, "Gesture", pin=17, gesture="clicked")

        [14:23:45] GESTURE   ✓ Gesture
                   ├─ pin: 17
                   └─ gesture: clicked
    """

    def __init__(self, min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
        self.min_level = min_level
        self.use_colors = use_colors

    def _should_log(self, level: LogLevel) -> bool:
        return LEVEL_STYLE[level][2] >= LEVEL_STYLE[self.min_level][2]

    def _colorize(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{Colors.RESET}"

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        **kwargs
    ):
        """
        Print one message plus an optional detail tree

        Args:
            category: Log category (BUTTON, GESTURE, ...)
            message: Main message text
            level: DEBUG, INFO, WARN or ERROR
            details: Extra detail lines
            **kwargs: Shown as "key: value" detail lines
        """
        if not self._should_log(level):
            return

        symbol, color, _ = LEVEL_STYLE[level]
        timestamp = datetime.now().strftime('[%H:%M:%S]')
        cat = self._colorize(category.name.ljust(9), CATEGORY_COLORS.get(category, Colors.WHITE))

        print(f"{timestamp} {cat} {self._colorize(symbol, color)} {self._colorize(message, color)}")

        lines = list(details or []) + [f"{k}: {v}" for k, v in kwargs.items()]
        for i, line in enumerate(lines):
            branch = "└─" if i == len(lines) - 1 else "├─"
            print(f"{DETAIL_INDENT}{self._colorize(branch, Colors.DIM)} {line}")

    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self, category)


class BoundLogger:
    """Logger bound to a default category"""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self._category = category

    def log(self, message: str, level: LogLevel = LogLevel.INFO, category: Optional[LogCategory] = None, **kw):
        self._base.log(category or self._category, message, level, **kw)

    def debug(self, message: str, **kw): self.log(message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self.log(message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self.log(message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self.log(message, LogLevel.ERROR, **kw)

    def with_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self._base, category)


# === Global instance ===
_logger = Logger()

def get_logger() -> Logger:
    return _logger

def get_category_logger(category: LogCategory) -> BoundLogger:
    return _logger.for_category(category)

def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
    """
    Reconfigure the singleton in place so bound loggers created at import
    time pick up the new settings.
    """
    _logger.min_level = min_level
    _logger.use_colors = use_colors
