"""
Persistent animation settings.

Uses QSettings for storage under the ``animation/`` group. Values read back
from QSettings may be strings (INI and registry backends), so every key is
coerced before a NumberAnimationConfig is built.
"""
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, QSettings, Signal

from core.animation.errors import ConfigurationError
from core.animation.timing import resolve_timing
from core.animation.types import NumberAnimationConfig, TimingCurve
from core.logging.logger import get_logger, is_verbose_logging

logger = get_logger('AnimationSettings')

GROUP = "animation"
KEY_INTERVAL = f"{GROUP}/interval"
KEY_STEPS = f"{GROUP}/steps"
KEY_COUNT_BY = f"{GROUP}/count_by"
KEY_TIMING = f"{GROUP}/timing"
KEY_START_DELAY = f"{GROUP}/start_delay"


class AnimationSettings(QObject):
    """
    QSettings-backed store for NumberAnimationConfig.

    Custom timing functions cannot be persisted; they are stored as
    ``linear``.
    """

    # Emitted after save()/reset() with the stored config
    settings_changed = Signal(object)

    def __init__(self, organization: str = "AnimatedNumber",
                 application: str = "AnimatedNumber",
                 settings: Optional[QSettings] = None):
        """
        Initialize the settings store.

        Args:
            organization: Organization name for QSettings
            application: Application name for QSettings
            settings: Existing QSettings instance (tests use an INI file)
        """
        super().__init__()
        self._settings = settings if settings is not None else QSettings(organization, application)

    def load(self) -> NumberAnimationConfig:
        """
        Read the stored configuration.

        Unreadable keys fall back to their defaults; a stored combination
        that fails validation falls back to the default config.
        """
        defaults = NumberAnimationConfig()
        values = {
            "interval": self._read(KEY_INTERVAL, float, defaults.interval),
            "steps": self._read(KEY_STEPS, int, defaults.steps),
            "count_by": self._read(KEY_COUNT_BY, _optional_float, defaults.count_by),
            "timing": self._read(KEY_TIMING, str, defaults.timing),
            "start_delay": self._read(KEY_START_DELAY, float, defaults.start_delay),
        }
        if is_verbose_logging():
            logger.debug("Loaded animation settings: %r", values)
        try:
            return NumberAnimationConfig(**values)
        except ConfigurationError as e:
            logger.warning("Stored animation settings are invalid (%s); using defaults", e)
            return defaults

    def save(self, config: NumberAnimationConfig) -> None:
        """Persist ``config`` and emit settings_changed."""
        curve, _ = resolve_timing(config.timing)
        if curve == TimingCurve.CUSTOM:
            logger.warning("Custom timing function cannot be stored; saving 'linear'")
            curve = TimingCurve.LINEAR

        self._settings.setValue(KEY_INTERVAL, config.interval)
        self._settings.setValue(KEY_STEPS, config.steps)
        if config.count_by is None:
            self._settings.remove(KEY_COUNT_BY)
        else:
            self._settings.setValue(KEY_COUNT_BY, config.count_by)
        self._settings.setValue(KEY_TIMING, curve.value)
        self._settings.setValue(KEY_START_DELAY, config.start_delay)
        self._settings.sync()

        logger.debug("Animation settings saved")
        self.settings_changed.emit(self.load())

    def reset(self) -> None:
        """Remove all stored animation settings."""
        self._settings.remove(GROUP)
        self._settings.sync()
        logger.debug("Animation settings reset to defaults")
        self.settings_changed.emit(NumberAnimationConfig())

    def _read(self, key: str, convert: Callable[[Any], Any], default: Any) -> Any:
        raw = self._settings.value(key, None)
        if raw is None:
            return default
        try:
            return convert(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring unreadable setting %s=%r", key, raw)
            return default


def _optional_float(value: Any) -> Optional[float]:
    if isinstance(value, str) and not value.strip():
        return None
    return float(value)
