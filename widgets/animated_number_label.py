"""Label widget that counts towards its value.

The label owns a NumberAnimationDriver. Constructing the label starts a run
from ``initial`` to ``value``; every later ``set_value()`` with a different
target starts a new run from whatever number is currently displayed.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

from PySide6.QtCore import Signal
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QLabel, QWidget

from core.animation.driver import NumberAnimationDriver, Scheduler
from core.animation.types import (
    FinishCallback,
    Formatter,
    NumberAnimationConfig,
    ProgressCallback,
)
from core.logging.logger import get_logger

logger = get_logger(__name__)


def default_render(value: Any) -> str:
    """Render a displayed value as label text; integral floats lose the ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class AnimatedNumberLabel(QLabel):
    """QLabel showing an animated number."""

    # Forwarded from the driver
    animation_finished = Signal()

    def __init__(
        self,
        value: Any = 0,
        *,
        initial: Any = None,
        config: Optional[NumberAnimationConfig] = None,
        formatter: Optional[Formatter] = None,
        render_content: Optional[Callable[[Any], str]] = None,
        on_progress: Optional[ProgressCallback] = None,
        on_finish: Optional[FinishCallback] = None,
        scheduler: Optional[Scheduler] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._render_content = render_content or default_render

        self._driver = NumberAnimationDriver(
            config,
            formatter=formatter,
            on_progress=on_progress,
            on_finish=on_finish,
            initial=initial,
            scheduler=scheduler,
            parent=self,
        )
        self._driver.value_changed.connect(self._render)
        self._driver.finished.connect(self.animation_finished)

        self._render(self._driver.engine.display_value)
        self._driver.animate_to(value)

    @property
    def driver(self) -> NumberAnimationDriver:
        return self._driver

    def value(self) -> float:
        """Target value of the current run."""
        return self._driver.engine.target_value

    def current_value(self) -> float:
        """Number currently displayed (before formatting)."""
        return self._driver.engine.current_value

    def set_value(self, value: Any) -> None:
        """Animate towards ``value`` if it differs from the current target."""
        run_id = self._driver.set_value(value)
        if run_id is not None:
            logger.debug("[ANIM] Label retargeted to %s (run %d)", value, run_id)

    def is_animating(self) -> bool:
        return self._driver.is_running()

    def cleanup(self) -> None:
        """Cancel any pending step; call before discarding the label."""
        self._driver.cleanup()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.cleanup()
        super().closeEvent(event)

    def _render(self, display_value: Any) -> None:
        self.setText(self._render_content(display_value))
