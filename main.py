"""
AnimatedNumber - Demo Entry Point

Opens a small window with an animated number label. Clicking the button
re-targets the label to a random value.

Usage:
    python main.py [--debug|-d] [--verbose|-v] [--from N] [--to N]
                   [--steps N] [--count-by N] [--interval MS]
                   [--timing linear|easeOut|easeIn] [--start-delay MS]
                   [--save]

Options not given on the command line come from the stored settings.
"""
import random
import sys
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QApplication, QPushButton, QVBoxLayout, QWidget

from core.animation.errors import AnimationError, coerce_number
from core.animation.types import NumberAnimationConfig
from core.logging.logger import get_logger, setup_logging
from core.settings.animation_settings import AnimationSettings
from versioning import APP_NAME, APP_VERSION
from widgets.animated_number_label import AnimatedNumberLabel

logger = get_logger(__name__)

# flag -> (config field, converter)
_CONFIG_FLAGS = {
    '--steps': ('steps', int),
    '--count-by': ('count_by', float),
    '--interval': ('interval', float),
    '--timing': ('timing', str),
    '--start-delay': ('start_delay', float),
}
_BOOL_FLAGS = ('--debug', '-d', '--verbose', '-v', '--save')


def parse_demo_args(argv: List[str]) -> Tuple[Dict[str, Any], Optional[float], float]:
    """
    Parse demo command-line arguments.

    Returns:
        tuple: (config overrides, start value or None, target value)

    Raises:
        ValueError: On unknown flags, missing or non-numeric values
    """
    overrides: Dict[str, Any] = {}
    start: Optional[float] = None
    target = 1000.0

    args = [arg for arg in argv if arg not in _BOOL_FLAGS]
    i = 0
    while i < len(args):
        flag = args[i]
        if flag not in _CONFIG_FLAGS and flag not in ('--from', '--to'):
            raise ValueError(f"Unknown argument: {flag}")
        if i + 1 >= len(args):
            raise ValueError(f"Missing value for {flag}")
        raw = args[i + 1]
        if flag == '--from':
            start = coerce_number(raw, "--from")
        elif flag == '--to':
            target = coerce_number(raw, "--to")
        else:
            name, convert = _CONFIG_FLAGS[flag]
            try:
                overrides[name] = convert(raw)
            except ValueError:
                raise ValueError(f"Invalid value for {flag}: {raw!r}") from None
        i += 2

    return overrides, start, target


class DemoWindow(QWidget):
    """Window hosting one AnimatedNumberLabel and a re-target button."""

    def __init__(self, config: NumberAnimationConfig, start: Optional[float], target: float):
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} {APP_VERSION}")

        self.label = AnimatedNumberLabel(
            target,
            initial=start,
            config=config,
            formatter=lambda v: round(v, 2),
            on_finish=lambda: logger.info("Animation finished at %s", self.label.current_value()),
            parent=self,
        )
        font = QFont()
        font.setPointSize(48)
        self.label.setFont(font)

        button = QPushButton("Random target", self)
        button.clicked.connect(self._randomise)

        layout = QVBoxLayout(self)
        layout.addWidget(self.label)
        layout.addWidget(button)
        self.resize(360, 180)

    def _randomise(self) -> None:
        target = random.randint(-1000, 10000)
        logger.info("Re-targeting to %d", target)
        self.label.set_value(target)

    def closeEvent(self, event):
        self.label.cleanup()
        super().closeEvent(event)


def main():
    """Main entry point for the demo."""
    debug_mode = '--debug' in sys.argv or '-d' in sys.argv
    verbose_mode = '--verbose' in sys.argv or '-v' in sys.argv
    save_mode = '--save' in sys.argv
    setup_logging(debug=debug_mode, verbose=verbose_mode)

    logger.info("=" * 60)
    logger.info("%s %s Starting", APP_NAME, APP_VERSION)
    logger.info("=" * 60)

    try:
        overrides, start, target = parse_demo_args(sys.argv[1:])
    except ValueError as e:
        logger.error("%s", e)
        print(__doc__)
        return 2

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)

    settings = AnimationSettings()
    try:
        config = replace(settings.load(), **overrides)
    except AnimationError as e:
        logger.error("Invalid animation options: %s", e)
        return 2

    if save_mode:
        settings.save(config)

    logger.debug("Demo config: %r (from=%s, to=%s)", config, start, target)
    window = DemoWindow(config, start, target)
    window.show()
    exit_code = app.exec()

    logger.info("%s Exiting (code=%s)", APP_NAME, exit_code)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
