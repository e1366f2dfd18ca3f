"""Tests for AnimatedNumberLabel."""
import pytest

from core.animation.types import NumberAnimationConfig
from widgets.animated_number_label import AnimatedNumberLabel, default_render


@pytest.fixture
def make_label(qt_app, qtbot, manual_scheduler):
    def _make(value=90, **kwargs):
        kwargs.setdefault("scheduler", manual_scheduler)
        label = AnimatedNumberLabel(value, **kwargs)
        qtbot.addWidget(label)
        return label

    return _make


@pytest.mark.parametrize("value,expected", [
    (0.0, "0"),
    (90.0, "90"),
    (-3.0, "-3"),
    (2.5, "2.5"),
    ("12%", "12%"),
    (7, "7"),
])
def test_default_render(value, expected):
    assert default_render(value) == expected


def test_label_starts_at_initial_value(make_label, manual_scheduler):
    label = make_label(90)

    assert label.text() == "0"
    assert label.value() == 90
    assert label.current_value() == 0
    assert label.is_animating()
    assert len(manual_scheduler.pending) == 1


def test_label_counts_to_value(make_label, manual_scheduler):
    label = make_label(90, config=NumberAnimationConfig(steps=45))
    finished = []
    label.animation_finished.connect(lambda: finished.append(True))

    manual_scheduler.fire_next()
    assert label.text() == "2"

    manual_scheduler.run_until_idle()
    assert label.text() == "90"
    assert finished == [True]
    assert not label.is_animating()


def test_label_with_initial_value(make_label, manual_scheduler):
    label = make_label(0, initial=10, config=NumberAnimationConfig(count_by=4))
    assert label.text() == "10"

    texts = []
    label.driver.value_changed.connect(lambda _: texts.append(label.text()))
    manual_scheduler.run_until_idle()

    assert texts == ["6", "2", "0"]


def test_formatter_and_render_content(make_label, manual_scheduler):
    label = make_label(
        1,
        config=NumberAnimationConfig(steps=4),
        formatter=lambda v: round(v * 100),
        render_content=lambda v: f"{v}%",
    )
    assert label.text() == "0%"

    manual_scheduler.fire_next()
    assert label.text() == "25%"
    manual_scheduler.run_until_idle()
    assert label.text() == "100%"


def test_set_value_retargets_from_current(make_label, manual_scheduler):
    label = make_label(90, config=NumberAnimationConfig(steps=45))
    for _ in range(20):
        manual_scheduler.fire_next()
    assert label.text() == "40"

    label.set_value(20)

    assert label.value() == 20
    assert label.driver.engine.start_value == 40
    manual_scheduler.run_until_idle()
    assert label.text() == "20"


def test_set_value_same_target_keeps_run(make_label, manual_scheduler):
    label = make_label(90)
    manual_scheduler.fire_next()
    run_id = label.driver.engine.run_id

    label.set_value(90)

    assert label.driver.engine.run_id == run_id
    assert len(manual_scheduler.handles) == 2


def test_progress_and_finish_callbacks(make_label, manual_scheduler):
    progress = []
    finished = []
    label = make_label(
        10,
        config=NumberAnimationConfig(count_by=5),
        on_progress=lambda old, new: progress.append((old, new)),
        on_finish=lambda: finished.append(True),
    )
    manual_scheduler.run_until_idle()

    assert progress == [(0, 5), (5, 10)]
    assert finished == [True]
    assert label.text() == "10"


def test_cleanup_stops_animation(make_label, manual_scheduler):
    label = make_label(90)
    manual_scheduler.fire_next()

    label.cleanup()

    assert not label.is_animating()
    assert manual_scheduler.pending == []
    assert label.text() == "2"


def test_close_cancels_pending_step(make_label, manual_scheduler):
    label = make_label(90)
    label.show()

    label.close()

    assert manual_scheduler.pending == []
    assert not label.is_animating()


@pytest.mark.timeout(10)
def test_label_on_qt_timers(qt_app, qtbot):
    label = AnimatedNumberLabel(5, config=NumberAnimationConfig(interval=1, steps=5))
    qtbot.addWidget(label)

    with qtbot.waitSignal(label.animation_finished, timeout=5000):
        pass

    assert label.text() == "5"
