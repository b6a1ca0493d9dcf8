import pytest

from hidremap.bt_led import (
    BLINK_OFF_MS,
    BLINK_ON_MS,
    BLINK_PAUSE_MS,
    CLEAR_BONDS_BUTTON_PRESS_MS,
    ButtonAction,
    LedBlinker,
    LedMode,
    LedStep,
    button_action,
)


def test_set_mode_reports_change():
    led = LedBlinker()
    assert led.set_mode(LedMode.BLINK) is True
    assert led.set_mode(LedMode.BLINK) is False
    assert led.set_mode(LedMode.ON) is True
    assert led.mode is LedMode.ON


def test_set_mode_rejects_unknown():
    with pytest.raises(ValueError):
        LedBlinker().set_mode(7)


def test_off_and_on_do_not_reschedule():
    written = []
    led = LedBlinker(written.append)
    assert led.step() == LedStep(False, None)
    led.set_mode(LedMode.ON)
    assert led.step() == LedStep(True, None)
    assert written == [False, True]


def test_blink_sequence_matches_connection_count():
    written = []
    led = LedBlinker(written.append)
    led.blink_count = 2
    led.set_mode(LedMode.BLINK)
    steps = [led.step() for _ in range(6)]
    assert steps == [
        LedStep(False, BLINK_PAUSE_MS),
        LedStep(True, BLINK_ON_MS),
        LedStep(False, BLINK_OFF_MS),
        LedStep(True, BLINK_ON_MS),
        LedStep(False, BLINK_OFF_MS),
        LedStep(False, BLINK_PAUSE_MS),
    ]
    assert written == [step.lit for step in steps]


def test_blink_with_no_connections_stays_dark():
    led = LedBlinker()
    led.set_mode(LedMode.BLINK)
    steps = [led.step() for _ in range(3)]
    assert all(not step.lit for step in steps)
    assert all(step.next_ms == BLINK_PAUSE_MS for step in steps)


def test_button_action_threshold():
    assert button_action(0) is ButtonAction.PAIR_NEW_DEVICE
    assert button_action(CLEAR_BONDS_BUTTON_PRESS_MS) is ButtonAction.PAIR_NEW_DEVICE
    assert button_action(CLEAR_BONDS_BUTTON_PRESS_MS + 1) is ButtonAction.CLEAR_BONDS