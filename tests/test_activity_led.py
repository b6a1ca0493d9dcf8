from hidremap.activity_led import LED_ON_DURATION_US, ActivityLed


def make_led():
    writes = []
    return ActivityLed(writes.append), writes


def test_on_writes_true():
    led, writes = make_led()
    led.on(1000)
    assert writes == [True]
    assert led.lit


def test_stays_on_until_duration_passes():
    led, writes = make_led()
    led.on(1000)
    assert led.off_maybe(1000 + LED_ON_DURATION_US) is False
    assert led.lit
    assert writes == [True]


def test_turns_off_after_duration():
    led, writes = make_led()
    led.on(1000)
    assert led.off_maybe(1000 + LED_ON_DURATION_US + 1) is True
    assert not led.lit
    assert writes == [True, False]


def test_off_only_once():
    led, writes = make_led()
    led.on(0)
    led.off_maybe(LED_ON_DURATION_US + 1)
    assert led.off_maybe(LED_ON_DURATION_US + 100) is False
    assert writes == [True, False]


def test_retrigger_extends():
    led, writes = make_led()
    led.on(0)
    led.on(40000)
    assert led.off_maybe(LED_ON_DURATION_US + 1) is False
    assert led.off_maybe(40000 + LED_ON_DURATION_US + 1) is True
    assert writes == [True, True, False]


def test_off_maybe_when_never_lit():
    led, writes = make_led()
    assert led.off_maybe(10**9) is False
    assert writes == []


def test_default_writer():
    led = ActivityLed()
    led.on(5)
    assert led.lit
    assert led.off_maybe(5 + LED_ON_DURATION_US + 1) is True
    assert not led.lit