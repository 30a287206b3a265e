from swimschool.services.confirm import ConfirmGate

def test_second_click_inside_window_confirms(clock):
    gate = ConfirmGate(window_seconds=3, clock=clock)
    key = ("admin-1", "enr-1", "PAID")

    assert gate.request(key) is False
    clock.advance(2.9)
    assert gate.request(key) is True
    # a intenção foi consumida
    assert gate.pending(key) is False

def test_intent_expires_after_window(clock):
    gate = ConfirmGate(window_seconds=3, clock=clock)
    key = ("admin-1", "enr-1", "PAID")

    gate.request(key)
    clock.advance(3.1)
    assert gate.pending(key) is False
    assert gate.request(key) is False
    assert gate.request(key) is True

def test_keys_are_independent(clock):
    gate = ConfirmGate(window_seconds=3, clock=clock)
    gate.request(("admin-1", "enr-1", "PAID"))

    assert gate.request(("admin-2", "enr-1", "PAID")) is False
    assert gate.request(("admin-1", "enr-1", "REJECTED")) is False
    assert gate.request(("admin-1", "enr-1", "PAID")) is True

def test_cancel_discards_intent(clock):
    gate = ConfirmGate(window_seconds=3, clock=clock)
    key = ("admin-1", "enr-1", "PAID")
    gate.request(key)
    gate.cancel(key)
    assert gate.request(key) is False
