import logging

from hyperray.core.signal import SignalBridge


def test_connect_and_emit():
    bridge = SignalBridge()
    got = []
    bridge.connect("ping", lambda *args: got.append(args))
    bridge.emit("ping", 1, 2)
    assert got == [(1, 2)]


def test_disconnect():
    bridge = SignalBridge()
    got = []
    conn = bridge.connect("ping", got.append)
    conn.disconnect()
    bridge.emit("ping", 1)
    assert got == []
    assert not conn.connected
    assert bridge.handler_count("ping") == 0


def test_disconnect_during_emit():
    bridge = SignalBridge()
    got = []
    conns = []

    def once(value):
        got.append(value)
        conns[0].disconnect()

    conns.append(bridge.connect("ping", once))
    bridge.emit("ping", 1)
    bridge.emit("ping", 2)
    assert got == [1]


def test_failing_handler_is_logged(caplog):
    bridge = SignalBridge()
    got = []

    def broken(value):
        raise RuntimeError("boom")

    bridge.connect("ping", broken)
    bridge.connect("ping", got.append)
    with caplog.at_level(logging.ERROR, logger="hyperray.core.signal"):
        bridge.emit("ping", 7)
    assert got == [7]
    assert "ping" in caplog.text

