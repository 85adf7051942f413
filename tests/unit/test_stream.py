import threading

import pytest
from watchdog.events import FileClosedEvent

from domains.screenshot_sort.stream import EventStream, ShutdownSentinel, StreamClosed, StreamError


def test_items_arrive_in_order():
    stream = EventStream()
    first = FileClosedEvent("/shots/a.png")
    second = FileClosedEvent("/shots/b.png")
    sentinel = ShutdownSentinel("SIGINT")

    for item in (first, second, sentinel):
        assert stream.send(item)

    assert stream.receive() is first
    assert stream.receive() is second
    assert stream.receive() is sentinel


def test_sentinel_is_an_error_item():
    sentinel = ShutdownSentinel("SIGTERM")

    assert isinstance(sentinel, StreamError)
    assert sentinel.signal_name == "SIGTERM"


def test_close_drains_then_raises_for_every_receive():
    stream = EventStream()
    event = FileClosedEvent("/shots/a.png")
    stream.send(event)
    stream.close()

    assert stream.closed
    assert stream.send(FileClosedEvent("/shots/late.png")) is False
    assert stream.receive() is event
    with pytest.raises(StreamClosed):
        stream.receive()
    with pytest.raises(StreamClosed):
        stream.receive()


def test_receive_blocks_until_another_thread_sends():
    stream = EventStream()
    received = []

    consumer = threading.Thread(target=lambda: received.append(stream.receive()))
    consumer.start()
    stream.send(ShutdownSentinel("SIGINT"))
    consumer.join(timeout=5)

    assert not consumer.is_alive()
    assert isinstance(received[0], ShutdownSentinel)
