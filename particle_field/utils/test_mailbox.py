import threading

import pytest

from particle_field.utils import Coords, LatestValue, clamp, lerp, map_range


def test_default_until_published():
    mailbox = LatestValue(default=())
    assert mailbox.latest() == ()
    assert mailbox.version == 0


def test_last_write_wins():
    mailbox = LatestValue()
    mailbox.publish("first")
    mailbox.publish("second")

    assert mailbox.latest() == "second"
    assert mailbox.snapshot() == ("second", 2)


def test_reads_do_not_consume():
    mailbox = LatestValue()
    mailbox.publish(42)

    assert mailbox.latest() == 42
    assert mailbox.latest() == 42
    assert mailbox.version == 1


def test_concurrent_publishers_and_reader():
    mailbox = LatestValue(default=0)
    seen = []

    def publish(offset):
        for i in range(1000):
            mailbox.publish(offset + i)

    def read():
        for _ in range(1000):
            seen.append(mailbox.latest())

    threads = [threading.Thread(target=publish, args=(k * 1000,)) for k in range(2)]
    threads.append(threading.Thread(target=read))
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert mailbox.version == 2000
    assert all(isinstance(v, int) for v in seen)


def test_scalar_helpers():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert lerp(10, 20, 0.1) == 11
    assert map_range(10, 0, 20, 0, 100) == 50
    assert map_range(50, 0, 100, 50, 30) == 40


def test_coords_helpers():
    a = Coords(0.2, 0.4)
    b = Coords(0.4, 0.8)

    mid = a.midpoint(b)
    assert mid.x == pytest.approx(0.3)
    assert mid.y == pytest.approx(0.6)
    assert Coords(3, 4).length() == 5
    assert Coords(0.5, 0.25).scaled(640, 480) == Coords(320, 120)
    assert Coords(100, 50).mirrored(640) == Coords(540, 50)
