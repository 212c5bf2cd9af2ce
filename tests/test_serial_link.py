import pytest

from visionlab.serial_link import SerialLink


@pytest.fixture
def link():
    conn = SerialLink("loop://", 9600)
    conn.open()
    yield conn
    conn.close()


def test_integer_port_names_com_device():
    assert SerialLink(5).port == "COM5"


def test_round_trip(link):
    assert link.send(b"Cd") == 2
    assert link.waiting() == 2
    assert link.read(10) == b"Cd"
    assert link.waiting() == 0


def test_send_text(link):
    assert link.send("s") == 1
    assert link.read(1) == b"s"


def test_read_respects_limit(link):
    link.send(b"abcdef")
    assert link.read(2) == b"ab"
    assert link.waiting() == 4


def test_read_nothing_waiting(link):
    assert link.read(5) == b""


def test_open_twice_keeps_data(link):
    link.send(b"x")
    link.open()
    assert link.read(1) == b"x"


def test_closed_link_is_inert():
    conn = SerialLink("loop://")
    assert conn.send(b"abc") == 0
    assert conn.read(3) == b""
    assert conn.waiting() == 0


def test_context_manager_closes():
    with SerialLink("loop://") as conn:
        assert conn.is_open
        assert conn.send(b"A") == 1
    assert not conn.is_open
    assert conn.send(b"A") == 0