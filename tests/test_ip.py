import pytest

from sniblock.ip import Ip


def test_constructors_agree():
    assert Ip(0x7F000001) == Ip("127.0.0.1")
    assert Ip(Ip("127.0.0.1")) == Ip("127.0.0.1")


def test_integer_cast():
    assert int(Ip("127.0.0.1")) == 0x7F000001


def test_string_cast():
    assert str(Ip("127.0.0.1")) == "127.0.0.1"


@pytest.mark.parametrize("text", ["0.0.0.0", "10.1.2.3", "192.168.0.1", "255.255.255.255"])
def test_string_round_trip(text):
    assert str(Ip(text)) == text
    assert Ip(int(Ip(text))) == Ip(text)


def test_local_host():
    assert Ip("127.0.0.1").is_local_host()
    assert Ip("127.255.0.9").is_local_host()
    assert not Ip("10.0.0.1").is_local_host()


def test_broadcast():
    assert Ip("255.255.255.255").is_broadcast()
    assert not Ip("255.255.255.254").is_broadcast()


@pytest.mark.parametrize(
    "text, expected",
    [
        ("224.0.0.1", True),
        ("239.255.255.255", True),
        ("240.0.0.0", False),
        ("223.255.255.255", False),
    ],
)
def test_multicast(text, expected):
    assert Ip(text).is_multicast() is expected


def test_ordering_and_hash():
    low, high = Ip("10.0.0.1"), Ip("10.0.0.2")
    assert low < high
    assert len({low, high, Ip("10.0.0.1")}) == 2


@pytest.mark.parametrize("text", ["1.2.3", "256.0.0.1", "a.b.c.d", "1.2.3.4.5", ""])
def test_bad_text_rejected(text):
    with pytest.raises(ValueError):
        Ip(text)


@pytest.mark.parametrize("number", [-1, 2**32])
def test_out_of_range_rejected(number):
    with pytest.raises(ValueError):
        Ip(number)


def test_wrong_type_rejected():
    with pytest.raises(TypeError):
        Ip(1.5)