from unittest import mock

from activities.utilities import network


def test_planner_urls_with_lan_address():
    urls = network.planner_urls(8000, local_ip="192.168.1.20")
    assert urls == {"local": "http://localhost:8000", "lan": "http://192.168.1.20:8000"}


def test_planner_urls_offline():
    assert network.planner_urls(8000, local_ip="127.0.0.1")["lan"] is None


def test_get_local_ip_falls_back_to_loopback():
    with mock.patch("socket.socket.connect", side_effect=OSError("network unreachable")):
        assert network.get_local_ip() == network.LOOPBACK
