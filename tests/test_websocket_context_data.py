import pytest

from microws.topic_tree import TopicTree
from microws.websocket_context_data import WebSocketContextData


def test_small_timeout_uses_smallest_margin():
    data = WebSocketContextData()
    assert data.calculate_idle_timeout_components(10) == (10, 4)
    assert data.idle_timeout_components == (10, 4)


def test_large_timeout_caps_margin():
    data = WebSocketContextData()
    idle, margin = data.calculate_idle_timeout_components(960)
    assert margin == 16
    assert idle == 960


@pytest.mark.parametrize("idle_timeout", range(8, 300, 7))
def test_margin_is_one_of_allowed_values(idle_timeout):
    data = WebSocketContextData()
    _, margin = data.calculate_idle_timeout_components(idle_timeout)
    assert margin in (4, 8, 16)
    assert margin * 2 <= max(idle_timeout, 8)


def test_margin_grows_with_timeout():
    data = WebSocketContextData()
    margins = [data.calculate_idle_timeout_components(t)[1] for t in range(8, 200)]
    assert margins == sorted(margins)


@pytest.mark.parametrize("idle_timeout", [10, 24, 32, 120, 600])
def test_pings_reduce_idle_part_by_margin(idle_timeout):
    plain = WebSocketContextData()
    pinging = WebSocketContextData(send_pings_automatically=True)
    idle_plain, margin_plain = plain.calculate_idle_timeout_components(idle_timeout)
    idle_ping, margin_ping = pinging.calculate_idle_timeout_components(idle_timeout)
    assert margin_plain == margin_ping
    assert idle_plain == idle_timeout
    assert idle_ping == idle_timeout - margin_ping


def test_rejects_out_of_range_timeout():
    data = WebSocketContextData()
    with pytest.raises(ValueError):
        data.calculate_idle_timeout_components(-1)
    with pytest.raises(ValueError):
        data.calculate_idle_timeout_components(70000)


def test_holds_shared_topic_tree():
    tree = TopicTree(lambda subscriber, message, flags: False)
    data = WebSocketContextData(topic_tree=tree, max_payload_length=16 * 1024)
    assert data.topic_tree is tree
    assert data.max_payload_length == 16 * 1024
    assert data.open_handler is None