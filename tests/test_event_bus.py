from pokecollect.core.event_bus import EventBus, EventTypes
from pokecollect.state.session_state import SessionSnapshot, SessionState


def test_publish_to_subscribers():
    bus = EventBus()
    received = []
    bus.subscribe(EventTypes.LOGOUT, received.append)

    bus.publish(EventTypes.LOGOUT, "bye")
    bus.publish(EventTypes.LOGIN_SUCCESS, "ignored")

    assert received == ["bye"]


def test_duplicate_subscription_ignored():
    bus = EventBus()
    received = []
    bus.subscribe(EventTypes.LOGOUT, received.append)
    bus.subscribe(EventTypes.LOGOUT, received.append)

    assert bus.get_subscriber_count(EventTypes.LOGOUT) == 1


def test_failing_subscriber_does_not_block_others():
    bus = EventBus()
    received = []

    def broken(_):
        raise RuntimeError("boom")

    bus.subscribe(EventTypes.LOGOUT, broken)
    bus.subscribe(EventTypes.LOGOUT, received.append)

    bus.publish(EventTypes.LOGOUT, 1)

    assert received == [1]


def test_unsubscribe_and_clear():
    bus = EventBus()
    callback = [].append
    bus.subscribe(EventTypes.LOGOUT, callback)
    bus.subscribe(EventTypes.SESSION_EXPIRED, callback)

    bus.unsubscribe(EventTypes.LOGOUT, callback)
    assert bus.get_subscriber_count(EventTypes.LOGOUT) == 0

    bus.clear_subscribers()
    assert bus.get_subscriber_count(EventTypes.SESSION_EXPIRED) == 0


def test_session_state_publishes_only_changes():
    bus = EventBus()
    snapshots = []
    bus.subscribe(EventTypes.SESSION_STATE_CHANGED, snapshots.append)
    state = SessionState(bus)

    state.update(is_loading=True)
    state.update(is_loading=True)
    state.update(is_loading=False, is_logged_in=True)

    assert snapshots == [
        SessionSnapshot(is_loading=True),
        SessionSnapshot(is_logged_in=True),
    ]
    assert state.is_logged_in is True


def test_subscribe_returns_unsubscriber():
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe(EventTypes.LOGIN_FAILED, received.append)

    bus.publish(EventTypes.LOGIN_FAILED, "first")
    unsubscribe()
    bus.publish(EventTypes.LOGIN_FAILED, "second")

    assert received == ["first"]
