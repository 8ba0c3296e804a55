"""Unit tests for the synchronous ChangeNotifier."""

from recordbook.application.services import ChangeAction, ChangeNotifier, RecordChange


def test_broadcast_reaches_subscribers_in_order():
    notifier = ChangeNotifier()
    calls: list[str] = []
    notifier.subscribe(lambda change: calls.append(f"first:{change.action.value}"))
    notifier.subscribe(lambda change: calls.append(f"second:{change.action.value}"))

    notifier.broadcast(RecordChange(ChangeAction.ADDED, ("r1",)))

    assert calls == ["first:added", "second:added"]


def test_unsubscribe_is_idempotent():
    notifier = ChangeNotifier()
    unsubscribe = notifier.subscribe(lambda change: None)

    unsubscribe()
    unsubscribe()

    assert notifier.subscriber_count == 0


def test_failing_subscriber_is_dropped_and_others_still_notified():
    notifier = ChangeNotifier()
    received: list[RecordChange] = []

    def broken(change: RecordChange) -> None:
        raise RuntimeError("render failed")

    notifier.subscribe(broken)
    notifier.subscribe(received.append)

    notifier.broadcast(RecordChange(ChangeAction.DELETED, ("r1",)))
    notifier.broadcast(RecordChange(ChangeAction.DELETED, ("r2",)))

    assert [c.record_ids for c in received] == [("r1",), ("r2",)]
    assert notifier.subscriber_count == 1


def test_clear_disconnects_everyone():
    notifier = ChangeNotifier()
    notifier.subscribe(lambda change: None)
    notifier.subscribe(lambda change: None)

    notifier.clear()

    assert notifier.subscriber_count == 0


def test_subscriber_that_unsubscribes_then_raises_is_dropped_quietly():
    notifier = ChangeNotifier()
    received: list[RecordChange] = []

    def leave_then_fail(change: RecordChange) -> None:
        unsubscribe()
        raise RuntimeError("closed window")

    unsubscribe = notifier.subscribe(leave_then_fail)
    notifier.subscribe(received.append)

    notifier.broadcast(RecordChange(ChangeAction.UPDATED, ("r1",)))

    assert len(received) == 1
    assert notifier.subscriber_count == 1
