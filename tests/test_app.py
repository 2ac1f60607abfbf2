from __future__ import annotations

import pytest

from core.app import MessageQueueCoordinator
from core.navigation import NavigationSignal
from core.settings import QueueSettings
from shared.message_record import ValidationError

DEFAULT_MSG = "Hello World 1"
DEFAULT_MSGS = ["Hello World 2", "Hello World 3"]


def _navigate(message_queue: MessageQueueCoordinator) -> None:
    message_queue.navigation.notify_transition()
    message_queue.render_queue.flush()


def test_register_and_unregister_containers(message_queue, make_container):
    inst_a = make_container("a")
    inst_b = make_container("b")
    inst_c = make_container("c")

    assert message_queue.registry.containers == (inst_c, inst_b, inst_a)

    message_queue.add(DEFAULT_MSG)
    assert inst_c.messages[0].msg == DEFAULT_MSG

    inst_c.unmount()
    message_queue.render_queue.flush()
    assert message_queue.registry.containers == (inst_b, inst_a)
    assert inst_b.messages[0].msg == DEFAULT_MSG

    message_queue.transfer_on_unregister = False
    inst_b.unmount()
    message_queue.render_queue.flush()
    assert message_queue.registry.containers == (inst_a,)
    assert inst_a.messages == []

    inst_a.unmount()
    assert len(message_queue.registry) == 0


def test_queue_and_unqueue(message_queue):
    record_id = message_queue.queue(DEFAULT_MSG)
    assert isinstance(record_id, str)

    queued = message_queue.transition_queue.records[0]
    assert (queued.id, queued.msg, queued.type) == (record_id, DEFAULT_MSG, "info")
    assert (queued.target, queued.lifespan, queued.wait) == (0, 1, 1)

    ids = message_queue.queue(DEFAULT_MSGS)
    assert isinstance(ids, list)
    assert [r.msg for r in message_queue.transition_queue.records[1:]] == DEFAULT_MSGS

    message_queue.unqueue(record_id)
    assert [r.id for r in message_queue.transition_queue] == ids


def test_queued_message_delivered_on_next_navigation(message_queue, make_container):
    container = make_container()
    record_id = message_queue.queue("hi")

    message_queue.navigation.notify_transition()
    assert container.messages == []

    message_queue.render_queue.flush()
    assert [r.id for r in container.messages] == [record_id]
    assert len(message_queue.transition_queue) == 0


def test_navigation_ages_displayed_messages(message_queue, make_container):
    container = make_container()
    message_queue.add("short", lifespan=1)
    keep_id = message_queue.add("longer", lifespan=2, update=False)

    _navigate(message_queue)

    assert [r.id for r in container.messages] == [keep_id]


def test_queued_wait_counts_navigations(message_queue, make_container):
    container = make_container()
    message_queue.queue("later", wait=2, lifespan=5)

    _navigate(message_queue)
    assert container.messages == []

    _navigate(message_queue)
    assert [r.msg for r in container.messages] == ["later"]


def test_two_navigations_drain_in_order(message_queue, make_container):
    container = make_container()
    message_queue.queue("first", wait=1, lifespan=5)
    message_queue.queue("second", wait=2, lifespan=5)

    message_queue.navigation.notify_transition()
    message_queue.navigation.notify_transition()
    assert len(message_queue.render_queue) == 2

    message_queue.render_queue.flush()
    assert [r.msg for r in container.messages] == ["first", "second"]


def test_queue_to_target_clamps(message_queue, make_container):
    older = make_container("older")
    newer = make_container("newer")
    message_queue.queue("far away", target=5)

    _navigate(message_queue)

    assert [r.msg for r in older.messages] == ["far away"]
    assert newer.messages == []


def test_unqueue_falls_back_to_displayed_messages(message_queue, make_container):
    container = make_container()
    record_id = message_queue.queue("delivered", lifespan=5)
    _navigate(message_queue)
    assert len(container.messages) == 1

    message_queue.unqueue(record_id)

    assert container.messages == []


def test_add_and_remove(message_queue, make_container):
    container = make_container()
    id_a, id_b = message_queue.add(["a", "b"], type="x")

    message_queue.remove(id_a)

    assert [(r.msg, r.type) for r in container.messages] == [("b", "x")]
    message_queue.remove(id_a)
    message_queue.remove(id_a)
    assert [r.id for r in container.messages] == [id_b]


def test_ids_are_found_exactly_once(message_queue, make_container):
    container = make_container()
    shown = message_queue.add(["a", "b"], lifespan=10)
    waiting = message_queue.queue(["c", "d"], wait=3)

    message_queue.remove(shown)
    message_queue.unqueue(waiting)

    assert container.messages == []
    assert len(message_queue.transition_queue) == 0
    assert message_queue.dispatcher.remove(shown + waiting) == shown + waiting


def test_add_without_containers_is_silent(message_queue):
    record_id = message_queue.add("nowhere")
    assert isinstance(record_id, str)
    message_queue.remove(record_id)


def test_invalid_numbers_rejected_before_mutation(message_queue, make_container):
    container = make_container()
    message_queue.add("existing", lifespan=3)

    with pytest.raises(ValidationError):
        message_queue.queue("bad", wait="tomorrow")
    with pytest.raises(ValidationError):
        message_queue.add("bad", target="left")

    assert len(message_queue.transition_queue) == 0
    assert [(r.msg, r.lifespan) for r in container.messages] == [("existing", 3)]


def test_default_type_and_order_settings(qapp):
    coordinator = MessageQueueCoordinator(
        settings=QueueSettings(default_message_type="notice", message_type_order=["danger"])
    )
    record_id = coordinator.queue("x")

    assert coordinator.transition_queue.records[0].type == "notice"
    assert coordinator.message_type_order == ["danger"]
    assert record_id

    coordinator.message_type_order = "danger, warning, success, info"
    assert coordinator.message_type_order == ["danger", "warning", "success", "info"]
    assert coordinator.settings.message_type_order == coordinator.message_type_order


def test_container_sorted_messages_uses_type_order(message_queue, make_container):
    container = make_container()
    message_queue.message_type_order = ["danger", "info"]
    message_queue.add(["m1"], type="info", update=False)
    message_queue.add(["m2"], type="warning", update=False)
    message_queue.add(["m3"], type="danger", update=False)

    groups = container.sorted_messages

    assert [(g.type, g.payloads) for g in groups] == [
        ("danger", ["m3"]),
        ("info", ["m1"]),
        ("warning", ["m2"]),
    ]


def test_shutdown_stops_listening_to_navigation(qapp):
    navigation = NavigationSignal()
    coordinator = MessageQueueCoordinator(navigation=navigation, settings=QueueSettings())
    coordinator.start()
    assert coordinator.is_running

    coordinator.shutdown()
    navigation.notify_transition()

    assert not coordinator.is_running
    assert len(coordinator.render_queue) == 0


def test_start_is_idempotent(message_queue, make_container):
    container = make_container()
    message_queue.start()
    message_queue.queue("once")

    message_queue.navigation.notify_transition()

    assert len(message_queue.render_queue) == 1
    message_queue.render_queue.flush()
    assert len(container.messages) == 1


def test_remove_before_transfer_runs_drops_record(message_queue, make_container):
    older = make_container("older")
    newer = make_container("newer")
    record_id = message_queue.add("moving", lifespan=5)

    newer.unmount()
    message_queue.remove(record_id)
    message_queue.render_queue.flush()

    assert older.messages == []
    assert newer.messages == []


def test_unqueue_before_transfer_runs_drops_record(message_queue, make_container):
    older = make_container("older")
    newer = make_container("newer")
    kept_id, gone_id = message_queue.add(["kept", "gone"], lifespan=5)

    newer.unmount()
    message_queue.unqueue(gone_id)
    message_queue.render_queue.flush()

    assert [r.id for r in older.messages] == [kept_id]


def test_setters_leave_callers_settings_untouched(qapp):
    shared = QueueSettings()
    coordinator = MessageQueueCoordinator(settings=shared)

    coordinator.default_message_type = "notice"
    coordinator.message_type_order = "danger"
    coordinator.transfer_on_unregister = False

    assert shared == QueueSettings()
    assert coordinator.settings.default_message_type == "notice"


def test_non_string_types_group_without_error(message_queue, make_container):
    container = make_container()
    message_queue.add("numbered", type=5, update=False)
    message_queue.add("plain", type="info", update=False)

    groups = container.sorted_messages

    assert [g.type for g in groups] == ["5", "info"]
