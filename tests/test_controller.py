"""Tests for the snackbar controller admission and eviction policy."""

from __future__ import annotations

import threading
from collections import Counter

from noty.controller import SnackbarController
from noty.settings import NotySettings
from noty.types import SnackbarPriority

from tests.conftest import FakeClock, ListenerRecorder, make_message


class TestInitialState:
    def test_starts_empty(self, controller: SnackbarController) -> None:
        assert controller.count == 0
        assert controller.is_empty is True
        assert controller.has_messages is False
        assert controller.messages == []


class TestShow:
    def test_show_adds_message(self, controller: SnackbarController) -> None:
        controller.show(make_message("test"))

        assert controller.count == 1
        assert controller.has_messages is True
        assert controller.messages[0].id == "test"

    def test_show_notifies_listeners(self, controller: SnackbarController, recorder: ListenerRecorder) -> None:
        controller.show(make_message("a"))

        assert recorder.calls == 1

    def test_higher_priority_is_listed_first(self, controller: SnackbarController) -> None:
        controller.show(make_message("a", priority=SnackbarPriority.LOW))
        controller.show(make_message("b", priority=SnackbarPriority.HIGH))

        assert [m.id for m in controller.messages] == ["b", "a"]

    def test_newer_message_first_within_same_priority(self, controller: SnackbarController) -> None:
        for message_id in ("first", "second", "third"):
            controller.show(make_message(message_id))

        assert [m.id for m in controller.messages] == ["third", "second", "first"]

    def test_records_last_shown_time(self, controller: SnackbarController, clock: FakeClock) -> None:
        controller.show(make_message("a"))

        assert controller.state.shown_at("a") == clock.now


class TestSpamSuppression:
    def test_repeat_within_window_is_dropped(
        self, controller: SnackbarController, clock: FakeClock, recorder: ListenerRecorder
    ) -> None:
        controller.show(make_message("m", text="first"))
        before = controller.state
        clock.advance(1.5)
        controller.show(make_message("m", text="second"))

        assert controller.count == 1
        assert controller.messages[0].message == "first"
        assert controller.state is before
        assert recorder.calls == 1

    def test_repeat_after_window_is_admitted(self, controller: SnackbarController, clock: FakeClock) -> None:
        controller.show(make_message("m", text="first"))
        clock.advance(2.0)
        controller.show(make_message("m", text="second"))

        assert controller.count == 1
        assert controller.messages[0].message == "second"

    def test_window_applies_to_hidden_ids(self, controller: SnackbarController, clock: FakeClock) -> None:
        controller.show(make_message("m"))
        controller.hide("m")
        clock.advance(0.5)
        controller.show(make_message("m"))

        assert controller.count == 0

    def test_different_ids_are_not_suppressed(self, controller: SnackbarController) -> None:
        controller.show(make_message("a"))
        controller.show(make_message("b"))

        assert controller.count == 2

    def test_custom_spam_window(self, clock: FakeClock) -> None:
        controller = SnackbarController(NotySettings(spam_window_seconds=0.0), clock=clock)
        controller.show(make_message("m", text="one"))
        controller.show(make_message("m", text="two"))

        assert controller.count == 1
        assert controller.messages[0].message == "two"


class TestReplaceById:
    def test_reshow_replaces_without_double_counting(self, controller: SnackbarController, clock: FakeClock) -> None:
        for index in range(3):
            controller.show(make_message(f"g{index}", group_id="g"))
        clock.advance(3)
        controller.show(make_message("g0", group_id="g", text="refreshed"))

        ids = sorted(m.id for m in controller.messages)
        assert ids == ["g0", "g1", "g2"]
        assert controller.state.find("g0").message == "refreshed"

    def test_reshow_moves_message_to_most_recent(self, controller: SnackbarController, clock: FakeClock) -> None:
        controller.show(make_message("a"))
        controller.show(make_message("b"))
        clock.advance(3)
        controller.show(make_message("a"))

        assert [m.id for m in controller.messages] == ["a", "b"]


class TestGroupCapacity:
    def test_fourth_member_evicts_oldest_of_group(self, controller: SnackbarController) -> None:
        for message_id in ("g1", "g2", "g3"):
            controller.show(make_message(message_id, group_id="g"))
        controller.show(make_message("g4", group_id="g"))

        group = controller.state.grouped_messages()["g"]
        assert sorted(m.id for m in group) == ["g2", "g3", "g4"]

    def test_group_eviction_ignores_priority(self, controller: SnackbarController) -> None:
        controller.show(make_message("g1", group_id="g", priority=SnackbarPriority.CRITICAL))
        controller.show(make_message("g2", group_id="g", priority=SnackbarPriority.LOW))
        controller.show(make_message("g3", group_id="g", priority=SnackbarPriority.LOW))
        controller.show(make_message("g4", group_id="g", priority=SnackbarPriority.LOW))

        assert controller.state.find("g1") is None

    def test_other_groups_untouched(self, controller: SnackbarController) -> None:
        controller.show(make_message("h1", group_id="h"))
        controller.show(make_message("loose"))
        for message_id in ("g1", "g2", "g3", "g4"):
            controller.show(make_message(message_id, group_id="g"))

        ids = {m.id for m in controller.messages}
        assert {"h1", "loose"} <= ids
        assert len(controller.state.group_members("g")) == 3


class TestTotalCapacity:
    def test_critical_message_evicts_earliest_low(self, controller: SnackbarController) -> None:
        for index in range(10):
            controller.show(make_message(str(index), priority=SnackbarPriority.LOW))
        controller.show(make_message("c", priority=SnackbarPriority.CRITICAL))

        ids = {m.id for m in controller.messages}
        assert controller.count == 10
        assert "c" in ids
        assert "0" not in ids
        assert ids == {"c"} | {str(i) for i in range(1, 10)}
        assert controller.messages[0].id == "c"

    def test_lowest_priority_evicted_before_older_higher(self, controller: SnackbarController) -> None:
        controller.show(make_message("old-high", priority=SnackbarPriority.HIGH))
        for index in range(8):
            controller.show(make_message(f"n{index}", priority=SnackbarPriority.NORMAL))
        controller.show(make_message("young-low", priority=SnackbarPriority.LOW))
        controller.show(make_message("new", priority=SnackbarPriority.NORMAL))

        ids = {m.id for m in controller.messages}
        assert "young-low" not in ids
        assert "old-high" in ids
        assert controller.count == 10

    def test_eviction_keeps_admission_order_of_survivors(self, controller: SnackbarController) -> None:
        for index in range(10):
            controller.show(make_message(str(index)))
        controller.show(make_message("x"))

        assert [m.id for m in controller.state.messages] == [str(i) for i in range(1, 10)] + ["x"]

    def test_new_low_message_still_admitted_when_full(self, controller: SnackbarController) -> None:
        for index in range(10):
            controller.show(make_message(str(index), priority=SnackbarPriority.HIGH))
        controller.show(make_message("low", priority=SnackbarPriority.LOW))

        assert controller.count == 10
        assert controller.state.find("low") is not None
        assert controller.state.find("0") is None

    def test_custom_limits(self, clock: FakeClock) -> None:
        controller = SnackbarController(NotySettings(max_total_messages=2, max_per_group=1), clock=clock)
        controller.show(make_message("a", group_id="g"))
        controller.show(make_message("b", group_id="g"))
        controller.show(make_message("c"))
        controller.show(make_message("d"))

        assert controller.count == 2
        assert len(controller.state.group_members("g")) <= 1


class TestHide:
    def test_hide_removes_message(self, controller: SnackbarController) -> None:
        controller.show(make_message("a"))
        controller.hide("a")

        assert controller.count == 0
        assert controller.has_messages is False

    def test_hide_unknown_id_is_noop(self, controller: SnackbarController, recorder: ListenerRecorder) -> None:
        controller.show(make_message("a"))
        before = controller.state
        controller.hide("missing")

        assert controller.state == before
        assert recorder.calls == 1

    def test_hide_keeps_history(self, controller: SnackbarController) -> None:
        controller.show(make_message("a"))
        controller.hide("a")

        assert controller.state.shown_at("a") is not None

    def test_hide_group(self, controller: SnackbarController) -> None:
        controller.show(make_message("g1", group_id="g"))
        controller.show(make_message("g2", group_id="g"))
        controller.show(make_message("other"))
        controller.hide_group("g")

        assert [m.id for m in controller.messages] == ["other"]

    def test_hide_unknown_group_is_noop(self, controller: SnackbarController, recorder: ListenerRecorder) -> None:
        controller.show(make_message("a", group_id="g"))
        controller.hide_group("nope")

        assert controller.count == 1
        assert recorder.calls == 1


class TestUpdate:
    def test_update_replaces_existing(self, controller: SnackbarController) -> None:
        controller.show(make_message("m", text="Original message"))
        controller.update("m", make_message("m", text="Updated message"))

        assert controller.count == 1
        assert controller.messages[0].message == "Updated message"

    def test_update_bypasses_spam_window(self, controller: SnackbarController, recorder: ListenerRecorder) -> None:
        controller.show(make_message("m", text="one"))
        controller.update("m", make_message("m", text="two"))
        controller.update("m", make_message("m", text="three"))

        assert controller.messages[0].message == "three"
        assert recorder.calls == 3

    def test_update_refreshes_last_shown(self, controller: SnackbarController, clock: FakeClock) -> None:
        controller.show(make_message("m"))
        clock.advance(1.9)
        controller.update("m", make_message("m", text="updated"))
        clock.advance(1.0)
        controller.show(make_message("m", text="repeat"))

        assert controller.messages[0].message == "updated"

    def test_update_with_new_id(self, controller: SnackbarController) -> None:
        controller.show(make_message("old"))
        renamed = make_message("new", text="renamed")
        controller.update("old", renamed)

        assert controller.messages == [renamed]

    def test_update_with_new_id_replaces_live_target(self, controller: SnackbarController) -> None:
        controller.show(make_message("old"))
        controller.show(make_message("new"))
        replacement = make_message("new", text="replacement")
        controller.update("old", replacement)

        assert controller.messages == [replacement]

    def test_update_of_absent_id_admits(self, controller: SnackbarController) -> None:
        message = make_message("fresh")
        controller.update("ghost", message)

        assert controller.messages == [message]

    def test_update_respects_capacity(self, controller: SnackbarController) -> None:
        for index in range(10):
            controller.show(make_message(str(index)))
        controller.update("absent", make_message("extra"))

        assert controller.count == 10


class TestClear:
    def test_clear_all(self, controller: SnackbarController) -> None:
        controller.show(make_message("a"))
        controller.show(make_message("b"))
        controller.clear_all()

        assert controller.count == 0
        assert controller.has_messages is False

    def test_clear_all_is_idempotent(self, controller: SnackbarController, recorder: ListenerRecorder) -> None:
        controller.show(make_message("a"))
        controller.clear_all()
        controller.clear_all()

        assert controller.is_empty
        assert recorder.calls == 3

    def test_clear_all_resets_spam_history(self, controller: SnackbarController) -> None:
        controller.show(make_message("a"))
        controller.clear_all()
        controller.show(make_message("a"))

        assert controller.count == 1

    def test_clear_non_persistent(self, controller: SnackbarController) -> None:
        controller.show(make_message("transient"))
        controller.show(make_message("sticky", persistent=True))
        controller.clear_non_persistent()

        assert [m.id for m in controller.messages] == ["sticky"]


class TestBulkOperations:
    def test_show_multiple(self, controller: SnackbarController) -> None:
        controller.show_multiple([make_message("a"), make_message("b"), make_message("c")])

        assert controller.count == 3

    def test_replace_group(self, controller: SnackbarController) -> None:
        controller.show(make_message("g1", group_id="g"))
        controller.show(make_message("g2", group_id="g"))
        controller.replace_group("g", [make_message("g3", group_id="g")])

        assert [m.id for m in controller.messages] == ["g3"]


class TestConcurrency:
    def test_concurrent_shows_keep_invariants(self) -> None:
        controller = SnackbarController()
        groups = ["a", "b", None]

        def worker(worker_id: int) -> None:
            for index in range(50):
                controller.show(
                    make_message(
                        f"w{worker_id}-{index}",
                        group_id=groups[index % 3],
                        priority=SnackbarPriority(index % 4),
                    )
                )
                if index % 7 == 0:
                    controller.hide(f"w{worker_id}-{index - 1}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        ids = [m.id for m in controller.messages]
        assert len(ids) == len(set(ids))
        assert controller.count <= 10
        per_group = Counter(m.group_id for m in controller.messages if m.group_id is not None)
        assert all(count <= 3 for count in per_group.values())
