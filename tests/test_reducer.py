"""Unit tests for the home screen reducer."""
from hypothesis import given
from hypothesis import strategies as st

from tabbytui.core import UNREACHABLE, ChatRole, HealthState, HealthViewModel
from tabbytui.state import (
    FinalizeAssistant,
    HealthUpdated,
    KeyInput,
    Mode,
    ModeChange,
    Quit,
    Reducer,
    ScheduleHealthCheck,
    SpawnCompletion,
    SpawnHealthCheck,
    StreamDelta,
    SubmitInput,
    Tick,
)
from tabbytui.state.reducer import RECENT_KEYS_MAX, TITLE_CONNECTING, TITLE_UNREACHABLE


def type_text(reducer: Reducer, text: str) -> None:
    for char in text:
        reducer.update(KeyInput(char, char))


def submitted(reducer: Reducer, text: str) -> SpawnCompletion:
    """Enter insert mode, type ``text`` and press enter."""
    reducer.update(KeyInput("slash", "/"))
    type_text(reducer, text)
    effects = reducer.update(KeyInput("enter"))
    assert len(effects) == 1
    return effects[0]


class TestSubmit:
    """Tests for submitting a message and streaming the reply."""

    def test_hello_exchange(self):
        """Test the whole life of one exchange."""
        reducer = Reducer()
        effect = submitted(reducer, "hello")
        state = reducer.state

        assert isinstance(effect, SpawnCompletion)
        assert effect.generation == 1
        assert effect.session_id == state.session.id
        assert [(m.role, m.content) for m in effect.messages] == [
            (ChatRole.USER, "hello"),
            (ChatRole.ASSISTANT, ""),
        ]
        assert state.mode is Mode.PROCESSING
        assert state.input_buffer == ""

        reducer.update(StreamDelta(1, "Hi"))
        reducer.update(StreamDelta(1, " there"))
        assert state.session.messages[-1].content == "Hi there"
        assert state.mode is Mode.PROCESSING

        reducer.update(FinalizeAssistant(1, "Hi there"))
        assert state.session.messages[-1].content == "Hi there"
        assert not state.session.pending
        assert state.mode is Mode.NORMAL

    def test_blank_submit_returns_to_normal(self):
        reducer = Reducer()
        reducer.update(KeyInput("slash", "/"))
        type_text(reducer, "   ")

        assert reducer.update(KeyInput("enter")) == []
        assert reducer.state.mode is Mode.NORMAL
        assert len(reducer.state.session) == 0
        assert reducer.state.generation == 0

    def test_submit_input_action(self):
        reducer = Reducer()
        assert reducer.update(SubmitInput("ignored")) == []

        reducer.update(ModeChange(Mode.INSERT))
        effects = reducer.update(SubmitInput("hi"))

        assert [type(e) for e in effects] == [SpawnCompletion]
        assert reducer.state.mode is Mode.PROCESSING

    def test_failed_finalize_replaces_placeholder(self):
        reducer = Reducer()
        submitted(reducer, "hello")
        reducer.update(FinalizeAssistant(1, "Error: Request failed", failed=True))

        assert reducer.state.session.messages[-1].content == "Error: Request failed"
        assert reducer.state.mode is Mode.NORMAL

    def test_submit_follows_tail(self):
        reducer = Reducer()
        reducer.state.scroll = 0
        submitted(reducer, "hello")

        assert reducer.state.scroll is None

    @given(st.lists(st.text(min_size=1, max_size=10), max_size=10))
    def test_deltas_concatenate(self, deltas):
        """Property test: the placeholder holds the concatenation of its deltas."""
        reducer = Reducer()
        submitted(reducer, "q")
        for delta in deltas:
            reducer.update(StreamDelta(1, delta))

        assert reducer.state.session.messages[-1].content == "".join(deltas)


class TestGenerations:
    """Tests for suppressing output of superseded exchanges."""

    def test_stale_delta_and_finalize_are_ignored(self):
        reducer = Reducer()
        submitted(reducer, "first")
        reducer.update(FinalizeAssistant(1, "one"))
        submitted(reducer, "second")

        reducer.update(StreamDelta(1, "late"))
        reducer.update(FinalizeAssistant(1, "late"))
        assert reducer.state.session.messages[-1].content == ""
        assert reducer.state.mode is Mode.PROCESSING

        reducer.update(FinalizeAssistant(2, "two"))
        assert [m.content for m in reducer.state.session.messages] == [
            "first", "one", "second", "two"
        ]
        assert reducer.state.mode is Mode.NORMAL

    def test_generation_increases_per_submit(self):
        reducer = Reducer()
        first = submitted(reducer, "a")
        reducer.update(FinalizeAssistant(1, "x"))
        second = submitted(reducer, "b")

        assert (first.generation, second.generation) == (1, 2)
        assert second.messages[:2] == reducer.state.session.messages[:2]

    def test_delta_after_finalize_is_dropped(self):
        reducer = Reducer()
        submitted(reducer, "hello")
        reducer.update(FinalizeAssistant(1, "done"))
        reducer.update(StreamDelta(1, "extra"))

        assert reducer.state.session.messages[-1].content == "done"


class TestModes:
    """Tests for mode transitions and key handling."""

    def test_insert_and_escape(self):
        reducer = Reducer()
        reducer.update(KeyInput("slash", "/"))
        assert reducer.state.mode is Mode.INSERT

        type_text(reducer, "ab")
        reducer.update(KeyInput("backspace"))
        assert reducer.state.input_buffer == "a"

        reducer.update(KeyInput("escape"))
        assert reducer.state.mode is Mode.NORMAL
        assert reducer.state.input_buffer == "a"

    def test_keys_in_insert_are_text(self):
        reducer = Reducer()
        reducer.update(ModeChange(Mode.INSERT))

        assert reducer.update(KeyInput("q", "q")) == []
        type_text(reducer, "?/")
        assert reducer.state.input_buffer == "q?/"
        assert not reducer.state.show_help

    def test_processing_cannot_be_set_manually(self):
        reducer = Reducer()
        reducer.update(ModeChange(Mode.PROCESSING))
        assert reducer.state.mode is Mode.NORMAL

    def test_processing_cannot_be_left_manually(self):
        reducer = Reducer()
        submitted(reducer, "hello")

        reducer.update(ModeChange(Mode.NORMAL))
        reducer.update(KeyInput("slash", "/"))
        assert reducer.state.mode is Mode.PROCESSING

    def test_help_toggle(self):
        reducer = Reducer()
        reducer.update(KeyInput("question_mark", "?"))
        assert reducer.state.show_help

        reducer.update(KeyInput("escape"))
        assert not reducer.state.show_help

    def test_quit(self):
        reducer = Reducer()
        assert reducer.update(KeyInput("q", "q")) == [Quit()]

    def test_quit_while_processing(self):
        reducer = Reducer()
        submitted(reducer, "hello")
        assert reducer.update(KeyInput("q", "q")) == [Quit()]

    def test_recent_keys_bounded_and_cleared_on_tick(self):
        reducer = Reducer()
        for _ in range(RECENT_KEYS_MAX + 5):
            reducer.update(KeyInput("down"))

        assert len(reducer.state.recent_keys) == RECENT_KEYS_MAX
        reducer.update(Tick())
        assert reducer.state.recent_keys == []


class TestScroll:
    """Tests for transcript scrolling."""

    @staticmethod
    def five_lines() -> Reducer:
        reducer = Reducer()
        reducer.update(ModeChange(Mode.INSERT))
        reducer.update(SubmitInput("line1\nline2"))
        reducer.update(FinalizeAssistant(1, "a\nb\nc"))
        return reducer

    def test_scroll_up_and_back_to_tail(self):
        reducer = self.five_lines()
        assert reducer.state.line_count() == 5

        reducer.update(KeyInput("up"))
        assert reducer.state.scroll == 3
        reducer.update(KeyInput("up"))
        assert reducer.state.scroll == 2

        reducer.update(KeyInput("down"))
        reducer.update(KeyInput("down"))
        assert reducer.state.scroll is None

    def test_scroll_clamped_at_top(self):
        reducer = self.five_lines()
        for _ in range(10):
            reducer.update(KeyInput("up"))
        assert reducer.state.scroll == 0

    def test_scroll_empty_transcript(self):
        reducer = Reducer()
        reducer.update(KeyInput("up"))
        assert reducer.state.scroll is None


class TestHealth:
    """Tests for health scheduling and the title."""

    def test_start_spawns_health_check(self):
        assert Reducer().start() == [SpawnHealthCheck(1)]

    def test_initial_title(self):
        assert Reducer().state.title == TITLE_CONNECTING

    def test_ticks_schedule_health_checks(self):
        reducer = Reducer(health_check_every=3)
        effects = [reducer.update(Tick()) for _ in range(6)]

        assert effects == [[], [], [SpawnHealthCheck(1)], [], [], [SpawnHealthCheck(2)]]

    def test_ticks_without_interval(self):
        reducer = Reducer()
        assert all(reducer.update(Tick()) == [] for _ in range(10))

    def test_schedule_health_check(self):
        reducer = Reducer()
        reducer.start()
        assert reducer.update(ScheduleHealthCheck()) == [SpawnHealthCheck(2)]

    def test_health_updates_title(self, health_payload):
        reducer = Reducer()
        view = HealthViewModel(health_state=HealthState.model_validate(health_payload))

        reducer.update(HealthUpdated(1, view))
        assert reducer.state.health == view
        assert reducer.state.title.startswith("Tabby v0.8.0")

        reducer.update(HealthUpdated(2, UNREACHABLE))
        assert reducer.state.title == TITLE_UNREACHABLE
        assert not reducer.state.health.is_reachable

    def test_older_health_result_does_not_overwrite_newer(self, health_payload):
        """Test that overlapping checks resolve to the most recent one."""
        reducer = Reducer(health_check_every=1)
        reducer.start()
        reducer.update(Tick())
        view = HealthViewModel(health_state=HealthState.model_validate(health_payload))

        reducer.update(HealthUpdated(2, view))
        reducer.update(HealthUpdated(1, UNREACHABLE))

        assert reducer.state.health == view
        assert reducer.state.title.startswith("Tabby v0.8.0")

    def test_repeated_health_result_is_ignored(self, health_payload):
        reducer = Reducer()
        view = HealthViewModel(health_state=HealthState.model_validate(health_payload))

        reducer.update(HealthUpdated(1, view))
        reducer.update(HealthUpdated(1, UNREACHABLE))

        assert reducer.state.health == view

    def test_health_does_not_touch_session(self):
        reducer = Reducer()
        submitted(reducer, "hello")
        reducer.update(HealthUpdated(1, UNREACHABLE))

        assert reducer.state.mode is Mode.PROCESSING
        assert reducer.state.session.pending
