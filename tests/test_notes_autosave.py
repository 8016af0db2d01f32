import pytest

from app.client import ApiError, NotesAutosave


class FakeTimer:
    """Stands in for threading.Timer; tests fire it by hand"""

    created = []

    def __init__(self, interval, function, args=()):
        self.interval = interval
        self.function = function
        self.args = args
        self.cancelled = False
        self.started = False
        self.daemon = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.function(*self.args)


@pytest.fixture(autouse=True)
def reset_timers():
    FakeTimer.created = []


def live_timers():
    return [t for t in FakeTimer.created if t.started and not t.cancelled]


def make_autosave(server_value="", **kwargs):
    saved = []
    autosave = NotesAutosave(saved.append, server_value=server_value, timer_factory=FakeTimer, **kwargs)
    return autosave, saved


def test_rapid_edits_produce_one_save_of_final_text():
    autosave, saved = make_autosave()

    autosave.edit("M")
    autosave.edit("Me")
    autosave.edit("Meet")

    assert len(live_timers()) == 1
    assert live_timers()[0].interval == 0.5
    live_timers()[0].fire()

    assert saved == ["Meet"]
    assert autosave.server_value == "Meet"
    assert not autosave.pending


def test_cancelled_timer_firing_late_does_nothing():
    autosave, saved = make_autosave()

    autosave.edit("a")
    stale = FakeTimer.created[-1]
    autosave.edit("ab")
    stale.fire()

    assert saved == []
    assert autosave.pending


def test_edit_back_to_server_value_cancels_save():
    autosave, saved = make_autosave(server_value="Original")

    autosave.edit("Original plus")
    autosave.edit("Original")

    assert live_timers() == []
    assert not autosave.pending
    assert saved == []


def test_server_update_matching_draft_cancels_save():
    autosave, saved = make_autosave(server_value="old")
    autosave.edit("new")

    autosave.server_updated("new")

    assert not autosave.pending
    assert saved == []


def test_flush_saves_immediately():
    autosave, saved = make_autosave()
    autosave.edit("draft")

    autosave.flush()
    assert saved == ["draft"]

    autosave.flush()
    assert saved == ["draft"]


def test_close_drops_pending_save():
    autosave, saved = make_autosave()
    autosave.edit("draft")
    timer = FakeTimer.created[-1]

    autosave.close()
    timer.fire()

    assert timer.cancelled
    assert saved == []


def test_failed_save_reports_error_and_keeps_server_value():
    errors = []

    def save(text):
        raise ApiError(500, "500: boom")

    autosave = NotesAutosave(save, server_value="old", on_error=errors.append, timer_factory=FakeTimer)
    autosave.edit("new")
    FakeTimer.created[-1].fire()

    assert [e.status_code for e in errors] == [500]
    assert autosave.server_value == "old"
    assert autosave.draft == "new"


def test_custom_delay():
    autosave, _ = make_autosave(delay=2.0)
    autosave.edit("x")
    assert FakeTimer.created[-1].interval == 2.0
    assert FakeTimer.created[-1].daemon


def test_unexpected_save_error_is_logged_and_reported(caplog):
    errors = []

    def save(text):
        raise RuntimeError("cache blew up")

    autosave = NotesAutosave(save, server_value="old", on_error=errors.append, timer_factory=FakeTimer)
    autosave.edit("new")
    with caplog.at_level("ERROR", logger="app.client.notes"):
        FakeTimer.created[-1].fire()

    assert [str(e) for e in errors] == ["cache blew up"]
    assert "Unexpected error during notes autosave" in caplog.text
    assert autosave.server_value == "old"
    assert not autosave.pending
