import asyncio

import pytest

from focus_route.journey import JourneySession, JourneyStatus, run_journey
from focus_route.models import Location, Stopover


def _ticks(session, count):
    for _ in range(count):
        session.tick()


def test_progress_advances_once_per_tick():
    updates = []
    session = JourneySession(100, on_progress=updates.append)
    session.start()
    _ticks(session, 10)

    assert session.status is JourneyStatus.RUNNING
    assert session.progress == pytest.approx(0.1)
    assert updates[0] == 0.0
    assert updates[-1] == pytest.approx(0.1)
    assert len(updates) == 11


def test_pause_and_resume():
    session = JourneySession(100)
    session.start()
    _ticks(session, 5)
    session.pause()
    _ticks(session, 5)
    assert session.elapsed == 5
    assert session.status is JourneyStatus.PAUSED

    session.resume()
    _ticks(session, 5)
    assert session.elapsed == 10


def test_idle_session_ignores_ticks():
    session = JourneySession(100)
    _ticks(session, 3)
    assert session.elapsed == 0
    session.resume()
    assert session.status is JourneyStatus.IDLE


def test_rest_at_stopover():
    rests, resumed = [], []
    session = JourneySession(
        1000,
        [0.5],
        [1],
        on_rest_start=lambda index, minutes: rests.append((index, minutes)),
        on_rest_end=resumed.append,
    )
    session.start()
    _ticks(session, 500)

    assert rests == [(0, 1)]
    assert session.status is JourneyStatus.RESTING
    assert session.rest_remaining == 60

    _ticks(session, 59)
    assert session.status is JourneyStatus.RESTING
    assert session.elapsed == 500

    session.tick()
    assert session.status is JourneyStatus.RUNNING
    assert resumed == [0]
    assert session.completed_stopovers == {0}

    _ticks(session, 10)
    assert session.elapsed == 510
    assert rests == [(0, 1)]


def test_default_rest_and_skip():
    session = JourneySession(1000, [0.2])
    session.start()
    _ticks(session, 200)

    assert session.rest_remaining == 300
    session.skip_rest()
    assert session.status is JourneyStatus.RUNNING
    assert session.rest_remaining == 0


def test_stopover_at_zero_never_triggers():
    session = JourneySession(100, [0.0])
    session.start()
    _ticks(session, 5)
    assert session.status is JourneyStatus.RUNNING


def test_completion_stops_at_total():
    done, updates = [], []
    session = JourneySession(20, on_progress=updates.append, on_complete=lambda: done.append(True))
    session.start()
    _ticks(session, 25)

    assert session.status is JourneyStatus.COMPLETED
    assert session.elapsed == 20
    assert session.remaining_seconds == 0
    assert done == [True]
    assert updates[-1] == 1.0


def test_reset_returns_to_idle():
    updates = []
    session = JourneySession(1000, [0.01], on_progress=updates.append)
    session.start()
    _ticks(session, 10)
    session.reset()

    assert session.status is JourneyStatus.IDLE
    assert session.progress == 0
    assert session.completed_stopovers == set()
    assert updates[-1] == 0.0


def test_rest_minutes_come_from_stopovers():
    stops = [Stopover(Location(1.0, 1.0), 50.0, rest_duration_minutes=2)]
    session = JourneySession.for_stopovers(600, stops, [0.5])
    assert session.rest_duration_minutes(0) == 2
    assert session.rest_duration_minutes(3) == 5


def test_non_positive_duration_is_rejected():
    with pytest.raises(ValueError):
        JourneySession(0)


def test_run_journey_drives_ticks():
    sleeps = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    session = JourneySession(300, [0.5], [1])
    status = asyncio.run(run_journey(session, interval=0.5, sleep=fake_sleep))

    assert status is JourneyStatus.COMPLETED
    assert len(sleeps) == 300 + 60
    assert set(sleeps) == {0.5}
