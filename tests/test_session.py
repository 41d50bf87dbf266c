import pytest

import api.session
from api.session import TherapySession
from errors import DecodeError, UnknownConditionError
from imaging.color import ColorSample
from model.phototype import Phototype
from therapy.catalog import Condition

LIGHT = ColorSample(mean_r=240, mean_g=225, mean_b=215, pixel_count=100)   # I-II
DARK = ColorSample(mean_r=90, mean_g=60, mean_b=45, pixel_count=100)       # VI


def test_initial_state():
    snap = TherapySession().snapshot
    assert snap.condition is Condition.ULCERA_SUPERFICIAL
    assert snap.settings is None and snap.phototype is None


def test_condition_before_photo_assumes_type_iii():
    session = TherapySession()
    snap = session.select_condition("acné_leve")
    assert snap.phototype is None
    assert snap.settings.phototype == "III"
    assert snap.settings.intensity_pct == 57


def test_upload_then_condition_change_recomputes():
    session = TherapySession()
    seq = session.begin_upload()
    assert session.complete_upload(seq, "arm.png", DARK)
    snap = session.snapshot
    assert snap.phototype is Phototype.VI
    assert snap.settings.condition is Condition.ULCERA_SUPERFICIAL
    assert snap.settings.ir_minutes == 8

    snap = session.select_condition(Condition.PIEL_SENSIBLE)
    assert snap.settings.phototype == "VI"
    assert snap.settings.ir_minutes == 4
    assert snap.image_name == "arm.png"


def test_late_completion_of_older_upload_is_discarded():
    session = TherapySession()
    first = session.begin_upload()
    second = session.begin_upload()
    assert session.complete_upload(second, "new.png", LIGHT)
    assert not session.complete_upload(first, "old.png", DARK)
    snap = session.snapshot
    assert snap.image_name == "new.png"
    assert snap.phototype is Phototype.I_II
    assert snap.sequence == second


def test_failure_keeps_previous_results():
    session = TherapySession()
    seq = session.begin_upload()
    session.complete_upload(seq, "arm.png", LIGHT)
    before = session.snapshot.settings

    seq = session.begin_upload()
    assert session.fail_upload(seq, "corrupt")
    snap = session.snapshot
    assert snap.settings == before
    assert snap.last_error == "corrupt"


def test_reset_discards_in_flight_upload():
    session = TherapySession()
    session.select_condition("dolor_muscular")
    seq = session.begin_upload()
    snap = session.reset()
    assert snap.condition is Condition.ULCERA_SUPERFICIAL
    assert snap.settings is None
    assert not session.complete_upload(seq, "late.png", LIGHT)


def test_unknown_condition_leaves_state_alone():
    session = TherapySession()
    before = session.snapshot
    with pytest.raises(UnknownConditionError):
        session.select_condition("eczema")
    assert session.snapshot is before


@pytest.mark.anyio
async def test_process_upload_runs_full_pipeline(make_png):
    session = TherapySession()
    snap = await session.process_upload("skin.png", make_png((200, 190, 180)))
    assert snap.phototype is Phototype.III
    assert snap.sample.color.hex == "#C8BEB4"
    assert snap.settings.intensity_pct == 67


@pytest.mark.anyio
async def test_process_upload_records_decode_error():
    session = TherapySession()
    with pytest.raises(DecodeError):
        await session.process_upload("broken.png", b"garbage")
    assert session.snapshot.last_error
    assert session.snapshot.settings is None


def test_snapshot_to_dict():
    session = TherapySession()
    seq = session.begin_upload()
    session.complete_upload(seq, "a.png", LIGHT)
    state = session.snapshot.to_dict()
    assert state["color"] == {"r": 240, "g": 225, "b": 215, "hex": "#F0E1D7"}
    assert state["phototype"] == "I-II"
    assert state["settings"]["led"] == {"color": "#FF7F50", "intensity_pct": 70}


def test_reset_returns_to_the_session_condition():
    session = TherapySession(condition="piel_sensible")
    session.select_condition("dolor_muscular")
    assert session.reset().condition is Condition.PIEL_SENSIBLE


@pytest.mark.anyio
async def test_failure_of_superseded_upload_is_dropped(monkeypatch):
    session = TherapySession()
    newer = {}

    def decode_while_newer_upload_lands(data):
        newer["seq"] = session.begin_upload()
        session.complete_upload(newer["seq"], "new.png", LIGHT)
        raise DecodeError("corrupt")

    monkeypatch.setattr(api.session, "sample_color", decode_while_newer_upload_lands)
    snap = await session.process_upload("old.png", b"garbage")
    assert snap.image_name == "new.png"
    assert snap.sequence == newer["seq"]
    assert snap.last_error is None


def test_worker_offload_comes_from_fastapi():
    import fastapi.concurrency
    assert api.session.run_in_threadpool is fastapi.concurrency.run_in_threadpool
