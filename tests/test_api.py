import json

from config import ADVISORY_NOTE


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_index_serves_form(client):
    res = client.get("/")
    assert res.status_code == 200
    assert "text/html" in res.headers["content-type"]


def test_conditions(client):
    body = client.get("/conditions").json()
    assert [c["key"] for c in body] == [
        "ulcera_superficial", "acné_leve", "dolor_muscular", "piel_sensible",
    ]
    assert body[1]["led_color"] == "#0000FF"


def test_no_settings_before_any_action(client):
    assert client.get("/session").json()["settings"] is None
    assert client.get("/settings").status_code == 404
    assert client.get("/settings/download").status_code == 404


def test_upload_and_select_flow(client, make_png):
    res = client.post(
        "/session/image",
        files={"file": ("skin.png", make_png((200, 190, 180)), "image/png")},
    )
    assert res.status_code == 200
    state = res.json()
    assert state["image_name"] == "skin.png"
    assert state["color"]["hex"] == "#C8BEB4"
    assert state["phototype"] == "III"

    state = client.post("/session/condition", json={"condition": "acné_leve"}).json()
    assert state["settings"]["led"] == {"color": "#0000FF", "intensity_pct": 57}
    assert state["settings"]["infrared"] == {"minutes": 6}

    assert client.get("/settings").json() == state["settings"]


def test_copy_text_is_the_export_json(client):
    client.post("/session/condition", json={"condition": "piel_sensible"})
    res = client.get("/settings/json")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/plain")
    doc = json.loads(res.text)
    assert doc["disease"] == "piel_sensible"
    assert doc["notes"] == ADVISORY_NOTE


def test_download_has_attachment_name(client):
    client.post("/session/condition", json={"condition": "acné_leve"})
    res = client.get("/settings/download")
    assert res.status_code == 200
    disposition = res.headers["content-disposition"]
    assert disposition.startswith("attachment;")
    assert "fototerapia_settings_acn" in disposition
    assert json.loads(res.content.decode("utf-8"))["disease"] == "acné_leve"


def test_bad_upload_keeps_previous_results(client, make_png):
    client.post("/session/image", files={"file": ("a.png", make_png(), "image/png")})
    res = client.post("/session/image", files={"file": ("b.png", b"garbage", "image/png")})
    assert res.status_code == 400
    state = client.get("/session").json()
    assert state["image_name"] == "a.png"
    assert state["settings"] is not None
    assert state["last_error"]


def test_non_image_upload_rejected(client):
    res = client.post("/session/image", files={"file": ("a.txt", b"hello", "text/plain")})
    assert res.status_code == 415


def test_flat_image_rejected(client, make_png):
    res = client.post(
        "/session/image",
        files={"file": ("strip.png", make_png(width=1000, height=1), "image/png")},
    )
    assert res.status_code == 422


def test_unknown_condition_selection_is_validation_error(client):
    assert client.post("/session/condition", json={"condition": "eczema"}).status_code == 422


def test_compute_endpoint(client):
    res = client.post("/settings/compute", json={"condition": "acné_leve", "phototype": "V"})
    assert res.status_code == 200
    body = res.json()
    assert body["led"]["intensity_pct"] == 48
    assert body["infrared"]["minutes"] == 5


def test_compute_falls_back_and_reports_unknown_condition(client):
    fallback = client.post("/settings/compute", json={"condition": "dolor_muscular", "phototype": "X"})
    explicit = client.post("/settings/compute", json={"condition": "dolor_muscular", "phototype": "III"})
    assert fallback.json() == explicit.json()
    assert client.post("/settings/compute", json={"condition": "eczema"}).status_code == 404


def test_reset(client):
    client.post("/session/condition", json={"condition": "dolor_muscular"})
    state = client.post("/session/reset").json()
    assert state["condition"] == "ulcera_superficial"
    assert state["settings"] is None


def test_tall_narrow_upload_is_sampled(client, make_png):
    res = client.post(
        "/session/image",
        files={"file": ("strip.png", make_png((200, 190, 180), width=1, height=20000), "image/png")},
    )
    assert res.status_code == 200
    state = res.json()
    assert state["color"]["hex"] == "#C8BEB4"
    assert state["phototype"] == "III"
