def test_live(client):
    resp = client.get("/live")

    assert resp.status_code == 200
    assert resp.json() == {"status": "alive"}


def test_healthz_and_ready(client):
    assert client.get("/healthz").json() == {"status": "ok"}
    ready = client.get("/ready")
    assert ready.status_code == 200
    assert ready.json()["db"] is True


def test_metrics_count_outcomes(client):
    client.post("/nps/submit/Z1234", headers={"Authorization": "Bearer token"})
    client.post("/nps/submit/Z1503", headers={"Authorization": "Bearer token"})
    client.post("/nps/declaration/Z1500")

    resp = client.get("/metrics")

    assert resp.status_code == 200
    text = resp.text
    assert 'nps_submissions_total{outcome="SUCCESS"}' in text
    assert 'nps_submissions_total{outcome="SERVICE_UNAVAILABLE"}' in text
    assert 'nps_declarations_total{outcome="INTERNAL_SERVER_ERROR"}' in text
    assert "nps_report_store_latency_seconds_bucket" in text
