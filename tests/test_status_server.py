"""Status server tests: /api/status pipeline end to end and 5xx mapping of source errors."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from conftest import NDP_HEADER, lease_block, leases_file_text
from netstatus.core.errors import CommandFailure, MalformedRecord, SourceUnavailable
from netstatus.status_server.app import create_app, status_code_for
from netstatus.status_server.reader import StatusReader
from netstatus.status_server.status import build_status


def _reader(tmp_path, leases_text, ndp_text, strict=True, calls=None):
    path = tmp_path / "dhcpd.leases"
    path.write_text(leases_text, encoding="utf-8")

    def runner(command, timeout_sec):
        if calls is not None:
            calls.append((list(command), timeout_sec))
        return ndp_text

    config = {
        "leases": {"path": str(path), "strict": strict},
        "ndp": {"command": ["ndp", "-a"], "timeout_sec": 1.5},
    }
    return StatusReader(config, command_runner=runner)


class TestEndToEnd:
    def test_scenario(self, tmp_path, scenario_leases, scenario_ndp, now):
        reader = _reader(tmp_path, scenario_leases, scenario_ndp)
        client = TestClient(create_app(reader))
        resp = client.get("/api/status")
        assert resp.status_code == 200
        body = resp.json()
        assert list(body) == ["aa:bb:cc:00:00:01", "aa:bb:cc:00:00:03"]

        first = body["aa:bb:cc:00:00:01"]
        assert first["dhcp_lease"]["ip_address"] == "10.0.0.5"
        assert first["dhcp_lease"]["hostname"] == "laptop"
        assert first["dhcp_lease"]["mac_address"] == "aa:bb:cc:00:00:01"
        expires = datetime.fromisoformat(first["dhcp_lease"]["expires_at"])
        assert expires == now + timedelta(days=365)
        assert [e["ip_address"] for e in first["ndp_entries"]] == ["fe80::1"]
        assert first["ndp_entries"][0]["cache_state"] == "Reachable"

        third = body["aa:bb:cc:00:00:03"]
        assert third["dhcp_lease"] is None
        assert [e["ip_address"] for e in third["ndp_entries"]] == ["fe80::2"]
        assert third["ndp_entries"][0]["cache_state"] == "Stale"

        assert "aa:bb:cc:00:00:02" not in body

    def test_reader_passes_configured_command(self, tmp_path, scenario_leases, scenario_ndp):
        calls = []
        reader = _reader(tmp_path, scenario_leases, scenario_ndp, calls=calls)
        build_status(reader)
        assert calls == [(["ndp", "-a"], 1.5)]

    def test_sources_reread_every_request(self, tmp_path, scenario_ndp, now):
        reader = _reader(tmp_path, leases_file_text(), scenario_ndp)
        client = TestClient(create_app(reader))
        assert "aa:bb:cc:00:00:09" not in client.get("/api/status").json()
        (tmp_path / "dhcpd.leases").write_text(
            leases_file_text(lease_block("10.0.0.9", "aa:bb:cc:00:00:09", now + timedelta(hours=1))),
            encoding="utf-8",
        )
        assert client.get("/api/status").json()["aa:bb:cc:00:00:09"]["dhcp_lease"]["ip_address"] == "10.0.0.9"

    def test_build_status_fixed_now(self, tmp_path):
        ends = datetime(2030, 1, 1, tzinfo=timezone.utc)
        text = leases_file_text(lease_block("10.0.0.5", "aa:bb:cc:00:00:01", ends))
        reader = _reader(tmp_path, text, NDP_HEADER + "\n")
        assert build_status(reader, now=ends - timedelta(seconds=1))["aa:bb:cc:00:00:01"]["dhcp_lease"] is not None
        assert build_status(reader, now=ends) == {}


class TestErrors:
    def test_malformed_lease_is_500(self, tmp_path, scenario_ndp, now):
        text = leases_file_text(lease_block("10.0.0.5", None, now + timedelta(days=1)))
        client = TestClient(create_app(_reader(tmp_path, text, scenario_ndp)))
        resp = client.get("/api/status")
        assert resp.status_code == 500
        assert resp.json()["error"] == "malformed_record"
        assert "hardware ethernet" in resp.json()["detail"]

    def test_relaxed_policy_skips_malformed_lease(self, tmp_path, scenario_ndp, now):
        text = leases_file_text(
            lease_block("10.0.0.5", None, now + timedelta(days=1)),
            lease_block("10.0.0.6", "aa:bb:cc:00:00:06", now + timedelta(days=1)),
        )
        client = TestClient(create_app(_reader(tmp_path, text, scenario_ndp, strict=False)))
        resp = client.get("/api/status")
        assert resp.status_code == 200
        assert resp.json()["aa:bb:cc:00:00:06"]["dhcp_lease"]["ip_address"] == "10.0.0.6"

    def test_malformed_ndp_is_500(self, tmp_path, scenario_leases):
        client = TestClient(create_app(_reader(tmp_path, scenario_leases, NDP_HEADER + "\nfe80::1\n")))
        resp = client.get("/api/status")
        assert resp.status_code == 500
        assert resp.json()["error"] == "malformed_record"

    def test_missing_lease_file_is_503(self, tmp_path, scenario_ndp):
        reader = StatusReader(
            {"leases": {"path": str(tmp_path / "missing.leases")}},
            command_runner=lambda command, timeout_sec: scenario_ndp,
        )
        resp = TestClient(create_app(reader)).get("/api/status")
        assert resp.status_code == 503
        assert resp.json()["error"] == "source_unavailable"

    def test_command_failure_is_502(self, tmp_path, scenario_leases):
        def failing(command, timeout_sec):
            raise CommandFailure("ndp -a exited with status 1", returncode=1)

        path = tmp_path / "dhcpd.leases"
        path.write_text(scenario_leases, encoding="utf-8")
        reader = StatusReader({"leases": {"path": str(path)}}, command_runner=failing)
        resp = TestClient(create_app(reader)).get("/api/status")
        assert resp.status_code == 502
        assert resp.json()["error"] == "command_failure"
        assert resp.json()["trace_id"]

    def test_unexpected_error_is_500_and_server_keeps_serving(self):
        state = {"fail": True}

        def get_leases():
            if state["fail"]:
                raise RuntimeError("boom")
            return []

        reader = SimpleNamespace(get_leases=get_leases, get_neighbors=lambda: [])
        client = TestClient(create_app(reader))
        resp = client.get("/api/status")
        assert resp.status_code == 500
        assert resp.json()["error"] == "internal_error"
        state["fail"] = False
        resp = client.get("/api/status")
        assert resp.status_code == 200
        assert resp.json() == {}

    @pytest.mark.parametrize(
        "exc, code",
        [
            (SourceUnavailable("x"), 503),
            (CommandFailure("x"), 502),
            (MalformedRecord("x"), 500),
        ],
    )
    def test_status_code_for(self, exc, code):
        assert status_code_for(exc) == code


class TestRoot:
    def test_root_links_status(self):
        reader = SimpleNamespace(get_leases=lambda: [], get_neighbors=lambda: [])
        resp = TestClient(create_app(reader)).get("/")
        assert resp.status_code == 200
        assert "/api/status" in resp.text
