"""Tests for the Flask host: routes, session labs and server-side playback."""

from __future__ import annotations

from collections import OrderedDict

import pytest

import main


@pytest.fixture
def fake_clock(clock, monkeypatch):
    monkeypatch.setattr(main, "CLOCK", clock)
    monkeypatch.setattr(main, "LABS", OrderedDict())
    return clock


@pytest.fixture
def client(fake_clock):
    main.app.config["TESTING"] = True
    with main.app.test_client() as c:
        yield c


class TestIndex:
    def test_page_renders(self, client):
        res = client.get("/")
        assert res.status_code == 200
        body = res.get_data(as_text=True)
        assert "DSA Master Visual Lab" in body
        assert "<svg" in body

    def test_initial_state(self, client):
        data = client.get("/api/state").get_json()
        assert data["values"] == [64, 34, 25, 12, 22, 11, 90]
        assert data["phase"] == "idle"
        assert data["step_index"] == -1
        assert data["total"] == 0


class TestRun:
    def test_bubble_sort_autoplays(self, client, fake_clock):
        data = client.post("/api/run", json={"algo_key": "bubble_sort"}).get_json()
        assert data["phase"] == "playing"
        assert data["step_index"] == 0
        assert data["operation"] == {"kind": "compare", "indices": [0, 1], "value": None}

        fake_clock.advance(500)
        data = client.get("/api/state").get_json()
        assert data["step_index"] == 1
        assert data["operation"]["kind"] == "swap"
        assert data["values"][:2] == [34, 64]

    def test_binary_search_sorts_first(self, client):
        data = client.post("/api/run", json={"algo_key": "binary_search", "target": 22}).get_json()
        assert data["values"] == [11, 12, 22, 25, 34, 64, 90]
        assert data["target"] == 22
        assert data["operation"] == {"kind": "move_pointer", "indices": [0, 6, 3], "value": None}

    def test_runs_to_completion(self, client, fake_clock):
        client.post("/api/run", json={"algo_key": "linear_search", "target": 22})
        fake_clock.advance(60_000)
        data = client.get("/api/state").get_json()
        assert data["phase"] == "finished"
        assert data["running"] is False
        assert data["operation"] == {"kind": "found", "indices": [4], "value": None}

    def test_unknown_algorithm(self, client):
        res = client.post("/api/run", json={"algo_key": "quick_sort"})
        assert res.status_code == 400
        assert "error" in res.get_json()

    def test_bad_target(self, client):
        res = client.post("/api/run", json={"algo_key": "linear_search", "target": "abc"})
        assert res.status_code == 400

    def test_blank_target_means_none(self, client, fake_clock):
        client.post("/api/run", json={"algo_key": "two_pointer", "target": ""})
        data = client.get("/api/state").get_json()
        assert data["total"] == 1
        assert data["phase"] == "finished"


class TestPlaybackRoutes:
    def test_pause_play_reset(self, client, fake_clock):
        client.post("/api/run", json={"algo_key": "traverse"})
        data = client.post("/api/pause").get_json()
        assert data["phase"] == "paused"
        assert data["accepted"] is True

        data = client.post("/api/pause").get_json()
        assert data["accepted"] is False

        fake_clock.advance(5_000)
        assert client.get("/api/state").get_json()["step_index"] == 0

        data = client.post("/api/play").get_json()
        assert data["phase"] == "playing"

        data = client.post("/api/reset").get_json()
        assert data["phase"] == "idle"
        assert data["step_index"] == -1

    def test_play_without_run_is_rejected(self, client):
        data = client.post("/api/play").get_json()
        assert data["accepted"] is False
        assert data["phase"] == "idle"

    def test_manual_steps(self, client):
        client.post("/api/run", json={"algo_key": "traverse"})
        client.post("/api/toggle")
        data = client.post("/api/step/next").get_json()
        assert data["step_index"] == 1
        data = client.post("/api/step/prev").get_json()
        assert data["step_index"] == 0

    def test_speed(self, client):
        assert client.post("/api/speed", json={"speed": 200}).get_json()["speed_ms"] == 200
        assert client.post("/api/speed", json={"speed": "slow"}).get_json()["speed_ms"] == 1000
        assert client.post("/api/speed", json={"speed": "warp"}).status_code == 400

    def test_tab_switch_resets(self, client):
        client.post("/api/run", json={"algo_key": "traverse"})
        data = client.post("/api/tab", json={"tab": "sorting"}).get_json()
        assert data["tab"] == "sorting"
        assert data["phase"] == "idle"
        assert client.post("/api/tab", json={"tab": "graphs"}).status_code == 400


class TestArrayRoutes:
    def test_insert_pauses_playback(self, client):
        client.post("/api/run", json={"algo_key": "traverse"})
        data = client.post("/api/array/insert").get_json()
        assert len(data["values"]) == 8
        assert data["phase"] == "paused"
        assert data["running"] is False
        assert "Inserted" in data["explanation"]
        # the trace no longer matches the array, so nothing is highlighted
        assert data["operation"] is None

    def test_delete(self, client):
        data = client.post("/api/array/delete", json={"index": 0}).get_json()
        assert data["values"] == [34, 25, 12, 22, 11, 90]
        assert "Deleted element at index 0" in data["explanation"]

    def test_delete_out_of_range(self, client):
        assert client.post("/api/array/delete", json={"index": 99}).status_code == 400
        assert client.post("/api/array/delete", json={"index": "x"}).status_code == 400

    def test_random_resets(self, client):
        client.post("/api/run", json={"algo_key": "traverse"})
        data = client.post("/api/array/random", json={"seed": 3}).get_json()
        assert len(data["values"]) == 8
        assert data["phase"] == "idle"


class TestSessionLabs:
    def _visit(self, path="/api/state"):
        with main.app.test_client() as c:
            c.get(path)

    def test_lab_count_is_bounded(self, fake_clock, monkeypatch):
        monkeypatch.setattr(main.CONFIG, "max_labs", 5)
        for _ in range(20):
            self._visit()
        assert len(main.LABS) == 5

    def test_recently_used_lab_is_kept(self, fake_clock, monkeypatch):
        monkeypatch.setattr(main.CONFIG, "max_labs", 3)
        with main.app.test_client() as mine:
            mine.post("/api/array/delete", json={"index": 0})
            self._visit()
            self._visit()
            mine.get("/api/state")
            self._visit()
            self._visit()
            data = mine.get("/api/state").get_json()
        assert data["values"] == [34, 25, 12, 22, 11, 90]
        assert len(main.LABS) == 3

    def test_dropped_lab_has_no_pending_ticks(self, fake_clock, monkeypatch):
        monkeypatch.setattr(main.CONFIG, "max_labs", 1)
        with main.app.test_client() as c:
            c.post("/api/run", json={"algo_key": "traverse"})
        (lab,) = main.LABS.values()
        assert lab.scheduler.pending == 1
        self._visit()
        assert lab not in main.LABS.values()
        assert lab.scheduler.pending == 0


class TestBadInput:
    def test_non_integer_seed(self, client):
        assert client.post("/api/array/random", json={"seed": [1, 2]}).status_code == 400
        assert client.post("/api/array/random", json={"seed": {"a": 1}}).status_code == 400
        assert client.post("/api/array/random", json={"seed": True}).status_code == 400
        assert client.post("/api/array/random", json={"seed": 5}).status_code == 200

    def test_infinite_speed(self, client):
        res = client.post("/api/speed", data='{"speed": Infinity}', content_type="application/json")
        assert res.status_code == 400
        assert "error" in res.get_json()

    def test_nan_speed(self, client):
        res = client.post("/api/speed", data='{"speed": NaN}', content_type="application/json")
        assert res.status_code == 400


class TestStaleTrace:
    def test_play_after_edit_is_rejected(self, client, fake_clock):
        client.post("/api/run", json={"algo_key": "traverse"})
        client.post("/api/array/insert")
        data = client.post("/api/play").get_json()
        assert data["accepted"] is False
        assert data["running"] is False
        assert "Run the algorithm again" in data["explanation"]

        fake_clock.advance(5_000)
        assert client.get("/api/state").get_json()["step_index"] == 0

    def test_toggle_and_steps_after_edit_are_rejected(self, client):
        client.post("/api/run", json={"algo_key": "traverse"})
        client.post("/api/array/delete", json={"index": 6})
        assert client.post("/api/toggle").get_json()["accepted"] is False
        data = client.post("/api/step/next").get_json()
        assert data["accepted"] is False
        assert data["step_index"] == 0

    def test_fresh_run_plays_again(self, client):
        client.post("/api/run", json={"algo_key": "traverse"})
        client.post("/api/array/insert")
        data = client.post("/api/run", json={"algo_key": "traverse"}).get_json()
        assert data["phase"] == "playing"
        assert data["total"] == 9


class TestExportAndLoad:
    def test_export_without_run(self, client):
        data = client.get("/api/export").get_json()
        assert data["array"]["values"] == [64, 34, 25, 12, 22, 11, 90]
        assert data["run"] == {}

    def test_export_after_run(self, client):
        client.post("/api/run", json={"algo_key": "binary_search", "target": 22})
        data = client.get("/api/export").get_json()
        assert data["array"]["values"] == [11, 12, 22, 25, 34, 64, 90]
        assert data["run"]["algo_key"] == "binary_search"
        assert data["run"]["snapshot"] == [11, 12, 22, 25, 34, 64, 90]
        assert data["run"]["metrics"]["outcome"] == "found"
        assert data["run"]["metrics"]["found_indices"] == [2]

    def test_load_restores_exported_array(self, client):
        saved = client.get("/api/export").get_json()["array"]
        client.post("/api/array/random", json={"seed": 1})
        data = client.post("/api/array/load", json=saved).get_json()
        assert data["values"] == [64, 34, 25, 12, 22, 11, 90]
        assert data["phase"] == "idle"
        assert "Loaded 7 values" in data["explanation"]

    def test_load_rejects_bad_values(self, client):
        assert client.post("/api/array/load", json={"values": "1,2"}).status_code == 400
        assert client.post("/api/array/load", json={"values": ["a"]}).status_code == 400
        assert client.post("/api/array/load", json={"values": [True]}).status_code == 400
        assert client.post("/api/array/load", json={"values": [1], "max_value": 0}).status_code == 400


class TestNextTick:
    def test_reports_time_to_next_step(self, client, fake_clock):
        data = client.post("/api/run", json={"algo_key": "traverse"}).get_json()
        assert data["next_tick_ms"] == 500
        fake_clock.advance(200)
        assert client.get("/api/state").get_json()["next_tick_ms"] == 300
        assert client.post("/api/pause").get_json()["next_tick_ms"] is None
