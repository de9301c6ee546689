"""
Tests for the ComparisonSession facade and the terminal session CLI.
"""

import json
from unittest.mock import patch

import pytest

import taste_session
from taste_engine.elo import ComparisonSession, EngineConfig
from taste_engine.models import PairingMode, TasteAxes
from taste_engine.pools import build_axis_lookup, load_candidate_pool, sample_pool_path


TEST_ITEMS = [
    {"id": "a", "cluster": "grand", "tags": ["formal", "opulent"], "category": "Design", "metadata": {}},
    {"id": "b", "cluster": "quiet", "tags": ["minimal", "serene"], "category": "Design", "metadata": {}},
    {"id": "c", "cluster": "expressive", "tags": ["bold", "colorful"], "category": "Design", "metadata": {}},
    {"id": "d", "cluster": "soulful", "tags": ["warm", "textured"], "category": "Character", "metadata": {}},
]


def _play(session, prefer):
    """Run a session to completion, always choosing by the given ranking."""
    while not session.is_complete():
        pair = session.next_pair()
        if pair is None:
            break
        a, b = pair
        if prefer.index(a.id) < prefer.index(b.id):
            session.choose(a.id, b.id)
        else:
            session.choose(b.id, a.id)
    return session


class TestComparisonSession:
    """Test the per-user session facade."""

    def test_defaults_come_from_config(self):
        session = ComparisonSession(TEST_ITEMS, config=EngineConfig(total_rounds=8, min_rounds=4))
        assert session.total_rounds == 8
        assert session.min_rounds == 4
        assert session.round == 0

    def test_invalid_budget_raises(self):
        with pytest.raises(ValueError):
            ComparisonSession(TEST_ITEMS, total_rounds=0)
        with pytest.raises(ValueError):
            ComparisonSession(TEST_ITEMS, min_rounds=-1)

    def test_choose_advances_state(self):
        session = ComparisonSession(TEST_ITEMS, seed=1)
        a, b = session.next_pair()
        session.choose(a.id, b.id)
        assert session.round == 1
        assert session.state.get_item(a.id).rating > session.state.get_item(b.id).rating

    def test_completes_at_min_rounds(self):
        session = ComparisonSession(TEST_ITEMS, total_rounds=10, min_rounds=3, seed=2)
        _play(session, ["a", "b", "c", "d"])
        assert session.round == 3
        assert session.is_complete()

    def test_completes_when_pairs_run_out(self):
        """Four items only have six pairs, short of a ten-round minimum."""
        session = ComparisonSession(TEST_ITEMS, total_rounds=10, min_rounds=10, seed=3)
        _play(session, ["a", "b", "c", "d"])
        assert session.round == 6
        assert session.is_complete()
        assert session.next_pair() is None

    def test_same_seed_same_pairs(self):
        first = ComparisonSession(TEST_ITEMS, seed=9)
        second = ComparisonSession(TEST_ITEMS, seed=9)
        for _ in range(4):
            pair_one = first.next_pair()
            pair_two = second.next_pair()
            assert [i.id for i in pair_one] == [i.id for i in pair_two]
            first.choose(pair_one[0].id, pair_one[1].id)
            second.choose(pair_two[0].id, pair_two[1].id)

    def test_sessions_do_not_share_state(self):
        one = ComparisonSession(TEST_ITEMS, seed=1)
        two = ComparisonSession(TEST_ITEMS, seed=1)
        one.choose("a", "b")
        assert two.round == 0
        assert two.state.get_item("a").rating == 1500.0

    def test_explicit_mode(self):
        session = ComparisonSession(TEST_ITEMS, mode=PairingMode.DIMENSION_PAIRED)
        assert session.state.mode is PairingMode.DIMENSION_PAIRED

    def test_results_shape(self):
        lookup = {"a": TasteAxes(volume=1.0), "b": TasteAxes(volume=0.0)}
        session = ComparisonSession(TEST_ITEMS, seed=4, axis_lookup=lookup)
        session.choose("a", "b")

        results = session.results()
        assert set(results) == {"signals", "axes", "leaderboard"}
        assert results["leaderboard"][0] == {"id": "a", "rating": pytest.approx(1520.0)}
        assert results["axes"]["volume"] > 0.5
        assert {"tag": "formal", "category": "Design", "confidence": 0.9} in results["signals"]

    def test_axes_lookup_override(self):
        session = ComparisonSession(TEST_ITEMS, axis_lookup={"a": TasteAxes(mood=1.0)})
        session.choose("a", "b")
        assert session.axes().mood != session.axes({}).mood
        assert session.axes({}).mood == 0.0

    def test_to_dict(self):
        session = ComparisonSession(TEST_ITEMS, total_rounds=5, min_rounds=1)
        session.choose("c", "d")
        data = session.to_dict()
        assert data["total_rounds"] == 5
        assert data["complete"] is True
        assert data["state"]["round"] == 1

    def test_experience_pool_runs_natural_pairs_first(self):
        candidates = load_candidate_pool(sample_pool_path("experience"))
        session = ComparisonSession(candidates, seed=5)
        assert session.state.mode is PairingMode.DIMENSION_PAIRED

        dimensions = set()
        for _ in range(4):
            a, b = session.next_pair()
            assert a.paired_with == b.id
            dimensions.add(a.metadata["dimension"])
            session.choose(a.id, b.id)
        assert dimensions == {"morning", "pool", "dining", "pace"}

    def test_designer_pool_session_produces_signals(self):
        candidates = load_candidate_pool(sample_pool_path("designer"))
        session = ComparisonSession(candidates, seed=6, axis_lookup=build_axis_lookup(candidates))
        _play(session, [c.id for c in candidates])
        assert session.round == session.min_rounds
        results = session.results()
        assert results["signals"]
        assert all(0.0 <= value <= 1.0 for value in results["axes"].values())


class TestTasteSessionCli:
    """Test the interactive terminal session."""

    @pytest.fixture(autouse=True)
    def no_logging_setup(self):
        with patch("taste_session.setup_logging"), patch("taste_session.stop_logging"):
            yield

    def test_full_session_writes_report(self, tmp_path):
        output = tmp_path / "report.json"
        answers = iter(["1"] * 20)
        code = taste_session.main(
            ["--pool", "designer", "--rounds", "6", "--min-rounds", "3", "--seed", "1",
             "--output", str(output)],
            input_fn=lambda prompt: next(answers),
        )
        assert code == 0
        report = json.loads(output.read_text(encoding="utf-8"))
        assert report["rounds"] == 3
        assert set(report) == {"signals", "axes", "leaderboard", "rounds"}
        assert len(report["leaderboard"]) == 8

    def test_invalid_answer_reprompts(self, tmp_path):
        output = tmp_path / "report.json"
        answers = iter(["maybe", "", "2"])
        code = taste_session.main(
            ["--pool", "designer", "--rounds", "2", "--min-rounds", "1", "--seed", "1",
             "--output", str(output)],
            input_fn=lambda prompt: next(answers),
        )
        assert code == 0
        assert json.loads(output.read_text(encoding="utf-8"))["rounds"] == 1

    def test_quit_reports_partial_results(self, tmp_path):
        output = tmp_path / "report.json"
        answers = iter(["1", "q"])
        code = taste_session.main(
            ["--pool", "experience", "--seed", "3", "--output", str(output)],
            input_fn=lambda prompt: next(answers),
        )
        assert code == 0
        assert json.loads(output.read_text(encoding="utf-8"))["rounds"] == 1

    def test_closed_input_reports_partial_results(self, capsys):
        def closed(prompt):
            raise EOFError

        code = taste_session.main(["--pool", "designer", "--seed", "1"], input_fn=closed)
        assert code == 0
        out = capsys.readouterr().out
        report = json.loads(out[out.index("{"):])
        assert report["rounds"] == 0
        assert report["signals"] == []
        assert report["axes"] == {axis: 0.5 for axis in report["axes"]}

    def test_unknown_pool_file_fails(self, tmp_path):
        code = taste_session.main(["--pool", str(tmp_path / "missing.json")], input_fn=lambda prompt: "1")
        assert code == 1

    def test_custom_pool_and_axes_files(self, tmp_path):
        pool = tmp_path / "pool.json"
        pool.write_text(json.dumps(TEST_ITEMS), encoding="utf-8")
        axes = tmp_path / "axes.json"
        axes.write_text(json.dumps({"a": {"volume": 1.0}, "b": {"volume": 0.0}}), encoding="utf-8")
        output = tmp_path / "report.json"

        answers = iter(["1"] * 10)
        code = taste_session.main(
            ["--pool", str(pool), "--axes", str(axes), "--rounds", "4", "--min-rounds", "2",
             "--seed", "0", "--output", str(output)],
            input_fn=lambda prompt: next(answers),
        )
        assert code == 0
        report = json.loads(output.read_text(encoding="utf-8"))
        assert report["rounds"] == 2
        assert set(report["axes"]) == {"volume", "temperature", "time", "formality", "culture", "mood"}

    def test_run_session_stops_when_pairs_run_out(self):
        printed = []
        session = ComparisonSession(TEST_ITEMS[:2], total_rounds=5, min_rounds=5, seed=0)
        taste_session.run_session(session, input_fn=lambda prompt: "1", print_fn=printed.append)
        assert session.round == 1
        assert printed[-1] == "No more pairs to compare."

    def test_resolve_pool_path(self, tmp_path):
        assert taste_session.resolve_pool_path("designer") == sample_pool_path("designer")
        assert taste_session.resolve_pool_path(str(tmp_path / "x.json")) == tmp_path / "x.json"
