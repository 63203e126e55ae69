"""
Unit tests for the solve history stores and preferences.
"""

import json
import pytest


class TestSolveRecord:
    """Test SolveRecord validation."""
    
    def test_rejects_negative_time(self):
        """Verify solve_time_ms >= 0."""
        from cube_timer.interfaces.solve_record import SolveRecord
        
        with pytest.raises(ValueError):
            SolveRecord(timestamp=1, solve_time_ms=-1, scramble="R")
    
    def test_rejects_non_integer_fields(self):
        """Verify timestamps and durations must be integers."""
        from cube_timer.interfaces.solve_record import SolveRecord
        
        with pytest.raises(ValueError):
            SolveRecord(timestamp="2024-01-01", solve_time_ms=1, scramble="R")
        with pytest.raises(ValueError):
            SolveRecord(timestamp=1, solve_time_ms=True, scramble="R")
        with pytest.raises(ValueError):
            SolveRecord(timestamp=1, solve_time_ms=1.5, scramble="R")
    
    def test_records_are_immutable(self):
        """Verify records cannot be edited in place."""
        import dataclasses
        from cube_timer.interfaces.solve_record import SolveRecord
        
        record = SolveRecord(timestamp=1, solve_time_ms=2, scramble="R")
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.solve_time_ms = 3
    
    def test_duplicate_values_allowed(self):
        """Verify identical solves can coexist in a History."""
        from cube_timer.interfaces.solve_record import History, SolveRecord
        
        record = SolveRecord(timestamp=1, solve_time_ms=2, scramble="R")
        history = History()
        history.add(record)
        history.add(SolveRecord(timestamp=1, solve_time_ms=2, scramble="R"))
        assert len(history) == 2


class TestJsonFileSolveStore:
    """Test the JSON-file store."""
    
    def test_missing_file_reads_empty(self, tmp_path):
        """Verify a fresh store has an empty history."""
        from cube_timer.storage.solve_store import JsonFileSolveStore
        
        store = JsonFileSolveStore(tmp_path / "history.json")
        assert len(store.read_history()) == 0
    
    def test_append_then_read_round_trip(self, tmp_path):
        """Verify appended records read back in order with identical fields."""
        from cube_timer.interfaces.solve_record import SolveRecord
        from cube_timer.storage.solve_store import JsonFileSolveStore
        
        store = JsonFileSolveStore(tmp_path / "nested" / "history.json")
        first = SolveRecord(timestamp=1_700_000_000_000, solve_time_ms=12_340, scramble="R, U', F")
        second = SolveRecord(timestamp=1_700_000_060_000, solve_time_ms=9_870, scramble="L, D")
        
        store.append_solve(first)
        store.append_solve(second)
        
        history = JsonFileSolveStore(tmp_path / "nested" / "history.json").read_history()
        assert history.solves == [first, second]
    
    def test_file_format(self, tmp_path):
        """Verify the on-disk JSON layout."""
        from cube_timer.interfaces.solve_record import SolveRecord
        from cube_timer.storage.solve_store import JsonFileSolveStore
        
        path = tmp_path / "history.json"
        JsonFileSolveStore(path).append_solve(SolveRecord(timestamp=5, solve_time_ms=6, scramble="B"))
        
        data = json.loads(path.read_text())
        assert data["version"] == "1.0.0"
        assert data["history"] == [{"timestamp": 5, "solve_time_ms": 6, "scramble": "B"}]
    
    @pytest.mark.parametrize("content", [
        "not json at all",
        "[1, 2, 3]",
        '{"history": {"oops": 1}}',
        '{"history": [{"timestamp": 1, "solve_time_ms": -4, "scramble": "R"}]}',
        '{"history": [{"timestamp": "yesterday", "solve_time_ms": 4, "scramble": "R"}]}',
        '{"history": [{"timestamp": 1}]}',
    ])
    def test_corrupt_file_reads_empty(self, tmp_path, content):
        """Verify corrupt history is indistinguishable from no history."""
        from cube_timer.storage.solve_store import JsonFileSolveStore
        
        path = tmp_path / "history.json"
        path.write_text(content)
        
        assert len(JsonFileSolveStore(path).read_history()) == 0
    
    def test_clear(self, tmp_path):
        """Verify clear empties the history."""
        from cube_timer.interfaces.solve_record import SolveRecord
        from cube_timer.storage.solve_store import JsonFileSolveStore
        
        store = JsonFileSolveStore(tmp_path / "history.json")
        store.append_solve(SolveRecord(timestamp=1, solve_time_ms=2, scramble="R"))
        store.clear()
        
        assert len(store.read_history()) == 0
    
    def test_write_failure_raises_and_keeps_file(self, tmp_path, monkeypatch):
        """Verify a failed write raises and leaves the previous file intact."""
        import os
        from cube_timer.errors import PersistenceWriteError
        from cube_timer.interfaces.solve_record import SolveRecord
        from cube_timer.storage.solve_store import JsonFileSolveStore
        
        path = tmp_path / "history.json"
        store = JsonFileSolveStore(path)
        store.append_solve(SolveRecord(timestamp=1, solve_time_ms=2, scramble="R"))
        before = path.read_text()
        
        def failing_replace(src, dst):
            raise OSError("disk full")
        
        monkeypatch.setattr(os, "replace", failing_replace)
        
        with pytest.raises(PersistenceWriteError):
            store.append_solve(SolveRecord(timestamp=3, solve_time_ms=4, scramble="U"))
        
        assert path.read_text() == before
        assert [p.name for p in tmp_path.iterdir()] == ["history.json"]


class TestInMemorySolveStore:
    """Test the in-memory store."""
    
    def test_append_and_read(self):
        """Verify append order and copy-on-read."""
        from cube_timer.interfaces.solve_record import SolveRecord
        from cube_timer.storage.solve_store import InMemorySolveStore
        
        store = InMemorySolveStore()
        store.append_solve(SolveRecord(timestamp=1, solve_time_ms=10, scramble="R"))
        store.append_solve(SolveRecord(timestamp=2, solve_time_ms=20, scramble="U"))
        
        history = store.read_history()
        history.add(SolveRecord(timestamp=3, solve_time_ms=30, scramble="F"))
        
        assert store.read_history().times() == [10, 20]


class TestPreferencesStore:
    """Test persisted preferences."""
    
    def test_defaults_when_missing(self, tmp_path):
        """Verify a missing file yields defaults."""
        from cube_timer.storage.preferences import Preferences, PreferencesStore
        
        store = PreferencesStore(tmp_path / "prefs.json")
        assert store.load() == Preferences(scramble_length=25, dark_mode=False)
    
    def test_seeded_defaults(self, tmp_path):
        """Verify config-provided defaults are used."""
        from cube_timer.storage.preferences import Preferences, PreferencesStore
        
        store = PreferencesStore(tmp_path / "prefs.json", defaults=Preferences(scramble_length=30))
        assert store.load().scramble_length == 30
    
    def test_set_fields_persist(self, tmp_path):
        """Verify single-field setters keep the other field."""
        from cube_timer.storage.preferences import PreferencesStore
        
        path = tmp_path / "prefs.json"
        PreferencesStore(path).set_scramble_length(18)
        PreferencesStore(path).set_dark_mode(True)
        
        prefs = PreferencesStore(path).load()
        assert prefs.scramble_length == 18
        assert prefs.dark_mode is True
    
    @pytest.mark.parametrize("content", [
        "{broken",
        '"a string"',
        '{"scramble_length": -3}',
        '{"scramble_length": "ten"}',
        '{"dark_mode": "yes"}',
    ])
    def test_corrupt_file_uses_defaults(self, tmp_path, content):
        """Verify unreadable preferences fall back to defaults."""
        from cube_timer.storage.preferences import Preferences, PreferencesStore
        
        path = tmp_path / "prefs.json"
        path.write_text(content)
        
        assert PreferencesStore(path).load() == Preferences()
