"""
Tests for api/routes/theory.py — HTTP facade over the music theory engine.

Uses the ``api_client`` fixture from conftest, which pins the tuning to
A4 = 440 Hz.
"""

from fastapi.testclient import TestClient

from api.deps import get_tuning
from api.main import app
from core.music_theory.config import BAROQUE_TUNING
from core.music_theory.scales import generate_scale


class TestHealth:
    def test_health(self, api_client):
        resp = api_client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


# ---------------------------------------------------------------------------
# Scales
# ---------------------------------------------------------------------------


class TestScaleRoutes:
    def test_list(self, api_client):
        resp = api_client.get("/theory/scales")
        assert resp.status_code == 200
        data = resp.json()
        assert len(data) == 13
        assert data[0]["key"] == "major"

    def test_generate(self, api_client):
        resp = api_client.get("/theory/scales/dorian", params={"root": 62, "octaves": 1})
        assert resp.status_code == 200
        data = resp.json()
        assert data["midi_notes"] == [62, 64, 65, 67, 69, 71, 72]
        assert data["note_names"][0] == "D4"
        assert data["warnings"] == []

    def test_default_octaves_match_engine(self, api_client):
        data = api_client.get("/theory/scales/major", params={"root": 60}).json()
        assert data["midi_notes"] == list(generate_scale(60, "major"))
        assert len(data["midi_notes"]) == 14

    def test_flats(self, api_client):
        resp = api_client.get("/theory/scales/major", params={"root": 65, "use_sharps": False})
        assert resp.json()["note_names"][3] == "Bb4"

    def test_unknown_scale_falls_back_with_warning(self, api_client):
        resp = api_client.get("/theory/scales/bogus")
        assert resp.status_code == 200
        data = resp.json()
        assert data["scale"]["key"] == "major"
        assert data["warnings"] == ["Unknown scale type: 'bogus', defaulting to major"]

    def test_root_out_of_range_rejected(self, api_client):
        resp = api_client.get("/theory/scales/major", params={"root": 200})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Chords
# ---------------------------------------------------------------------------


class TestChordRoutes:
    def test_list(self, api_client):
        data = api_client.get("/theory/chords").json()
        assert [c["key"] for c in data][:2] == ["major", "minor"]
        assert len(data) == 9

    def test_generate(self, api_client):
        data = api_client.get("/theory/chords/min7", params={"root": 57}).json()
        assert data["symbol"] == "Am7"
        assert data["midi_notes"] == [57, 60, 64, 67]

    def test_inversion(self, api_client):
        data = api_client.get("/theory/chords/major", params={"root": 60, "inversion": 1}).json()
        assert data["midi_notes"] == [64, 67, 72]
        assert data["inversion"] == 1

    def test_unknown_chord_warns(self, api_client):
        data = api_client.get("/theory/chords/sus4").json()
        assert data["chord"]["key"] == "major"
        assert data["warnings"] == ["Unknown chord type: 'sus4', defaulting to major"]

    def test_diatonic(self, api_client):
        resp = api_client.get("/theory/diatonic", params={"root": 57, "scale": "minorHarmonic"})
        assert resp.status_code == 200
        chords = resp.json()["chords"]
        assert len(chords) == 7
        assert chords[2]["roman_numeral"] == "III+"
        assert chords[4]["midi_notes"] == [64, 68, 71]


class TestVoiceLeadingRoute:
    def test_best_inversion(self, api_client):
        resp = api_client.post(
            "/theory/voice-leading",
            json={"from_chord": [65, 69, 72], "to_chord": [60, 64, 67]},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["best_inversion"] == 1
        assert data["min_distance"] == 3
        assert data["suggested_notes"] == [64, 67, 72]
        assert len(data["all_distances"]) == 3

    def test_empty_chord_rejected(self, api_client):
        resp = api_client.post("/theory/voice-leading", json={"from_chord": [], "to_chord": [60]})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Notes and frequency
# ---------------------------------------------------------------------------


class TestNoteRoutes:
    def test_parse_note(self, api_client):
        data = api_client.get("/theory/notes/A4").json()
        assert data["midi"] == 69
        assert data["frequency_hz"] == 440.0
        assert data["octave"] == 4
        assert data["in_piano_range"] is True

    def test_sharp_note(self, api_client):
        data = api_client.get("/theory/notes/C%234").json()
        assert data["midi"] == 61
        assert data["name"] == "C#4"

    def test_unparseable_note(self, api_client):
        assert api_client.get("/theory/notes/H2").status_code == 422

    def test_frequency(self, api_client):
        data = api_client.get("/theory/frequency", params={"hz": 261.63}).json()
        assert data["midi"] == 60
        assert data["name"] == "C4"

    def test_frequency_out_of_range(self, api_client):
        assert api_client.get("/theory/frequency", params={"hz": 100000}).status_code == 422

    def test_non_positive_frequency_rejected(self, api_client):
        assert api_client.get("/theory/frequency", params={"hz": 0}).status_code == 422

    def test_tuning_override(self, api_client):
        app.dependency_overrides[get_tuning] = lambda: BAROQUE_TUNING
        data = api_client.get("/theory/notes/A4").json()
        assert data["frequency_hz"] == 415.0

    def test_non_finite_env_tuning_falls_back(self, monkeypatch):
        monkeypatch.setenv("MUSIC_THEORY_REFERENCE_HZ", "nan")
        get_tuning.cache_clear()
        try:
            with TestClient(app) as client:
                resp = client.get("/theory/frequency", params={"hz": 440})
        finally:
            get_tuning.cache_clear()
        assert resp.status_code == 200
        assert resp.json()["midi"] == 69


# ---------------------------------------------------------------------------
# Progressions
# ---------------------------------------------------------------------------


class TestProgressionRoutes:
    def test_list(self, api_client):
        data = api_client.get("/theory/progressions").json()
        assert len(data) == 12
        assert data[0]["key"] == "perfectCadence"

    def test_list_by_genre(self, api_client):
        data = api_client.get("/theory/progressions", params={"genre": "jazz"}).json()
        assert [t["key"] for t in data] == ["circleOfFifths", "jazzTurnaround", "iimV"]

    def test_list_by_genre_case_insensitive(self, api_client):
        data = api_client.get("/theory/progressions", params={"genre": "BLUES"}).json()
        assert [t["key"] for t in data] == ["iimV", "bluesProgression12Bar", "blues12BarMinor"]

    def test_generate_from_numerals(self, api_client):
        resp = api_client.post(
            "/theory/progressions/generate",
            json={"root": 60, "scale": "major", "roman_numerals": ["I", "IV", "V", "I"]},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["key"] == "C4"
        assert data["label"] == "I - IV - V - I"
        assert data["voice_leading"]["total_distance"] == 24
        assert data["voice_leading"]["quality"] == "good"
        assert data["chords"][3]["inversion"] == 2
        assert data["chords"][3]["midi_notes"] == [67, 72, 76]

    def test_generate_from_template(self, api_client):
        resp = api_client.post("/theory/progressions/generate", json={"template": "iimV"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["roman_numerals"] == ["ii", "V", "I"]
        assert data["scale_name"] == "Major"

    def test_unknown_template_404(self, api_client):
        resp = api_client.post("/theory/progressions/generate", json={"template": "nope"})
        assert resp.status_code == 404

    def test_requires_exactly_one_source(self, api_client):
        neither = api_client.post("/theory/progressions/generate", json={"root": 60})
        both = api_client.post(
            "/theory/progressions/generate",
            json={"template": "iimV", "roman_numerals": ["I"]},
        )
        assert neither.status_code == 422
        assert both.status_code == 422

    def test_skipped_numeral_reported(self, api_client):
        data = api_client.post(
            "/theory/progressions/generate",
            json={"roman_numerals": ["I", "bVII", "V"]},
        ).json()
        assert data["label"] == "I - V"
        assert data["warnings"] == ["Chord not found: 'bVII'"]
