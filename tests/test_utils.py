from datetime import datetime, timezone

import pytest

from vocabhub.models import AudioUpload, Notice, NoticeLevel, UserProfile, VocabularyEntry, derive_categories
from vocabhub.utils import StoragePathGenerator, TextParser, format_file_size_mb, truncate_text


def test_audio_path_format():
    paths = StoragePathGenerator(clock=lambda: 1718000000.25, token_factory=lambda: "tok")
    assert paths.audio_path("Hello World.WAV") == "audio/1718000000250_tok.wav"
    assert paths.audio_path("noext") == "audio/1718000000250_tok.mp3"


def test_audio_paths_do_not_collide():
    paths = StoragePathGenerator(clock=lambda: 1.0)
    generated = {paths.audio_path("a.mp3") for _ in range(50)}
    assert len(generated) == 50


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  cat  ", "cat"),
        ("a,b(c)", "a b c"),
        ("", ""),
        (None, ""),
    ],
)
def test_sanitize_search_term(raw, expected):
    assert TextParser.sanitize_search_term(raw) == expected


def test_clean_field_normalizes_to_nfc():
    decomposed = "cafe\u0301 "
    assert TextParser.clean_field(decomposed) == "caf\u00e9"


@pytest.mark.parametrize(
    "raw",
    ["2024-03-01T10:20:30.123456789Z", "2024-03-01T10:20:30.123456+00:00"],
)
def test_parse_timestamp_tolerates_supabase_formats(raw):
    parsed = TextParser.parse_timestamp(raw)
    assert parsed == datetime(2024, 3, 1, 10, 20, 30, 123456, tzinfo=timezone.utc)


def test_parse_timestamp_rejects_garbage():
    assert TextParser.parse_timestamp("yesterday") is None
    assert TextParser.parse_timestamp(None) is None


def test_entry_from_row_maps_columns():
    entry = VocabularyEntry.from_row({
        "id": 3, "word": "apple", "meaning": "a red fruit", "cat": "food",
        "sound": "", "created_at": "2024-01-01T00:00:00Z",
    })
    assert entry.category == "food"
    assert entry.audio_url is None
    assert not entry.has_audio
    assert entry.created_at.tzinfo is not None


def test_entry_record_uses_table_columns():
    entry = VocabularyEntry(None, "sun", "a star", "weather", "https://cdn/sun.mp3")
    record = entry.to_record()
    assert set(record) == {"word", "meaning", "cat", "sound", "created_at"}
    assert record["cat"] == "weather"


def test_derive_categories_skips_empty_values():
    rows = [{"cat": "b"}, {"cat": "a"}, {"cat": "b"}, {"cat": None}, {"cat": ""}]
    assert derive_categories(rows) == ["a", "b"]


def test_audio_upload_guesses_content_type():
    assert AudioUpload("x.mp3", b"1").is_audio
    assert not AudioUpload("x.txt", b"1").is_audio
    assert AudioUpload("x.bin", b"12", content_type="audio/ogg").size == 2


def test_notice_and_profile_helpers():
    assert Notice.error("boom").is_error
    assert Notice.success("ok").level is NoticeLevel.SUCCESS
    assert UserProfile(id=1, email="a@example.com").display_name == "a@example.com"


def test_format_helpers():
    assert format_file_size_mb(12 * 1024 * 1024) == "12.00 MB"
    assert truncate_text("x" * 10, max_length=5) == "xx..."
