"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

import pytest

os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-test-key")

# Ensure the project root is importable when tests run from the repo root.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from vocabhub.audio import AudioPlayer
from vocabhub.errors import (
    AuthenticationError,
    BackendError,
    PlaybackError,
    StorageConfigurationError,
)
from vocabhub.models import AudioUpload, Identity
from vocabhub.services import (
    AuthResult,
    BaseBackend,
    MediaService,
    RowQuery,
    UserService,
    VocabularyService,
)
from vocabhub.utils.paths import StoragePathGenerator


_BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeBackend(BaseBackend):
    """In-memory backend with failure injection and a call log."""

    def __init__(self, buckets: Optional[Set[str]] = None) -> None:
        self.tables: Dict[str, List[Dict[str, Any]]] = {"vocab": []}
        self.buckets: Set[str] = {"vocab-audio"} if buckets is None else buckets
        self.blobs: Dict[Tuple[str, str], bytes] = {}
        self.upload_options: List[Dict[str, str]] = []
        self.accounts: Dict[str, str] = {}
        self.confirm_email = False
        self.session_identity: Optional[Identity] = None
        self.auth_listeners: List[Any] = []
        # method name -> exception raised on the next call(s)
        self.failures: Dict[str, Exception] = {}
        # ids whose delete is accepted but silently ignored (RLS)
        self.protected_ids: Set[Any] = set()
        self.calls: List[str] = []
        self._next_id = 1

    # helpers ----------------------------------------------------------
    def add_row(self, word: str, meaning: str, cat: Optional[str], sound: Optional[str] = None,
                row_id: Optional[int] = None, table: str = "vocab") -> Dict[str, Any]:
        row_id = row_id if row_id is not None else self._next_id
        self._next_id = max(self._next_id, row_id) + 1
        row = {
            "id": row_id,
            "word": word,
            "meaning": meaning,
            "cat": cat,
            "sound": sound,
            "created_at": (_BASE_TIME + timedelta(minutes=row_id)).isoformat(),
        }
        self.tables.setdefault(table, []).append(row)
        return row

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if name in self.failures:
            raise self.failures[name]

    @property
    def network_calls(self) -> int:
        return len(self.calls)

    def emit_auth(self, identity: Optional[Identity]) -> None:
        for listener in list(self.auth_listeners):
            listener(identity)

    # auth -------------------------------------------------------------
    def sign_in(self, email: str, password: str) -> AuthResult:
        self._check("sign_in")
        if self.accounts.get(email) != password:
            raise AuthenticationError("Invalid login credentials", code="invalid_credentials")
        self.session_identity = Identity(id=f"uid-{email}", email=email)
        return AuthResult(identity=self.session_identity)

    def sign_up(self, email: str, password: str) -> AuthResult:
        self._check("sign_up")
        if email in self.accounts:
            raise AuthenticationError("User already registered")
        self.accounts[email] = password
        identity = Identity(id=f"uid-{email}", email=email)
        if self.confirm_email:
            return AuthResult(identity=identity, has_session=False)
        self.session_identity = identity
        return AuthResult(identity=identity)

    def sign_out(self) -> None:
        self._check("sign_out")
        self.session_identity = None

    def current_identity(self) -> Optional[Identity]:
        self._check("current_identity")
        return self.session_identity

    def on_auth_change(self, listener) -> None:
        self.auth_listeners.append(listener)

    # rows -------------------------------------------------------------
    def select_rows(self, table: str, query: Optional[RowQuery] = None) -> List[Dict[str, Any]]:
        self._check("select_rows")
        if table not in self.tables:
            raise BackendError(f'relation "public.{table}" does not exist', code="42P01")
        query = query or RowQuery()
        rows = [dict(row) for row in self.tables[table]]
        for column, value in query.equals.items():
            rows = [row for row in rows if row.get(column) == value]
        keyword = query.search.strip().lower()
        if keyword:
            rows = [
                row for row in rows
                if any(keyword in str(row.get(column) or "").lower() for column in query.search_columns)
            ]
        if query.order_by:
            rows.sort(key=lambda row: (row.get(query.order_by) is None, row.get(query.order_by) or ""),
                      reverse=not query.ascending)
        if query.limit:
            rows = rows[:query.limit]
        if query.columns != "*":
            columns = [column.strip() for column in query.columns.split(",")]
            rows = [{column: row.get(column) for column in columns} for row in rows]
        return rows

    def insert_row(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        self._check("insert_row")
        row = dict(record)
        row["id"] = self._next_id
        self._next_id += 1
        self.tables.setdefault(table, []).append(row)
        return dict(row)

    def delete_row(self, table: str, row_id: Any) -> List[Dict[str, Any]]:
        self._check("delete_row")
        if row_id in self.protected_ids:
            return []
        removed = [row for row in self.tables[table] if row["id"] == row_id]
        self.tables[table] = [row for row in self.tables[table] if row["id"] != row_id]
        return removed

    # storage ----------------------------------------------------------
    def upload_blob(self, bucket: str, path: str, data: bytes, options=None) -> str:
        self._check("upload_blob")
        if bucket not in self.buckets:
            raise StorageConfigurationError(f"Storage bucket '{bucket}' is not set up.")
        self.blobs[(bucket, path)] = data
        self.upload_options.append(dict(options or {}))
        return path

    def get_public_url(self, bucket: str, path: str) -> str:
        self._check("get_public_url")
        return f"https://example.supabase.co/storage/v1/object/public/{bucket}/{path}"

    def remove_blob(self, bucket: str, path: str) -> None:
        self._check("remove_blob")
        self.blobs.pop((bucket, path), None)


class FakeAudioPlayer(AudioPlayer):
    """Player double that records every call and simulates a position."""

    def __init__(self, url: str, fail_on_play: bool = False) -> None:
        super().__init__(url)
        self.fail_on_play = fail_on_play
        self.fail_on_resume = False
        self.calls: List[str] = []
        self.position = 0.0
        self.playing = False
        self.released = False

    async def play(self) -> None:
        self.calls.append("play")
        if self.fail_on_play:
            raise PlaybackError(f"Could not load {self.url}")
        self.playing = True

    async def pause(self) -> None:
        self.calls.append("pause")
        self.playing = False

    async def resume(self) -> None:
        self.calls.append("resume")
        if self.fail_on_resume:
            raise PlaybackError("decoder error")
        self.playing = True

    async def seek(self, position: float) -> None:
        self.calls.append(f"seek:{position}")
        self.position = position

    async def get_position(self) -> float:
        return self.position

    async def release(self) -> None:
        self.calls.append("release")
        self.released = True
        self.playing = False

    def advance(self, seconds: float) -> None:
        if self.playing:
            self.position += seconds

    async def finish(self) -> None:
        """Simulate the source reaching its end."""
        self.playing = False
        if self.on_completed:
            await self.on_completed()

    async def fail(self, message: str) -> None:
        self.playing = False
        if self.on_error:
            await self.on_error(message)


class PlayerFactory:
    """Creates FakeAudioPlayers and keeps them for inspection."""

    def __init__(self) -> None:
        self.players: List[FakeAudioPlayer] = []
        self.failing_urls: Set[str] = set()

    def __call__(self, url: str) -> FakeAudioPlayer:
        player = FakeAudioPlayer(url, fail_on_play=url in self.failing_urls)
        self.players.append(player)
        return player


def make_upload(name: str = "cat.mp3", size: int = 1024, content_type: str = "") -> AudioUpload:
    return AudioUpload(filename=name, data=b"\x00" * size, content_type=content_type)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def seeded_backend(backend: FakeBackend) -> FakeBackend:
    backend.add_row("dog", "a loyal animal", "animals", "https://cdn/dog.mp3", row_id=1)
    backend.add_row("cat", "a small feline", "animals", "https://cdn/cat.mp3", row_id=2)
    backend.add_row("apple", "a red fruit", "food", None, row_id=3)
    backend.add_row("bread", "baked dough", "food", "https://cdn/bread.mp3", row_id=4)
    backend.add_row("rain", "water falling from clouds", "weather", None, row_id=7)
    return backend


@pytest.fixture
def vocabulary(seeded_backend: FakeBackend) -> VocabularyService:
    return VocabularyService(seeded_backend)


@pytest.fixture
def media(seeded_backend: FakeBackend) -> MediaService:
    paths = StoragePathGenerator(clock=lambda: 1700000000.5, token_factory=lambda: "abc123")
    return MediaService(seeded_backend, max_size_bytes=10 * 1024 * 1024, path_generator=paths)


@pytest.fixture
def users(backend: FakeBackend) -> UserService:
    return UserService(backend)


@pytest.fixture
def player_factory() -> PlayerFactory:
    return PlayerFactory()
