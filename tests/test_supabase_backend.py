from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from vocabhub.errors import (
    AuthenticationError,
    BackendError,
    ConfigurationError,
    StorageConfigurationError,
    UploadError,
)
from vocabhub.models import Identity
from vocabhub.services import RowQuery
from vocabhub.services.supabase_backend import SupabaseBackend


class PostgrestFailure(Exception):
    def __init__(self, message, details=None, hint=None, code=None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.hint = hint
        self.code = code


def _builder(data=None):
    builder = MagicMock()
    for name in ("select", "eq", "or_", "order", "limit", "insert", "delete"):
        getattr(builder, name).return_value = builder
    builder.execute.return_value = SimpleNamespace(data=data if data is not None else [])
    return builder


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def supabase(client):
    return SupabaseBackend(client)


def test_from_config_requires_url_and_key():
    with pytest.raises(ConfigurationError):
        SupabaseBackend.from_config(url="", anon_key="key")
    with pytest.raises(ConfigurationError):
        SupabaseBackend.from_config(url="https://x.supabase.co", anon_key="  ")


def test_select_builds_filters_search_order_and_limit(supabase, client):
    builder = _builder([{"id": 1, "word": "cat"}])
    client.table.return_value = builder

    rows = supabase.select_rows(
        "vocab",
        RowQuery(equals={"cat": "animals"}, search="ca(t", order_by="word", limit=5),
    )

    assert rows == [{"id": 1, "word": "cat"}]
    client.table.assert_called_once_with("vocab")
    builder.select.assert_called_once_with("*")
    builder.eq.assert_called_once_with("cat", "animals")
    builder.or_.assert_called_once_with("word.ilike.%ca t%,meaning.ilike.%ca t%")
    builder.order.assert_called_once_with("word", desc=False)
    builder.limit.assert_called_once_with(5)


def test_select_without_search_skips_or_filter(supabase, client):
    builder = _builder()
    client.table.return_value = builder

    supabase.select_rows("vocab", RowQuery(order_by="created_at", ascending=False))

    builder.or_.assert_not_called()
    builder.order.assert_called_once_with("created_at", desc=True)


def test_query_errors_keep_postgrest_fields(supabase, client):
    builder = _builder()
    builder.execute.side_effect = PostgrestFailure(
        "permission denied", details="RLS", hint="add a policy", code="42501"
    )
    client.table.return_value = builder

    with pytest.raises(BackendError) as exc:
        supabase.select_rows("vocab")

    assert exc.value.message == "permission denied"
    assert exc.value.details == "RLS"
    assert exc.value.hint == "add a policy"
    assert exc.value.code == "42501"


def test_insert_without_returned_row_is_an_error(supabase, client):
    client.table.return_value = _builder([])

    with pytest.raises(BackendError) as exc:
        supabase.insert_row("vocab", {"word": "cat"})
    assert "row-level security" in exc.value.hint


def test_delete_filters_by_id(supabase, client):
    builder = _builder([{"id": 7}])
    client.table.return_value = builder

    assert supabase.delete_row("vocab", 7) == [{"id": 7}]
    builder.delete.assert_called_once_with()
    builder.eq.assert_called_once_with("id", 7)


def test_upload_passes_options_and_returns_path(supabase, client):
    bucket = client.storage.from_.return_value
    bucket.upload.return_value = SimpleNamespace(path="audio/1_x.mp3")
    options = {"cache-control": "3600", "content-type": "audio/mpeg", "upsert": "false"}

    assert supabase.upload_blob("vocab-audio", "audio/1_x.mp3", b"data", options) == "audio/1_x.mp3"

    client.storage.from_.assert_called_with("vocab-audio")
    bucket.upload.assert_called_once_with(path="audio/1_x.mp3", file=b"data", file_options=options)


def test_missing_bucket_is_distinguished(supabase, client):
    client.storage.from_.return_value.upload.side_effect = Exception("Bucket not found")

    with pytest.raises(StorageConfigurationError) as exc:
        supabase.upload_blob("vocab-audio", "audio/1_x.mp3", b"data")
    assert "vocab-audio" in exc.value.message


def test_other_upload_failures_are_upload_errors(supabase, client):
    client.storage.from_.return_value.upload.side_effect = Exception("The resource already exists")

    with pytest.raises(UploadError) as exc:
        supabase.upload_blob("vocab-audio", "audio/1_x.mp3", b"data")
    assert not isinstance(exc.value, StorageConfigurationError)


def test_sign_in_maps_user_to_identity(supabase, client):
    client.auth.sign_in_with_password.return_value = SimpleNamespace(
        user=SimpleNamespace(id="uid-1", email="me@example.com"),
        session=object(),
    )

    result = supabase.sign_in("me@example.com", "secret1")

    assert result.identity == Identity(id="uid-1", email="me@example.com")
    client.auth.sign_in_with_password.assert_called_once_with(
        {"email": "me@example.com", "password": "secret1"}
    )


def test_sign_in_failure_becomes_authentication_error(supabase, client):
    client.auth.sign_in_with_password.side_effect = PostgrestFailure("Invalid login credentials")

    with pytest.raises(AuthenticationError) as exc:
        supabase.sign_in("me@example.com", "nope123")
    assert exc.value.message == "Invalid login credentials"


def test_sign_up_without_session_needs_confirmation(supabase, client):
    client.auth.sign_up.return_value = SimpleNamespace(
        user=SimpleNamespace(id="uid-2", email="new@example.com"),
        session=None,
    )

    result = supabase.sign_up("new@example.com", "secret1")

    assert result.has_session is False


def test_auth_events_reach_listeners(supabase, client):
    seen = []
    supabase.on_auth_change(seen.append)
    supabase.on_auth_change(seen.append)
    client.auth.on_auth_state_change.assert_called_once()

    session = SimpleNamespace(user=SimpleNamespace(id="uid-1", email="me@example.com"))
    supabase._on_auth_event("TOKEN_REFRESHED", session)
    supabase._on_auth_event("SIGNED_OUT", session)

    assert seen[:2] == [Identity(id="uid-1", email="me@example.com")] * 2
    assert seen[2:] == [None, None]
