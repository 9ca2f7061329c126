import pytest

from vocabhub.errors import AssetError, BackendError, StorageConfigurationError
from vocabhub.services import MediaService, StoredAsset

from tests.conftest import make_upload


def test_validate_accepts_audio_up_to_limit(media):
    upload = make_upload("word.mp3", size=10 * 1024 * 1024)
    assert media.validate(upload) is upload


@pytest.mark.parametrize(
    "upload, fragment",
    [
        (None, "choose an audio file"),
        (make_upload("doc.pdf"), "not an audio file"),
        (make_upload("huge.mp3", size=10 * 1024 * 1024 + 1), "must not exceed 10 MB"),
        (make_upload("empty.mp3", size=0), "is empty"),
    ],
)
def test_validate_rejects(media, upload, fragment):
    with pytest.raises(AssetError) as exc:
        media.validate(upload)
    assert fragment in exc.value.message


@pytest.mark.asyncio
async def test_upload_returns_path_and_public_url(media, seeded_backend):
    asset = await media.upload_audio(make_upload("hello.wav", content_type="audio/wav"))

    assert asset.path == "audio/1700000000500_abc123.wav"
    assert asset.public_url.endswith("/vocab-audio/audio/1700000000500_abc123.wav")
    assert seeded_backend.upload_options[-1]["content-type"] == "audio/wav"


@pytest.mark.asyncio
async def test_missing_bucket_raises_configuration_error(seeded_backend):
    media = MediaService(seeded_backend, bucket="nope")
    with pytest.raises(StorageConfigurationError):
        await media.upload_audio(make_upload())


@pytest.mark.asyncio
async def test_discard_removes_object(media, seeded_backend):
    asset = await media.upload_audio(make_upload())

    assert await media.discard(asset) is True
    assert seeded_backend.blobs == {}


@pytest.mark.asyncio
async def test_discard_failure_is_reported_not_raised(media, seeded_backend):
    seeded_backend.failures["remove_blob"] = BackendError("not allowed")
    assert await media.discard(StoredAsset("audio/x.mp3", "https://cdn/x.mp3")) is False
