import asyncio
import io

from fastapi import UploadFile

from examcheck.utils import file_utils


def test_unique_filename_differs_within_same_millisecond(monkeypatch):
    monkeypatch.setattr(file_utils.time, "time", lambda: 1700000000.123)

    first = file_utils.get_unique_filename("sheet.jpg", prefix="scan")
    second = file_utils.get_unique_filename("sheet.jpg", prefix="scan")

    assert first != second
    assert first.startswith("scan_1700000000123_")
    assert first.endswith(".jpg")


def test_unique_filename_uses_original_stem_without_prefix():
    assert file_utils.get_unique_filename("roster.csv").startswith("roster_")


def test_simultaneous_uploads_are_stored_separately(tmp_path, monkeypatch):
    monkeypatch.setattr(file_utils.time, "time", lambda: 1700000000.123)
    uploads = [
        UploadFile(file=io.BytesIO(b"first sheet"), filename="sheet.jpg"),
        UploadFile(file=io.BytesIO(b"second sheet"), filename="sheet.jpg"),
    ]

    async def save_both():
        return await asyncio.gather(*(file_utils.save_upload_file(u, tmp_path, prefix="scan") for u in uploads))

    (ok1, path1, _), (ok2, path2, _) = asyncio.run(save_both())

    assert ok1 and ok2
    assert path1 != path2
    with open(path1, "rb") as f:
        assert f.read() == b"first sheet"
    with open(path2, "rb") as f:
        assert f.read() == b"second sheet"


def test_oversized_upload_is_rejected_and_removed(tmp_path, monkeypatch):
    monkeypatch.setattr(file_utils, "MAX_UPLOAD_SIZE", 4)
    upload = UploadFile(file=io.BytesIO(b"too large"), filename="sheet.jpg")

    ok, path, error = asyncio.run(file_utils.save_upload_file(upload, tmp_path, prefix="scan"))

    assert not ok
    assert path is None
    assert "maximum allowed size" in error
    assert list(tmp_path.iterdir()) == []
