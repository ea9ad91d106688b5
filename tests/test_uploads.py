import pytest
from starlette.datastructures import UploadFile


def png_files(count: int) -> list[tuple[str, tuple[str, bytes, str]]]:
    return [
        ("images", (f"photo{i}.png", b"\x89PNG" + bytes([i]) * 32, "image/png"))
        for i in range(count)
    ]


def test_upload_returns_urls_in_request_order(client, sign_up, storage):
    headers = sign_up("alice")
    files = png_files(3)

    response = client.post("/upload/images", files=files, headers=headers)
    assert response.status_code == 200
    urls = response.json()["urls"]
    assert len(urls) == 3
    for index, url in enumerate(urls):
        assert url.endswith(f"-{index}-photo{index}.png")
        assert "/items/" in url
    assert len(storage.objects) == 3


def test_six_files_rejected_without_uploading(client, sign_up, storage):
    headers = sign_up("alice")
    response = client.post("/upload/images", files=png_files(6), headers=headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Maximum 5 images allowed"}
    assert storage.upload_calls == 0


def test_no_files(client, sign_up):
    headers = sign_up("alice")
    response = client.post("/upload/images", headers=headers)
    assert response.status_code == 400
    assert response.json() == {"error": "No images provided"}


def test_invalid_type_rejects_whole_batch(client, sign_up, storage):
    headers = sign_up("alice")
    files = png_files(1) + [("images", ("notes.txt", b"hello", "text/plain"))]
    response = client.post("/upload/images", files=files, headers=headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid file type"}
    assert storage.upload_calls == 0


def test_oversized_file(client, sign_up, storage):
    headers = sign_up("alice")
    big = b"\x89PNG" + b"0" * (5 * 1024 * 1024)
    response = client.post(
        "/upload/images", files=[("images", ("big.png", big, "image/png"))], headers=headers
    )
    assert response.status_code == 400
    assert response.json() == {"error": "File size exceeds 5MB limit"}
    assert storage.upload_calls == 0


def test_failed_upload_rolls_back_stored_images(client, sign_up, storage):
    headers = sign_up("alice")
    storage.fail_names = {"photo1.png"}

    response = client.post("/upload/images", files=png_files(3), headers=headers)
    assert response.status_code == 502
    assert response.json() == {"error": "Image upload failed"}
    assert storage.objects == {}
    assert len(storage.deleted) == 2
    assert not any(path.endswith("photo1.png") for path in storage.deleted)


@pytest.mark.parametrize(
    "headers, status",
    [({}, 401), ({"Authorization": "Bearer token-user_ghost"}, 404)],
)
def test_upload_requires_known_caller(client, storage, headers, status):
    response = client.post("/upload/images", files=png_files(1), headers=headers)
    assert response.status_code == status
    assert storage.upload_calls == 0


def test_rejected_batches_are_not_read(client, sign_up, storage, monkeypatch):
    headers = sign_up("alice")
    reads = []
    original_read = UploadFile.read

    async def counting_read(self, size=-1):
        reads.append(self.filename)
        return await original_read(self, size)

    monkeypatch.setattr(UploadFile, "read", counting_read)

    response = client.post("/upload/images", files=png_files(6), headers=headers)
    assert response.json() == {"error": "Maximum 5 images allowed"}
    big = b"\x89PNG" + b"0" * (5 * 1024 * 1024)
    response = client.post(
        "/upload/images", files=[("images", ("big.png", big, "image/png"))], headers=headers
    )
    assert response.json() == {"error": "File size exceeds 5MB limit"}
    assert reads == []

    response = client.post("/upload/images", files=png_files(2), headers=headers)
    assert response.status_code == 200
    assert reads == ["photo0.png", "photo1.png"]
