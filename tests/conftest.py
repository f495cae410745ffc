import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from config.settings import Settings
from gallery import build_gallery


IMAGE_BYTES = {
    "a.jpg": b"\xff\xd8\xff" + b"a" * 10,
    "b.jpg": b"\xff\xd8\xff" + b"b" * 200,
    "c.jpg": b"\xff\xd8\xff" + b"c" * 3000,
}


@pytest.fixture
def image_dir(tmp_path):
    for name, data in IMAGE_BYTES.items():
        (tmp_path / name).write_bytes(data)
    # Not matched by the *.jpg pattern
    (tmp_path / "notes.txt").write_text("skip me")
    (tmp_path / "d.png").write_bytes(b"png")
    return tmp_path


@pytest.fixture
def settings():
    s = Settings()
    s.app_env = "production"
    return s


@pytest.fixture
def gallery(image_dir):
    return build_gallery(str(image_dir), delay="0", seed=1234)


@pytest.fixture
def client(gallery, settings):
    with TestClient(create_app(gallery, settings)) as c:
        yield c
