from PIL import Image
import pytest


def make_gray_image(width, height, value):
    return Image.new("L", (width, height), value)


@pytest.fixture
def black_image():
    return make_gray_image(384, 100, 0)


@pytest.fixture
def white_image():
    return make_gray_image(384, 100, 255)


@pytest.fixture(autouse=True)
def clean_t02_env(monkeypatch):
    for name in ("T02_FEED_LINES", "T02_DEVICE", "T02_BLE_ADDRESS", "T02_SIMULATION_MODE",
                 "T02_BLE_CHUNK_SIZE", "T02_BLE_CHUNK_DELAY", "T02_SETTLE_TIME", "T02_BLE_SETTLE_TIME", "T02_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
