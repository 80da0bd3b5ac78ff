import base64
import os
import tempfile

import pytest

# Settings are cached on first import; point storage at a throwaway directory first.
os.environ.setdefault("MD2PNG_STORAGE_DIR", tempfile.mkdtemp(prefix="md2png-tests-"))

from md2png.models import PageLayout, WatermarkSpec  # noqa: E402

# 1x1 PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def layout():
    return PageLayout()


@pytest.fixture
def confidential():
    return WatermarkSpec(text="CONFIDENTIAL")


@pytest.fixture
def png_bytes():
    return PNG_BYTES
