# conftest.py
import logging

import pytest

from supportdesk.config import create_config

CREDENTIALS = {"SMTP_USER": "bot@acme.example", "SMTP_PASS": "s3cret", "SUPPORT_EMAIL": "help@acme.example"}


class RecordingTransport:
    """Transport stub: records every factory call and sent message."""

    def __init__(self, error=None):
        self.error = error
        self.settings = []
        self.sent = []

    def __call__(self, settings):
        self.settings.append(settings)
        return self

    def send(self, message):
        if self.error is not None:
            raise self.error
        self.sent.append(message)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def unconfigured():
    return create_config(env={})


@pytest.fixture
def configured():
    return create_config(env=CREDENTIALS)


@pytest.fixture
def preview_logger():
    logger = logging.getLogger("test.supportdesk.preview")
    logger.setLevel(logging.INFO)
    return logger


@pytest.fixture
def anyio_backend():
    return "asyncio"
