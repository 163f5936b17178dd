"""Pytest configuration and fixtures for PlayDeck tests."""

import pytest
import tempfile
import logging
from pathlib import Path
from unittest.mock import Mock, patch
import numpy as np
import soundfile as sf


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without devices or files")
    config.addinivalue_line("markers", "integration: tests using real files and mocked devices")
    config.addinivalue_line("markers", "hardware: tests needing a real audio output device")


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def mock_pyaudio():
    """Mock PyAudio for testing without actual audio hardware."""
    with patch('pyaudio.PyAudio') as mock_pyaudio_class:
        mock_pyaudio_instance = Mock()
        mock_stream = Mock()

        mock_stream.write.return_value = None
        mock_stream.stop_stream.return_value = None
        mock_stream.close.return_value = None

        mock_pyaudio_instance.open.return_value = mock_stream
        mock_pyaudio_instance.terminate.return_value = None
        mock_pyaudio_instance.get_format_from_width.return_value = 8  # paInt16

        mock_pyaudio_class.return_value = mock_pyaudio_instance

        yield {
            'class': mock_pyaudio_class,
            'instance': mock_pyaudio_instance,
            'stream': mock_stream
        }


@pytest.fixture
def write_wav(temp_data_dir):
    """Factory writing a sine-wave WAV file into the temp directory."""
    def _write(name="tone.wav", seconds=1.0, sample_rate=8000, channels=1):
        frames = int(seconds * sample_rate)
        t = np.linspace(0, seconds, frames, False)
        tone = (np.sin(2 * np.pi * 440 * t) * 0.5 * 32767).astype(np.int16)
        if channels > 1:
            tone = np.column_stack([tone] * channels)
        path = Path(temp_data_dir) / name
        sf.write(str(path), tone, sample_rate, subtype="PCM_16")
        return str(path)

    return _write


@pytest.fixture
def sample_audio_file(write_wav):
    """One second of mono 8kHz audio."""
    return write_wav()

