"""Tests for audiodelta.validation module."""

from pathlib import Path

import pytest

from audiodelta.exceptions import ArgumentsInvalidError, CannotOpenFileError, ChannelError
from audiodelta.models import Channel
from audiodelta.validation import (
    validate_audio_file,
    validate_channel,
    validate_path_count,
    validate_sample_rate,
)


class TestValidateAudioFile:
    def test_nonexistent_file(self):
        with pytest.raises(CannotOpenFileError):
            validate_audio_file(Path("/nonexistent/audio.wav"))

    def test_directory_not_file(self, tmp_path):
        with pytest.raises(CannotOpenFileError):
            validate_audio_file(tmp_path)

    def test_valid_file(self, tmp_path):
        audio_file = tmp_path / "test.wav"
        audio_file.write_bytes(b"RIFF")
        assert validate_audio_file(audio_file) == audio_file.resolve()


class TestValidateChannel:
    def test_first_channel_of_mono(self):
        assert validate_channel(Channel.FIRST, 1) == 0

    def test_second_channel_of_mono(self):
        with pytest.raises(ChannelError) as exc_info:
            validate_channel(Channel.SECOND, 1)
        assert exc_info.value.channel == 1
        assert exc_info.value.channels == 1

    def test_plain_int_index(self):
        assert validate_channel(4, 6) == 4

    def test_negative_index(self):
        with pytest.raises(ChannelError):
            validate_channel(-1, 2)


class TestValidateSampleRate:
    def test_positive(self):
        assert validate_sample_rate(48000) == 48000

    @pytest.mark.parametrize("rate", [0, -8000, 8000.5, True])
    def test_invalid(self, rate):
        with pytest.raises(ArgumentsInvalidError):
            validate_sample_rate(rate)


class TestValidatePathCount:
    def test_one_and_two(self):
        validate_path_count(["a.wav"])
        validate_path_count(["a.wav", "b.wav"])

    @pytest.mark.parametrize("paths", [[], ["a", "b", "c"]])
    def test_invalid(self, paths):
        with pytest.raises(ArgumentsInvalidError):
            validate_path_count(paths)
