import pytest

from g711 import codecs
from g711.constants import AudioFormat
from g711.errors import G711Error, InvalidFormatError
from g711.formats import parse_format, resolve


@pytest.mark.parametrize(
    "input_format, output_format, convert, ratio, input_width, output_width",
    [
        ("lpcm", "alaw", codecs.pcm16_to_alaw, 0.5, 2, 1),
        ("lpcm", "ulaw", codecs.pcm16_to_ulaw, 0.5, 2, 1),
        ("alaw", "lpcm", codecs.alaw_to_pcm16, 2.0, 1, 2),
        ("ulaw", "lpcm", codecs.ulaw_to_pcm16, 2.0, 1, 2),
        ("alaw", "ulaw", codecs.transcode_alaw_to_ulaw, 1.0, 1, 1),
        ("ulaw", "alaw", codecs.transcode_ulaw_to_alaw, 1.0, 1, 1),
    ],
)
def test_resolve_valid_pairs(input_format, output_format, convert, ratio, input_width, output_width):
    transform = resolve(input_format, output_format)
    assert transform.input_format == AudioFormat(input_format)
    assert transform.output_format == AudioFormat(output_format)
    assert transform.convert is convert
    assert transform.ratio == ratio
    assert transform.input_width == input_width
    assert transform.output_width == output_width


@pytest.mark.parametrize("audio_format", list(AudioFormat))
def test_resolve_identity_pair_fails(audio_format):
    with pytest.raises(InvalidFormatError):
        resolve(audio_format, audio_format)


@pytest.mark.parametrize(
    "input_format, output_format",
    [
        ("pcm", "alaw"),
        ("alaw", "g729"),
        ("", "lpcm"),
        (None, "lpcm"),
        (1, "ulaw"),
    ],
)
def test_resolve_unknown_format_fails(input_format, output_format):
    with pytest.raises(InvalidFormatError):
        resolve(input_format, output_format)


def test_invalid_format_error_is_value_error():
    with pytest.raises(ValueError):
        resolve("lpcm", "lpcm")
    assert issubclass(InvalidFormatError, G711Error)


def test_parse_format():
    assert parse_format(AudioFormat.ulaw) is AudioFormat.ulaw
    assert parse_format(" ALaw ") is AudioFormat.alaw
    assert parse_format("LPCM") is AudioFormat.lpcm


def test_transform_is_immutable():
    transform = resolve(AudioFormat.alaw, AudioFormat.lpcm)
    with pytest.raises(AttributeError):
        transform.ratio = 1.0
