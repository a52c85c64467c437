import pytest

from g711 import codecs
from g711.formats import resolve
from g711.main import main, output_path, translate
from g711.settings import Settings
from tests.utility import LPCM_SAMPLE, LPCM_SAMPLE_ALAW

PCM = bytes((i * 53 + 7) % 256 for i in range(1001))


def test_encode_raw_file(tmp_path):
    path = tmp_path / "speech.raw"
    path.write_bytes(PCM)

    assert main(["--in", "lpcm", "--out", "alaw", str(path)]) == 0
    assert (tmp_path / "speech.alaw").read_bytes() == codecs.pcm16_to_alaw(PCM)


def test_wav_header_is_skipped(tmp_path):
    path = tmp_path / "speech.WAV"
    path.write_bytes(b"R" * 44 + LPCM_SAMPLE)

    assert main(["-i", "lpcm", "-o", "alaw", str(path)]) == 0
    assert (tmp_path / "speech.alaw").read_bytes() == LPCM_SAMPLE_ALAW


def test_decode_and_transcode(tmp_path):
    path = tmp_path / "speech.alaw"
    path.write_bytes(PCM)

    assert main(["--in", "alaw", "--out", "lpcm", str(path)]) == 0
    assert main(["--in", "alaw", "--out", "ulaw", str(path)]) == 0
    assert (tmp_path / "speech.lpcm").read_bytes() == codecs.alaw_to_pcm16(PCM)
    assert (tmp_path / "speech.ulaw").read_bytes() == codecs.transcode_alaw_to_ulaw(PCM)


@pytest.mark.parametrize("chunk_size", [1, 3, 64])
def test_translate_chunking(tmp_path, chunk_size):
    path = tmp_path / "speech.sln"
    path.write_bytes(PCM)

    out = translate(path, resolve("lpcm", "ulaw"), Settings(_env_file=None, chunk_size=chunk_size))
    assert out == tmp_path / "speech.ulaw"
    assert out.read_bytes() == codecs.pcm16_to_ulaw(PCM)


def test_identity_pair_creates_nothing(tmp_path):
    path = tmp_path / "speech.raw"
    path.write_bytes(PCM)

    assert main(["--in", "lpcm", "--out", "lpcm", str(path)]) == 1
    assert sorted(p.name for p in tmp_path.iterdir()) == ["speech.raw"]


def test_failed_file_does_not_stop_others(tmp_path, caplog):
    good = tmp_path / "good.raw"
    good.write_bytes(PCM)
    missing = tmp_path / "missing.raw"

    assert main(["--in", "lpcm", "--out", "ulaw", str(missing), str(good)]) == 1
    assert (tmp_path / "good.ulaw").exists()
    assert "missing.raw" in caplog.text


def test_output_must_differ_from_input(tmp_path):
    path = tmp_path / "speech.alaw"
    path.write_bytes(PCM)

    assert main(["--in", "ulaw", "--out", "alaw", str(path)]) == 1
    assert path.read_bytes() == PCM


def test_output_path(tmp_path):
    assert output_path(tmp_path / "a.b.wav", resolve("lpcm", "alaw").output_format) == tmp_path / "a.b.alaw"


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["--in", "lpcm", "--out", "alaw"],
        ["--in", "mp3", "--out", "alaw", "x.raw"],
        ["--log-level", "foo", "--in", "lpcm", "--out", "alaw", "x.raw"],
    ],
)
def test_usage_errors(argv):
    with pytest.raises(SystemExit) as e:
        main(argv)
    assert e.value.code == 2


def test_log_level_is_case_insensitive(tmp_path):
    path = tmp_path / "speech.raw"
    path.write_bytes(PCM)

    assert main(["--log-level", "debug", "--in", "lpcm", "--out", "ulaw", str(path)]) == 0
    assert (tmp_path / "speech.ulaw").read_bytes() == codecs.pcm16_to_ulaw(PCM)
