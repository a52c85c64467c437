from g711.codecs import (
    alaw_to_pcm16,
    alaw_to_ulaw,
    decode_alaw,
    decode_ulaw,
    encode_alaw,
    encode_ulaw,
    pcm16_to_alaw,
    pcm16_to_ulaw,
    transcode_alaw_to_ulaw,
    transcode_ulaw_to_alaw,
    ulaw_to_alaw,
    ulaw_to_pcm16,
)
from g711.constants import AudioFormat
from g711.errors import (
    AdapterClosedError,
    G711Error,
    InvalidFormatError,
    InvalidSinkError,
)
from g711.formats import Transform, parse_format, resolve
from g711.stream import (
    TranscodingReader,
    TranscodingWriter,
    open_reader,
    open_writer,
)

__all__ = [
    "AdapterClosedError",
    "AudioFormat",
    "G711Error",
    "InvalidFormatError",
    "InvalidSinkError",
    "Transform",
    "TranscodingReader",
    "TranscodingWriter",
    "alaw_to_pcm16",
    "alaw_to_ulaw",
    "decode_alaw",
    "decode_ulaw",
    "encode_alaw",
    "encode_ulaw",
    "open_reader",
    "open_writer",
    "parse_format",
    "pcm16_to_alaw",
    "pcm16_to_ulaw",
    "resolve",
    "transcode_alaw_to_ulaw",
    "transcode_ulaw_to_alaw",
    "ulaw_to_alaw",
    "ulaw_to_pcm16",
]
