from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from g711 import codecs
from g711.constants import SAMPLE_WIDTH, AudioFormat
from g711.errors import InvalidFormatError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transform:
    input_format: AudioFormat
    output_format: AudioFormat
    convert: Callable[[bytes], bytes]
    # Байт на выходе на один байт входа
    ratio: float

    @property
    def input_width(self) -> int:
        return SAMPLE_WIDTH[self.input_format]

    @property
    def output_width(self) -> int:
        return SAMPLE_WIDTH[self.output_format]


_CONVERTERS: dict[tuple[AudioFormat, AudioFormat], Callable[[bytes], bytes]] = {
    (AudioFormat.lpcm, AudioFormat.alaw): codecs.pcm16_to_alaw,
    (AudioFormat.lpcm, AudioFormat.ulaw): codecs.pcm16_to_ulaw,
    (AudioFormat.alaw, AudioFormat.lpcm): codecs.alaw_to_pcm16,
    (AudioFormat.ulaw, AudioFormat.lpcm): codecs.ulaw_to_pcm16,
    (AudioFormat.alaw, AudioFormat.ulaw): codecs.transcode_alaw_to_ulaw,
    (AudioFormat.ulaw, AudioFormat.alaw): codecs.transcode_ulaw_to_alaw,
}


def parse_format(value: AudioFormat | str) -> AudioFormat:
    """
    Приводит имя формата ("alaw", "ulaw", "lpcm") к AudioFormat.

    :raises InvalidFormatError: если формат неизвестен.
    """
    if isinstance(value, AudioFormat):
        return value
    if isinstance(value, str):
        try:
            return AudioFormat(value.strip().lower())
        except ValueError:
            pass
    raise InvalidFormatError(f"Неизвестный формат: {value!r}")


def resolve(
    input_format: AudioFormat | str,
    output_format: AudioFormat | str,
) -> Transform:
    """
    Выбирает функцию преобразования и коэффициент для пары форматов.

    Допустимы шесть пар: кодирование LPCM -> A-law/u-law (0.5),
    декодирование A-law/u-law -> LPCM (2.0) и прямое
    транскодирование между A-law и u-law (1.0).

    :param input_format: Формат входных данных.
    :param output_format: Формат выходных данных.
    :return: Transform с функцией и коэффициентом.
    :raises InvalidFormatError: для неизвестных форматов и одинаковых форматов на входе и выходе.
    """
    src = parse_format(input_format)
    dst = parse_format(output_format)

    convert = _CONVERTERS.get((src, dst))
    if convert is None:
        raise InvalidFormatError(
            f"Неподдерживаемая пара форматов: {src.value} -> {dst.value}"
        )

    transform = Transform(
        input_format=src,
        output_format=dst,
        convert=convert,
        ratio=SAMPLE_WIDTH[dst] / SAMPLE_WIDTH[src],
    )
    logger.debug(
        "Выбрано преобразование %s -> %s (ratio=%.1f)",
        src.value,
        dst.value,
        transform.ratio,
    )
    return transform
