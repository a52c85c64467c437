from __future__ import annotations

from functools import lru_cache

import numpy as np

from g711.constants import ALAW_XOR_MASK, ULAW_BIAS, ULAW_CLIP
from g711.tables import (
    ALAW_TO_LPCM,
    ALAW_TO_LPCM_ARRAY,
    ALAW_TO_ULAW,
    ALAW_TO_ULAW_ARRAY,
    ULAW_TO_ALAW,
    ULAW_TO_ALAW_ARRAY,
    ULAW_TO_LPCM,
    ULAW_TO_LPCM_ARRAY,
)


def _to_int16(sample: int) -> int:
    return ((sample + 0x8000) & 0xFFFF) - 0x8000


def encode_alaw(sample: int) -> int:
    """
    Кодирует один сэмпл LPCM16 в A-law.

    Отрицательные значения обрабатываются в обратном коде, поэтому
    дальнейшее вычисление сегмента одинаково для обоих знаков.

    :param sample: Знаковый 16-битный сэмпл.
    :return: Байт A-law (0..255).
    """
    sample = _to_int16(sample)
    sign = (~sample >> 8) & 0x80
    if not sign:
        sample = ~sample

    code = sample >> 4
    if code > 15:
        # 12 - clz16(code)
        segment = code.bit_length() - 4
        code >>= segment - 1
        code -= 16
        code += segment << 4
    return (sign | code) ^ ALAW_XOR_MASK


def encode_ulaw(sample: int) -> int:
    """
    Кодирует один сэмпл LPCM16 в u-law.

    :param sample: Знаковый 16-битный сэмпл.
    :return: Байт u-law (0..255).
    """
    sample = _to_int16(sample)
    sign = (~sample >> 8) & 0x80
    if not sign:
        sample = ~sample

    sample = (sample >> 2) + ULAW_BIAS
    if sample > ULAW_CLIP:
        sample = ULAW_CLIP
    # 16 - clz16(sample >> 5)
    segment = (sample >> 5).bit_length()
    mantissa = 0x0F - ((sample >> segment) & 0x0F)
    return sign | ((8 - segment) << 4) | mantissa


def decode_alaw(code: int) -> int:
    return ALAW_TO_LPCM[code & 0xFF]


def decode_ulaw(code: int) -> int:
    return ULAW_TO_LPCM[code & 0xFF]


def alaw_to_ulaw(code: int) -> int:
    return ALAW_TO_ULAW[code & 0xFF]


def ulaw_to_alaw(code: int) -> int:
    return ULAW_TO_ALAW[code & 0xFF]


@lru_cache(maxsize=1)
def _alaw_encode_table() -> np.ndarray:
    # Индекс: сэмпл как uint16
    return np.fromiter((encode_alaw(i) for i in range(0x10000)), dtype=np.uint8, count=0x10000)


@lru_cache(maxsize=1)
def _ulaw_encode_table() -> np.ndarray:
    return np.fromiter((encode_ulaw(i) for i in range(0x10000)), dtype=np.uint8, count=0x10000)


def _pcm16_samples(data: bytes) -> np.ndarray:
    return np.frombuffer(data, dtype="<u2", count=len(data) // 2)


def pcm16_to_alaw(data: bytes) -> bytes:
    """
    Кодирует линейный PCM16 (little-endian) в G.711 A-law.

    :param data: PCM16 поток (2 байта на сэмпл). Неполный последний сэмпл отбрасывается.
    :return: A-law байты (1 байт на сэмпл).
    """
    if len(data) < 2:
        return b""
    return _alaw_encode_table()[_pcm16_samples(data)].tobytes()


def pcm16_to_ulaw(data: bytes) -> bytes:
    """
    Кодирует линейный PCM16 (little-endian) в G.711 u-law.

    :param data: PCM16 поток (2 байта на сэмпл). Неполный последний сэмпл отбрасывается.
    :return: u-law байты (1 байт на сэмпл).
    """
    if len(data) < 2:
        return b""
    return _ulaw_encode_table()[_pcm16_samples(data)].tobytes()


def alaw_to_pcm16(data: bytes) -> bytes:
    """
    Декодирует G.711 A-law в линейный PCM16 (little-endian).

    :param data: Поток A-law (1 байт на сэмпл).
    :return: Линейный PCM16 LE (2 байта на сэмпл).
    """
    if not data:
        return b""
    return ALAW_TO_LPCM_ARRAY[np.frombuffer(data, dtype=np.uint8)].tobytes()


def ulaw_to_pcm16(data: bytes) -> bytes:
    """
    Декодирует G.711 u-law в линейный PCM16 (little-endian).

    :param data: Поток u-law (1 байт на сэмпл).
    :return: Линейный PCM16 LE (2 байта на сэмпл).
    """
    if not data:
        return b""
    return ULAW_TO_LPCM_ARRAY[np.frombuffer(data, dtype=np.uint8)].tobytes()


def transcode_alaw_to_ulaw(data: bytes) -> bytes:
    """Прямое преобразование A-law -> u-law без промежуточного LPCM."""
    if not data:
        return b""
    return ALAW_TO_ULAW_ARRAY[np.frombuffer(data, dtype=np.uint8)].tobytes()


def transcode_ulaw_to_alaw(data: bytes) -> bytes:
    """Прямое преобразование u-law -> A-law без промежуточного LPCM."""
    if not data:
        return b""
    return ULAW_TO_ALAW_ARRAY[np.frombuffer(data, dtype=np.uint8)].tobytes()
