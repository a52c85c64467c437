from enum import Enum

class AudioFormat(str, Enum):
    alaw = "alaw"
    ulaw = "ulaw"
    lpcm = "lpcm"

# Байт на сэмпл для каждого формата (LPCM: 16 бит LE, G.711: 8 бит)
SAMPLE_WIDTH = {
    AudioFormat.alaw: 1,
    AudioFormat.ulaw: 1,
    AudioFormat.lpcm: 2,
}

# A-law: инверсия чётных битов линейного кода
ALAW_XOR_MASK = 0x55

# u-law: смещение и ограничение 14-битной амплитуды
ULAW_BIAS = 33
ULAW_CLIP = 0x1FFF

# Фиксированный размер заголовка WAV (без разбора контейнера)
WAV_HEADER_SIZE = 44
WAV_EXTENSION = ".wav"

DEFAULT_CHUNK_SIZE = 4096
