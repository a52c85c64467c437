"""
g711: кодирование 16-битного LPCM (8 кГц) в G.711, декодирование G.711
в LPCM и прямое преобразование между A-law и u-law.

На вход принимаются wav (заголовок пропускается) или «сырые» файлы.
Результат сохраняется рядом с исходным файлом с расширением выходного формата.

    g711 --in lpcm --out alaw speech.wav speech2.raw
"""
import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import Optional, Sequence

from g711.constants import WAV_EXTENSION, AudioFormat
from g711.errors import G711Error
from g711.formats import Transform, resolve
from g711.settings import Settings, get_settings
from g711.stream import TranscodingWriter

logger = logging.getLogger(__name__)

LOG_LEVELS = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


def output_path(path: Path, output_format: AudioFormat) -> Path:
    return path.with_suffix("." + output_format.value)


def translate(path: Path, transform: Transform, settings: Settings) -> Path:
    """
    Преобразует один файл и возвращает путь к результату.

    :raises G711Error: если результат перезаписал бы исходный файл.
    :raises OSError: ошибки чтения/записи пробрасываются как есть.
    """
    out_path = output_path(path, transform.output_format)
    if out_path.resolve() == path.resolve():
        raise G711Error(f"Выходной файл совпадает с входным: {path}")

    with path.open("rb") as src, out_path.open("wb") as dst:
        if path.suffix.lower() == WAV_EXTENSION:
            src.seek(settings.wav_header_size)
        with TranscodingWriter(dst, transform) as writer:
            shutil.copyfileobj(src, writer, settings.chunk_size)

    logger.info(
        "%s -> %s (bytes_in=%d, bytes_out=%d)",
        path,
        out_path,
        writer.bytes_in,
        writer.bytes_out,
    )
    return out_path


def run(
    files: Sequence[Path],
    input_format: str,
    output_format: str,
    settings: Settings,
) -> int:
    try:
        transform = resolve(input_format, output_format)
    except G711Error as e:
        logger.error("%s", e)
        return 1

    exit_code = 0
    for path in files:
        try:
            translate(path, transform, settings)
        except (G711Error, OSError) as e:
            logger.error("Ошибка при обработке %s: %s", path, e)
            exit_code = 1
    return exit_code


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    formats = [f.value for f in AudioFormat]

    parser = argparse.ArgumentParser(
        prog="g711",
        description="Кодирование, декодирование и транскодирование G.711",
    )
    parser.add_argument("-i", "--in", dest="input_format", required=True, choices=formats)
    parser.add_argument("-o", "--out", dest="output_format", required=True, choices=formats)
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        type=str.upper,
        choices=LOG_LEVELS,
    )
    parser.add_argument("files", nargs="+", type=Path)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    return run(
        files=args.files,
        input_format=args.input_format,
        output_format=args.output_format,
        settings=settings,
    )


if __name__ == "__main__":
    sys.exit(main())
