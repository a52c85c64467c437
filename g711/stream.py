from __future__ import annotations

import errno
import logging
import math
from typing import Protocol

from g711.constants import AudioFormat
from g711.errors import AdapterClosedError, InvalidSinkError
from g711.formats import Transform, resolve
from g711.settings import get_settings

logger = logging.getLogger(__name__)


class Sink(Protocol):
    def write(self, data: bytes) -> int | None: ...


class Source(Protocol):
    def read(self, size: int = -1) -> bytes | None: ...


def _require(obj: object, method: str, kind: str) -> None:
    if obj is None or not callable(getattr(obj, method, None)):
        raise InvalidSinkError(f"Не передан {kind} данных (нужен метод {method}())")


class _TranscodingStream:
    """
    Общая часть потоковых адаптеров: выбранное преобразование,
    перенос неполного сэмпла между вызовами и состояние открыт/закрыт.

    Экземпляр не потокобезопасен: вызовы должны идти последовательно.
    """

    def __init__(self, transform: Transform):
        self._transform: Transform | None = transform
        # Хвост входа, не составляющий целого сэмпла (не больше 1 байта для LPCM)
        self._carry = b""
        self._closed = False
        self.bytes_in = 0
        self.bytes_out = 0

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def input_format(self) -> AudioFormat:
        return self._active_transform().input_format

    @property
    def output_format(self) -> AudioFormat:
        return self._active_transform().output_format

    def _active_transform(self) -> Transform:
        if self._closed or self._transform is None:
            raise AdapterClosedError("Адаптер закрыт")
        return self._transform

    def _convert(self, data: bytes) -> bytes:
        transform = self._active_transform()
        if self._carry:
            data = self._carry + data
        usable = len(data) - len(data) % transform.input_width
        self._carry = data[usable:]
        return transform.convert(data[:usable])

    def _drop_carry(self, reason: str) -> None:
        if self._carry:
            logger.debug(
                "Сброс незавершённого сэмпла (%d байт, reason=%s)",
                len(self._carry),
                reason,
            )
        self._carry = b""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class TranscodingWriter(_TranscodingStream):
    """
    Кодирует/декодирует/транскодирует данные, записываемые в приёмник.

    write() принимает чанки произвольного размера; байт, не образующий
    целого сэмпла LPCM, сохраняется и дописывается перед следующим чанком.
    """

    def __init__(self, sink: Sink, transform: Transform):
        _require(sink, "write", "приёмник")
        super().__init__(transform)
        self._sink: Sink | None = sink
        # Уже преобразованные данные, которые приёмник ещё не принял
        self._pending = bytearray()
        logger.debug(
            "TranscodingWriter создан: %s -> %s",
            transform.input_format.value,
            transform.output_format.value,
        )

    def write(self, data: bytes) -> int:
        """
        Преобразует data и передаёт результат в приёмник.

        :param data: Входные байты в формате input_format.
        :return: Сколько байт из data вошло в сэмплы, дошедшие до приёмника.
            Перенесённый хвост не учитывается, пока не будет закодирован.
        """
        transform = self._active_transform()
        data = bytes(data)
        if not data:
            return 0

        carried = len(self._carry)
        backlog = len(self._pending)
        self._pending += self._convert(data)
        self.bytes_in += len(data)

        produced = max(0, self._drain() - backlog)
        consumed = int(produced / transform.ratio) - carried
        return min(max(consumed, 0), len(data))

    def _drain(self) -> int:
        moved = 0
        while self._pending:
            written = self._sink.write(bytes(self._pending))
            # None: неблокирующий приёмник сейчас не может принять данные
            if not written:
                logger.debug(
                    "Приёмник не принял данные (в буфере %d байт)",
                    len(self._pending),
                )
                break
            del self._pending[:written]
            moved += written
            self.bytes_out += written
        return moved

    def flush(self) -> None:
        """
        Отдаёт приёмнику все накопленные преобразованные данные.

        :raises BlockingIOError: приёмник не принял часть данных; они
            остаются в буфере до следующего flush().
        """
        self._active_transform()
        self._drain()
        if self._pending:
            raise BlockingIOError(
                errno.EAGAIN,
                f"Приёмник не принял {len(self._pending)} байт",
                0,
            )
        sink_flush = getattr(self._sink, "flush", None)
        if callable(sink_flush):
            sink_flush()

    def reset(self, sink: Sink) -> None:
        """
        Сбрасывает состояние и переключает адаптер на новый приёмник.
        Выбранное преобразование сохраняется.
        """
        self._active_transform()
        _require(sink, "write", "приёмник")
        self._drop_carry("reset")
        self._pending.clear()
        self._sink = sink
        logger.debug("TranscodingWriter: приёмник заменён")

    def close(self) -> None:
        """
        Дописывает буфер в приёмник и закрывает адаптер. Приёмник не закрывается.

        Если приёмник не принял все данные (или flush() упал), адаптер
        остаётся открытым с сохранённым буфером, и close() можно повторить.
        """
        if self._closed:
            return
        self.flush()
        self._drop_carry("close")
        self._sink = None
        self._transform = None
        self._closed = True
        logger.debug(
            "TranscodingWriter закрыт (bytes_in=%d, bytes_out=%d)",
            self.bytes_in,
            self.bytes_out,
        )


class TranscodingReader(_TranscodingStream):
    """
    Читает данные из источника и отдаёт их в формате output_format.
    Пустое чтение из источника считается концом потока.
    """

    def __init__(self, source: Source, transform: Transform):
        _require(source, "read", "источник")
        super().__init__(transform)
        self._source: Source | None = source
        self._buffer = bytearray()
        self._eof = False
        logger.debug(
            "TranscodingReader создан: %s -> %s",
            transform.input_format.value,
            transform.output_format.value,
        )

    def _fill(self, size: int) -> None:
        transform = self._active_transform()
        while len(self._buffer) < size and not self._eof:
            missing = size - len(self._buffer)
            want = max(1, math.ceil(missing / transform.ratio))
            # Запрашиваем целое число сэмплов с учётом перенесённого хвоста
            want += -(len(self._carry) + want) % transform.input_width

            chunk = self._source.read(want)
            if chunk is None:
                break
            if not chunk:
                self._eof = True
                self._drop_carry("eof")
                break
            self.bytes_in += len(chunk)
            self._buffer += self._convert(bytes(chunk))

    def _take(self, size: int) -> bytes | None:
        self._fill(size)
        n = min(size, len(self._buffer))
        if n == 0 and size and not self._eof:
            # Источник пока без данных, но поток не закончен
            return None
        data = bytes(self._buffer[:n])
        del self._buffer[:n]
        self.bytes_out += n
        return data

    def read(self, size: int | None = -1) -> bytes | None:
        """
        :param size: Сколько байт выхода вернуть; -1 или None: всё до конца потока.
        :return: Не больше size байт; b"" означает конец потока, None:
            неблокирующий источник пока не отдал данных.
        """
        self._active_transform()
        if size is not None and size >= 0:
            return self._take(size) if size else b""

        chunk_size = get_settings().chunk_size
        parts = []
        while True:
            data = self._take(chunk_size)
            if data is None:
                if not parts:
                    return None
                break
            if not data:
                break
            parts.append(data)
        return b"".join(parts)

    def readinto(self, buffer) -> int | None:
        self._active_transform()
        view = memoryview(buffer).cast("B")
        data = self._take(len(view))
        if data is None:
            return None
        view[: len(data)] = data
        return len(data)

    def reset(self, source: Source) -> None:
        self._active_transform()
        _require(source, "read", "источник")
        self._drop_carry("reset")
        self._buffer.clear()
        self._eof = False
        self._source = source
        logger.debug("TranscodingReader: источник заменён")

    def close(self) -> None:
        if self._closed:
            return
        self._drop_carry("close")
        self._buffer.clear()
        self._source = None
        self._transform = None
        self._closed = True
        logger.debug(
            "TranscodingReader закрыт (bytes_in=%d, bytes_out=%d)",
            self.bytes_in,
            self.bytes_out,
        )


def open_writer(
    sink: Sink,
    input_format: AudioFormat | str,
    output_format: AudioFormat | str,
) -> TranscodingWriter:
    """
    Создаёт адаптер записи для пары форматов.

    :raises InvalidFormatError: неподдерживаемая пара форматов.
    :raises InvalidSinkError: приёмник не передан.
    """
    return TranscodingWriter(sink, resolve(input_format, output_format))


def open_reader(
    source: Source,
    input_format: AudioFormat | str,
    output_format: AudioFormat | str,
) -> TranscodingReader:
    """
    Создаёт адаптер чтения для пары форматов.

    :raises InvalidFormatError: неподдерживаемая пара форматов.
    :raises InvalidSinkError: источник не передан.
    """
    return TranscodingReader(source, resolve(input_format, output_format))
