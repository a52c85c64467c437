class G711Error(Exception):
    """Базовая ошибка пакета g711."""


class InvalidFormatError(G711Error, ValueError):
    """Неизвестный формат или неподдерживаемая пара форматов."""


class InvalidSinkError(G711Error, ValueError):
    """Не передан приёмник (или источник) данных."""


class AdapterClosedError(G711Error, ValueError):
    """Операция над уже закрытым адаптером."""
