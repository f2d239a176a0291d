"""
Ошибки доменного слоя

Сервисы проверяют все правила до записи в базу и сообщают о нарушении
одним из этих исключений. Перевод в ответ пользователю делает вызывающий слой.
"""


class KitchenPosError(Exception):
    """Базовая ошибка кассы"""


class InvalidArgumentError(KitchenPosError, ValueError):
    """Некорректные входные данные или нарушение правила предметной области"""


class NotFoundError(KitchenPosError, LookupError):
    """Сущность с указанным идентификатором не существует"""


class IllegalStateError(KitchenPosError, RuntimeError):
    """Операция недопустима в текущем состоянии сущности"""
