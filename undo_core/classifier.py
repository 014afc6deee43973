# undo_core/classifier.py
from enum import Enum


class UpdateKind(Enum):
    MUTATE_IN_PLACE = "mutate_in_place"
    REPLACEMENT = "replacement"


# ============================================================
# ПУСТАЯ ЗАГЛУШКА ДЛЯ ПРОБНОГО ВЫЗОВА
# ============================================================

class _Blank:
    """
    Значение отсутствующего поля в пробном черновике.
    Поглощает любые операции: арифметика и доступ к полям возвращают
    саму заглушку, вызов метода возвращает None.
    """

    __slots__ = ()

    def _absorb(self, *args, **kwargs):
        return self

    __getattr__ = _absorb
    __getitem__ = _absorb

    def __call__(self, *args, **kwargs):
        # методы вроде append/update возвращают None, как у настоящих коллекций
        return None

    __add__ = __radd__ = __iadd__ = _absorb
    __sub__ = __rsub__ = __isub__ = _absorb
    __mul__ = __rmul__ = __imul__ = _absorb
    __truediv__ = __rtruediv__ = __itruediv__ = _absorb
    __floordiv__ = __rfloordiv__ = __ifloordiv__ = _absorb
    __mod__ = __rmod__ = __imod__ = _absorb
    __pow__ = __rpow__ = __ipow__ = _absorb
    __neg__ = __pos__ = __abs__ = _absorb
    __and__ = __rand__ = __or__ = __ror__ = __xor__ = __rxor__ = _absorb

    def __setitem__(self, key, value):
        pass

    def __delitem__(self, key):
        pass

    def __setattr__(self, name, value):
        pass

    def __delattr__(self, name):
        pass

    def __iter__(self):
        return iter(())

    def __len__(self):
        return 0

    def __contains__(self, item):
        return False

    def __bool__(self):
        return False

    def __lt__(self, other):
        return False

    __le__ = __gt__ = __ge__ = __lt__


class ProbeDraft(dict):
    """Пустой черновик: любое отсутствующее поле читается как заглушка."""

    __slots__ = ()

    def __missing__(self, key):
        return _Blank()

    # удаление отсутствующего поля тоже проходит молча
    def __delitem__(self, key):
        dict.pop(self, key, None)

    def pop(self, key, *default):
        if key in self:
            return dict.pop(self, key)
        if default:
            return default[0]
        return _Blank()

    def popitem(self):
        if self:
            return dict.popitem(self)
        return _Blank(), _Blank()


# ============================================================
# КЛАССИФИКАЦИЯ
# ============================================================

def classify(fn) -> UpdateKind:
    """
    Определяет стиль функции обновления пробным вызовом на пустом черновике.

    - вернула None → мутация черновика (MUTATE_IN_PLACE)
    - вернула значение → замена состояния (REPLACEMENT)
    - упала с ошибкой → REPLACEMENT, обновление не теряется

    Функция вызывается дважды (проба + реальный вызов), поэтому
    она не должна иметь побочных эффектов, кроме работы с состоянием.
    """
    try:
        result = fn(ProbeDraft())
    except Exception:
        return UpdateKind.REPLACEMENT

    if result is None:
        return UpdateKind.MUTATE_IN_PLACE
    return UpdateKind.REPLACEMENT


def is_mutator(fn) -> bool:
    return classify(fn) is UpdateKind.MUTATE_IN_PLACE
