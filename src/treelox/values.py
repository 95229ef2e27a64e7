from typing import TypeAlias

Value: TypeAlias = None | bool | float | str


def is_truthy(obj: Value) -> bool:
    return obj is not None and obj is not False


def is_number(obj: Value) -> bool:
    # bool is an int subclass, never a float
    return isinstance(obj, float)


def is_equal(left: Value, right: Value) -> bool:
    # True == 1.0 in Python, but never across kinds here
    return type(left) is type(right) and left == right


def stringify(obj: Value) -> str:
    match obj:
        case None:
            return "nil"
        case bool(b):
            return str(b).lower()
        case float(num) if num.is_integer():
            return str(int(num))
        case _:
            return str(obj)
