import inspect
import json
from enum import Enum
from typing import Any, get_args, get_origin, get_type_hints


class TypeConverter:
    @staticmethod
    def convert_value(value, expected_type):
        if expected_type is None or expected_type is Any:
            return value
        origin = get_origin(expected_type)

        # Optional[T] and T | None
        if origin is not None and type(None) in get_args(expected_type):
            candidates = [
                t for t in get_args(expected_type) if t is not type(None)
            ]
            if value is None or len(candidates) != 1:
                return value
            expected_type = candidates[0]
            origin = get_origin(expected_type)

        if isinstance(value, list) and origin in (list, tuple):
            elem_type = (
                get_args(expected_type)[0] if get_args(expected_type) else Any
            )
            return [TypeConverter.convert_value(v, elem_type) for v in value]

        if isinstance(value, dict) and hasattr(expected_type, "from_dict"):
            return expected_type.from_dict(value)

        if isinstance(value, str) and hasattr(expected_type, "from_dict"):
            return expected_type.from_dict(json.loads(value))

        if (
            isinstance(expected_type, type)
            and issubclass(expected_type, Enum)
            and not isinstance(value, expected_type)
        ):
            return expected_type(value)

        try:
            if expected_type is int and isinstance(value, (str, float)):
                return int(value)
            if expected_type is float and isinstance(value, (str, int)):
                return float(value)
            if expected_type is str and isinstance(value, (int, float)):
                return str(value)
            if expected_type is bytes and isinstance(value, str):
                return value.encode()
            if expected_type is bool and isinstance(value, str):
                return value.strip().lower() in ("1", "true", "yes", "on")
        except (ValueError, TypeError):
            # leave unconvertible values to the callee
            return value

        return value

    @staticmethod
    def convert_args(method, args: dict) -> dict:
        sig = inspect.signature(method)
        hints = get_type_hints(method)
        converted_args: dict = {}
        for param_name in sig.parameters:
            if param_name in args:
                converted_args[param_name] = TypeConverter.convert_value(
                    args[param_name], hints.get(param_name, None)
                )
        return args | converted_args
