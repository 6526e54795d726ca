import inspect
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from ._operation import Operation
from .exceptions import NotSupportedError

T = TypeVar("T", bound=Callable[..., Any])


def operation(**config: Any) -> Callable[[T], T]:
    """Mark a component method as an operation.

    When the component is bound to a provider, the call is forwarded to the
    provider method with the same name. The async variant of an operation is
    the same name prefixed with ``a``. If the provider does not implement the
    operation, the component's own body runs instead.
    """

    def decorator(func: T) -> T:
        setattr(func, "__operation__", True)
        setattr(func, "__config__", config)
        if not inspect.iscoroutinefunction(func):

            @wraps(func)
            def wrapper(*args, **kwargs) -> Any:
                self = args[0]
                context = kwargs.pop("__context__", None)
                if hasattr(self, "__provider__"):
                    operation = _bind_operation(
                        func, func.__name__, args, kwargs
                    )
                    try:
                        return self.__run__(operation, context)
                    except NotSupportedError:
                        return func(*args, **kwargs)
                return func(*args, **kwargs)

            return cast(T, wrapper)
        else:

            @wraps(func)
            async def wrapper(*args, **kwargs) -> Any:
                self = args[0]
                context = kwargs.pop("__context__", None)
                if hasattr(self, "__provider__"):
                    operation = _bind_operation(
                        func, func.__name__[1:], args, kwargs
                    )
                    try:
                        return await self.__arun__(operation, context)
                    except NotSupportedError:
                        return await func(*args, **kwargs)
                return await func(*args, **kwargs)

            return cast(T, wrapper)

    return decorator


def _bind_operation(
    func: Callable[..., Any], name: str, args: tuple, kwargs: dict
) -> Operation:
    sig = inspect.signature(func)
    bound_args = sig.bind(*args, **kwargs)
    bound_args.apply_defaults()
    locals = dict(bound_args.arguments)
    locals.pop("self", None)
    return Operation.normalize(name=name, args=locals)
