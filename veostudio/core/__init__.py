from ._async_helper import run_async, run_sync, stop_loop
from ._component import Component
from ._context import Context
from ._decorators import operation
from ._loader import Loader
from ._log_helper import setup_logging, warn
from ._operation import Operation
from ._provider import Provider
from ._response import Response
from ._type_converter import TypeConverter
from .data_model import DataModel, DataModelField, FrozenDataModel
from .manifest import StudioConfig

__all__ = [
    "Component",
    "Context",
    "DataModel",
    "DataModelField",
    "FrozenDataModel",
    "Loader",
    "Operation",
    "Provider",
    "Response",
    "StudioConfig",
    "TypeConverter",
    "operation",
    "run_async",
    "run_sync",
    "setup_logging",
    "stop_loop",
    "warn",
]
