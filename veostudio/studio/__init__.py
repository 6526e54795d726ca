from ._models import (
    ErrorClassification,
    SubmitGate,
    View,
    ViewAction,
    WorkflowSnapshot,
    WorkflowState,
)
from .composer import SELECTABLE_MODES, RequestComposer, check_request
from .errors import classify_error
from .app import Studio
from .presenter import ResultPresenter
from .presets import SERVICE_PRESETS, ServicePreset, get_preset
from .workflow import GenerationWorkflow

__all__ = [
    "ErrorClassification",
    "GenerationWorkflow",
    "RequestComposer",
    "ResultPresenter",
    "SELECTABLE_MODES",
    "SERVICE_PRESETS",
    "Studio",
    "ServicePreset",
    "SubmitGate",
    "View",
    "ViewAction",
    "WorkflowSnapshot",
    "WorkflowState",
    "check_request",
    "classify_error",
    "get_preset",
]
