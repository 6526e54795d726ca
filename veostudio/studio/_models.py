from enum import Enum

from veostudio.ai.video_generation import (
    GenerateVideoParams,
    VideoGenerationResult,
)
from veostudio.core import DataModel, FrozenDataModel


class WorkflowState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class ViewAction(str, Enum):
    REGENERATE = "regenerate"
    EXTEND = "extend"
    NEW_VIDEO = "new"
    TRY_AGAIN = "try_again"


class SubmitGate(FrozenDataModel):
    disabled: bool = False
    """Whether submission is blocked."""

    tooltip: str = ""
    """Why submission is blocked."""


class ErrorClassification(FrozenDataModel):
    message: str
    """Message shown to the user."""

    reauthenticate: bool = False
    """Whether the credential selector should be opened."""


class WorkflowSnapshot(FrozenDataModel):
    state: WorkflowState = WorkflowState.IDLE
    error_message: str | None = None
    result: VideoGenerationResult | None = None
    last_config: GenerateVideoParams | None = None
    initial_values: GenerateVideoParams | None = None
    """Seed for the composer, set by try again and extend."""

    can_extend: bool = False
    show_credential_prompt: bool = False


class View(DataModel):
    state: WorkflowState
    title: str
    message: str | None = None
    video: str | None = None
    actions: list[ViewAction] = []
