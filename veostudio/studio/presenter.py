from __future__ import annotations

from itertools import cycle
from typing import Iterator

from veostudio.core.exceptions import BadRequestError

from ._models import View, ViewAction, WorkflowSnapshot, WorkflowState
from .workflow import GenerationWorkflow

IDLE_TITLE = "Transform Services into Cinematic Motion"
IDLE_MESSAGE = (
    "Create high-end motion graphics for websites, gyms, medical practices, "
    "and academic excellence with the AI director."
)
SUCCESS_TITLE = "Visual Identity Generated"
SUCCESS_MESSAGE = "Motion Masterpiece Complete"
ERROR_TITLE = "Generation Error"
LOADING_TITLE = "Generating Your Video"
LOADING_MESSAGES = (
    "Warming up the digital director...",
    "Gathering pixels and photons...",
    "Storyboarding your vision...",
    "Rendering the first frames...",
    "Applying cinematic lighting...",
    "This can take a few minutes, hang tight!",
)


class ResultPresenter:
    """Turns workflow snapshots into views and routes view actions."""

    workflow: GenerationWorkflow
    _loading_messages: Iterator[str]

    def __init__(self, workflow: GenerationWorkflow):
        self.workflow = workflow
        self._loading_messages = cycle(LOADING_MESSAGES)

    def render(self, snapshot: WorkflowSnapshot | None = None) -> View:
        snapshot = snapshot or self.workflow.snapshot()
        if snapshot.state == WorkflowState.LOADING:
            return self.render_loading()
        if snapshot.state == WorkflowState.SUCCESS and snapshot.result:
            actions = [ViewAction.REGENERATE]
            if snapshot.can_extend:
                actions.append(ViewAction.EXTEND)
            actions.append(ViewAction.NEW_VIDEO)
            return View(
                state=snapshot.state,
                title=SUCCESS_TITLE,
                message=SUCCESS_MESSAGE,
                video=snapshot.result.playable,
                actions=actions,
            )
        if snapshot.state == WorkflowState.ERROR and snapshot.error_message:
            return View(
                state=snapshot.state,
                title=ERROR_TITLE,
                message=snapshot.error_message,
                actions=[ViewAction.TRY_AGAIN],
            )
        return View(
            state=WorkflowState.IDLE, title=IDLE_TITLE, message=IDLE_MESSAGE
        )

    def render_loading(self) -> View:
        return View(
            state=WorkflowState.LOADING,
            title=LOADING_TITLE,
            message=next(self._loading_messages),
        )

    async def handle(self, action: ViewAction | str) -> WorkflowSnapshot:
        """Run a view action against the workflow.

        Raises:
            BadRequestError: The action is unknown or not offered by the
                current view.
        """
        try:
            action = ViewAction(action)
        except ValueError:
            raise BadRequestError(f"Unknown action {action}") from None
        if action not in self.render().actions:
            raise BadRequestError(f"{action.value} is not available now")
        if action == ViewAction.REGENERATE:
            return await self.workflow.regenerate()
        if action == ViewAction.EXTEND:
            return self.workflow.extend()
        if action == ViewAction.TRY_AGAIN:
            return self.workflow.try_again()
        return self.workflow.new_video()
