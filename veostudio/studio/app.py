from __future__ import annotations

import os

from loguru import logger

from veostudio.ai.video_generation import VideoGeneration
from veostudio.content.video import Video
from veostudio.core import StudioConfig
from veostudio.core.exceptions import BadRequestError
from veostudio.interface.credential import Credential

from ._models import View, ViewAction, WorkflowSnapshot, WorkflowState
from .composer import RequestComposer
from .presenter import ResultPresenter
from .workflow import GenerationWorkflow


class Studio:
    """Top level controller.

    Owns the composer, the workflow and the presenter, and keeps the
    composer in step with the workflow: a new video clears the composer,
    try again and extend seed it.
    """

    composer: RequestComposer
    workflow: GenerationWorkflow
    presenter: ResultPresenter
    output: str

    def __init__(
        self,
        generator: VideoGeneration,
        credential: Credential | None = None,
        output: str = "output",
    ):
        self.composer = RequestComposer()
        self.workflow = GenerationWorkflow(
            generator=generator, credential=credential
        )
        self.presenter = ResultPresenter(self.workflow)
        self.output = output

    @staticmethod
    def from_config(config: StudioConfig) -> Studio:
        generator = VideoGeneration(
            __provider__=config.video_generation.to_binding()
        )
        credential = None
        if config.credential is not None:
            credential = Credential(
                __provider__=config.credential.to_binding()
            )
        return Studio(
            generator=generator, credential=credential, output=config.output
        )

    def snapshot(self) -> WorkflowSnapshot:
        return self.workflow.snapshot()

    def render(self) -> View:
        return self.presenter.render()

    async def start(self) -> WorkflowSnapshot:
        return await self.workflow.start()

    async def submit(self) -> WorkflowSnapshot:
        params = self.composer.submit()
        return await self.workflow.submit(params)

    async def handle(self, action: ViewAction | str) -> WorkflowSnapshot:
        snapshot = await self.presenter.handle(action)
        self._sync_composer(ViewAction(action), snapshot)
        return snapshot

    async def continue_with_credential(self) -> WorkflowSnapshot:
        return await self.workflow.continue_with_credential()

    async def save(self, path: str | None = None) -> str:
        """Copy the current video out of its temporary file.

        Returns:
            The path written.
        """
        snapshot = self.workflow.snapshot()
        if snapshot.state != WorkflowState.SUCCESS or not snapshot.result:
            raise BadRequestError("There is no video to save.")
        if path is None:
            path = os.path.join(
                self.output, os.path.basename(snapshot.result.playable)
            )
        await Video.load(snapshot.result.playable).asave(path)
        logger.info("Saved video to {}", path)
        return path

    def _sync_composer(
        self, action: ViewAction, snapshot: WorkflowSnapshot
    ) -> None:
        if snapshot.state != WorkflowState.IDLE:
            return
        if snapshot.initial_values is not None:
            self.composer.seed(snapshot.initial_values)
        elif action in (ViewAction.NEW_VIDEO, ViewAction.TRY_AGAIN):
            self.composer.reset()
