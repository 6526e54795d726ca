import os

import pytest

from veostudio.ai.video_generation import (
    GenerationMode,
    Resolution,
    VideoGeneration,
)
from veostudio.ai.video_generation.providers.mock import Mock
from veostudio.core import StudioConfig
from veostudio.core.exceptions import BadRequestError
from veostudio.interface.credential import Credential
from veostudio.studio import Studio, ViewAction, WorkflowState

from ._providers import get_credential, get_generator, image


def get_studio(tmp_path, credential=None, **parameters) -> Studio:
    return Studio(
        generator=get_generator(output_dir=str(tmp_path), **parameters),
        credential=credential,
        output=str(tmp_path / "output"),
    )


def test_from_config(tmp_path):
    config = StudioConfig.from_dict(
        {
            "video_generation": {"type": "mock"},
            "credential": {
                "type": "static",
                "parameters": {"api_key": "k", "variable": None},
            },
            "output": str(tmp_path),
        }
    )

    studio = Studio.from_config(config)
    generator = studio.workflow.generator
    assert isinstance(generator, VideoGeneration)
    assert isinstance(generator.__provider__, Mock)
    assert isinstance(studio.workflow.credential, Credential)
    assert studio.output == str(tmp_path)


def test_from_config_without_credential():
    config = StudioConfig.from_dict(
        {"video_generation": {"type": "mock"}, "credential": None}
    )
    assert Studio.from_config(config).workflow.credential is None


@pytest.mark.asyncio
async def test_submit_and_save(tmp_path):
    studio = get_studio(tmp_path)
    studio.composer.set_prompt("a neon city")

    snapshot = await studio.submit()
    assert snapshot.state == WorkflowState.SUCCESS
    assert studio.render().video == snapshot.result.playable

    path = await studio.save()
    assert path == os.path.join(
        str(tmp_path / "output"), os.path.basename(snapshot.result.playable)
    )
    with open(path, "rb") as f:
        assert f.read() == snapshot.result.video.get_bytes()

    target = tmp_path / "named" / "video.mp4"
    assert await studio.save(str(target)) == str(target)
    assert target.exists()


@pytest.mark.asyncio
async def test_submit_gated(tmp_path):
    studio = get_studio(tmp_path)

    with pytest.raises(BadRequestError):
        await studio.submit()
    with pytest.raises(BadRequestError):
        await studio.save()


@pytest.mark.asyncio
async def test_try_again_restores_composer(tmp_path):
    studio = get_studio(tmp_path, error="boom")
    studio.composer.select_mode(GenerationMode.FRAMES_TO_VIDEO)
    studio.composer.set_prompt("spin")
    studio.composer.set_start_frame(image())
    await studio.submit()
    studio.composer.reset()

    snapshot = await studio.handle(ViewAction.TRY_AGAIN)
    assert snapshot.state == WorkflowState.IDLE
    params = studio.composer.params
    assert params.mode == GenerationMode.FRAMES_TO_VIDEO
    assert params.prompt == "spin"
    assert params.start_frame is not None


@pytest.mark.asyncio
async def test_new_video_resets_composer(tmp_path):
    studio = get_studio(tmp_path)
    studio.composer.set_prompt("a neon city")
    await studio.submit()

    await studio.handle(ViewAction.NEW_VIDEO)
    assert studio.composer.params.prompt == ""
    assert studio.snapshot().state == WorkflowState.IDLE


@pytest.mark.asyncio
async def test_extend_seeds_composer(tmp_path):
    studio = get_studio(tmp_path)
    studio.composer.set_prompt("a neon city")
    studio.composer.set_resolution(Resolution.P720)
    await studio.submit()

    await studio.handle(ViewAction.EXTEND)
    composer = studio.composer
    assert composer.mode == GenerationMode.EXTEND_VIDEO
    assert composer.format_locked
    assert not composer.gate().disabled

    composer.set_prompt("the camera flies higher")
    snapshot = await studio.submit()
    assert snapshot.state == WorkflowState.SUCCESS
    assert snapshot.last_config.mode == GenerationMode.EXTEND_VIDEO
    assert snapshot.last_config.input_video.source == "last_video.mp4"


@pytest.mark.asyncio
async def test_credential_prompt(tmp_path):
    credential = get_credential(available=False)
    studio = get_studio(tmp_path, credential=credential)

    assert (await studio.start()).show_credential_prompt
    snapshot = await studio.continue_with_credential()
    assert not snapshot.show_credential_prompt
    assert credential.__provider__.selections == 1
