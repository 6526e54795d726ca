import asyncio
import os

import pytest

from veostudio.ai.video_generation import (
    GenerateVideoParams,
    GenerationMode,
    Resolution,
)
from veostudio.core.exceptions import BadRequestError, ConflictError
from veostudio.studio import GenerationWorkflow, WorkflowState
from veostudio.studio.errors import INVALID_KEY_MESSAGE, NOT_FOUND_MESSAGE

from ._providers import (
    frames_request,
    get_credential,
    get_generator,
    text_request,
)


def get_workflow(tmp_path, credential=None, **parameters):
    generator = get_generator(output_dir=str(tmp_path), **parameters)
    return GenerationWorkflow(generator=generator, credential=credential)


def calls(workflow: GenerationWorkflow) -> list[GenerateVideoParams]:
    return workflow.generator.__provider__.calls


@pytest.mark.asyncio
async def test_submit_success(tmp_path):
    workflow = get_workflow(tmp_path)
    request = text_request()

    snapshot = await workflow.submit(request)
    assert snapshot.state == WorkflowState.SUCCESS
    assert snapshot.error_message is None
    assert snapshot.last_config == request
    assert snapshot.can_extend
    assert os.path.exists(snapshot.result.playable)
    assert calls(workflow) == [request]


@pytest.mark.asyncio
async def test_high_resolution_cannot_extend(tmp_path):
    workflow = get_workflow(tmp_path)

    snapshot = await workflow.submit(
        GenerateVideoParams(prompt="x", resolution=Resolution.P1080)
    )
    assert snapshot.state == WorkflowState.SUCCESS
    assert not snapshot.can_extend
    with pytest.raises(BadRequestError):
        workflow.extend()


@pytest.mark.asyncio
async def test_submit_failure(tmp_path):
    workflow = get_workflow(tmp_path, error="quota exceeded")
    request = frames_request()

    snapshot = await workflow.submit(request)
    assert snapshot.state == WorkflowState.ERROR
    assert snapshot.error_message == "Video generation failed: quota exceeded"
    assert snapshot.result is None
    assert snapshot.last_config == request
    assert not snapshot.show_credential_prompt


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, message",
    [
        ("Requested entity was not found.", NOT_FOUND_MESSAGE),
        (
            "API key not valid. Please pass a valid API key.",
            INVALID_KEY_MESSAGE,
        ),
        ("PERMISSION DENIED", INVALID_KEY_MESSAGE),
    ],
)
async def test_credential_failures_prompt(tmp_path, error: str, message: str):
    workflow = get_workflow(tmp_path, error=error)

    snapshot = await workflow.submit(text_request())
    assert snapshot.state == WorkflowState.ERROR
    assert snapshot.error_message == message
    assert snapshot.show_credential_prompt

    snapshot = workflow.dismiss_credential_prompt()
    assert not snapshot.show_credential_prompt
    assert snapshot.state == WorkflowState.ERROR


@pytest.mark.asyncio
async def test_gated_request_never_reaches_generator(tmp_path):
    workflow = get_workflow(tmp_path)

    with pytest.raises(BadRequestError) as exc_info:
        await workflow.submit(
            GenerateVideoParams(mode=GenerationMode.FRAMES_TO_VIDEO)
        )
    assert str(exc_info.value) == "A start frame is required."
    assert workflow.state == WorkflowState.IDLE
    assert calls(workflow) == []


@pytest.mark.asyncio
async def test_submit_while_loading(tmp_path):
    workflow = get_workflow(tmp_path, delay=0.2)

    task = asyncio.create_task(workflow.submit(text_request()))
    for _ in range(50):
        if workflow.state == WorkflowState.LOADING:
            break
        await asyncio.sleep(0.01)
    assert workflow.state == WorkflowState.LOADING

    with pytest.raises(ConflictError):
        await workflow.submit(text_request("second"))
    with pytest.raises(ConflictError):
        await workflow.regenerate()
    with pytest.raises(ConflictError):
        workflow.new_video()

    snapshot = await task
    assert snapshot.state == WorkflowState.SUCCESS
    assert len(calls(workflow)) == 1


@pytest.mark.asyncio
async def test_concurrent_submit_with_credential(tmp_path):
    workflow = get_workflow(tmp_path, credential=get_credential(), delay=0.1)

    first, second = await asyncio.gather(
        workflow.submit(text_request("one")),
        workflow.submit(text_request("two")),
        return_exceptions=True,
    )
    assert first.state == WorkflowState.SUCCESS
    assert isinstance(second, ConflictError)
    assert len(calls(workflow)) == 1
    assert calls(workflow)[0].prompt == "one"


@pytest.mark.asyncio
async def test_missing_credential_releases_lock(tmp_path):
    credential = get_credential(available=False)
    workflow = get_workflow(tmp_path, credential=credential)

    snapshot = await workflow.submit(text_request())
    assert snapshot.state == WorkflowState.IDLE
    assert snapshot.show_credential_prompt
    assert calls(workflow) == []

    credential.__provider__.available = True
    snapshot = await workflow.submit(text_request())
    assert snapshot.state == WorkflowState.SUCCESS


@pytest.mark.asyncio
async def test_submit_requires_idle(tmp_path):
    workflow = get_workflow(tmp_path)
    await workflow.submit(text_request())

    with pytest.raises(BadRequestError):
        await workflow.submit(text_request())


@pytest.mark.asyncio
async def test_regenerate(tmp_path):
    workflow = get_workflow(tmp_path)
    request = text_request()
    first = await workflow.submit(request)

    second = await workflow.regenerate()
    assert second.state == WorkflowState.SUCCESS
    assert second.result.playable != first.result.playable
    assert not os.path.exists(first.result.playable)
    assert calls(workflow) == [request, request]


@pytest.mark.asyncio
async def test_regenerate_without_request(tmp_path):
    workflow = get_workflow(tmp_path)

    with pytest.raises(BadRequestError):
        await workflow.regenerate()


@pytest.mark.asyncio
async def test_new_video(tmp_path):
    workflow = get_workflow(tmp_path)
    first = await workflow.submit(text_request())

    snapshot = workflow.new_video()
    assert snapshot.state == WorkflowState.IDLE
    assert snapshot.result is None
    assert snapshot.last_config is None
    assert snapshot.initial_values is None
    assert not os.path.exists(first.result.playable)


@pytest.mark.asyncio
async def test_try_again(tmp_path):
    workflow = get_workflow(tmp_path, error="boom")
    request = frames_request()
    await workflow.submit(request)

    snapshot = workflow.try_again()
    assert snapshot.state == WorkflowState.IDLE
    assert snapshot.error_message is None
    assert snapshot.initial_values == request

    workflow.generator.__provider__.error = None
    snapshot = await workflow.submit(snapshot.initial_values)
    assert snapshot.state == WorkflowState.SUCCESS
    assert snapshot.initial_values is None


@pytest.mark.asyncio
async def test_extend(tmp_path):
    workflow = get_workflow(tmp_path)
    request = frames_request()
    request.is_looping = True
    first = await workflow.submit(request)

    snapshot = workflow.extend()
    seed = snapshot.initial_values
    assert snapshot.state == WorkflowState.IDLE
    assert snapshot.result is None
    assert not os.path.exists(first.result.playable)
    assert seed.mode == GenerationMode.EXTEND_VIDEO
    assert seed.prompt == ""
    assert seed.resolution == Resolution.P720
    assert seed.model == request.model
    assert seed.aspect_ratio == request.aspect_ratio
    assert seed.input_video.source == "last_video.mp4"
    assert seed.input_video.get_bytes() == first.result.video.get_bytes()
    assert seed.input_video_object == first.result.handle
    assert seed.start_frame is None
    assert seed.is_looping is False

    snapshot = await workflow.submit(seed)
    assert snapshot.state == WorkflowState.SUCCESS
    assert calls(workflow)[-1].input_video_object.uri == "mock://videos/1"


@pytest.mark.asyncio
async def test_extend_with_unreadable_video(tmp_path):
    workflow = get_workflow(tmp_path)
    snapshot = await workflow.submit(text_request())
    snapshot.result.video.content = "not base64!"

    snapshot = workflow.extend()
    assert snapshot.state == WorkflowState.ERROR
    assert snapshot.error_message == "Failed to prepare video for extension"


@pytest.mark.asyncio
async def test_start_without_credential(tmp_path):
    credential = get_credential(available=False)
    workflow = get_workflow(tmp_path, credential=credential)

    snapshot = await workflow.start()
    assert snapshot.show_credential_prompt
    assert snapshot.state == WorkflowState.IDLE


@pytest.mark.asyncio
async def test_submit_without_credential(tmp_path):
    credential = get_credential(available=False)
    workflow = get_workflow(tmp_path, credential=credential)

    snapshot = await workflow.submit(text_request())
    assert snapshot.show_credential_prompt
    assert snapshot.state == WorkflowState.IDLE
    assert calls(workflow) == []

    snapshot = await workflow.continue_with_credential()
    assert credential.__provider__.selections == 1
    assert not snapshot.show_credential_prompt
    assert snapshot.state == WorkflowState.IDLE

    snapshot = await workflow.submit(text_request())
    assert snapshot.state == WorkflowState.SUCCESS


@pytest.mark.asyncio
async def test_credential_check_failure(tmp_path):
    credential = get_credential(fail_check=True)
    workflow = get_workflow(tmp_path, credential=credential)

    snapshot = await workflow.submit(text_request())
    assert snapshot.show_credential_prompt
    assert calls(workflow) == []


@pytest.mark.asyncio
async def test_continue_with_credential_retries(tmp_path):
    credential = get_credential()
    workflow = get_workflow(
        tmp_path, credential=credential, error="API key not valid."
    )
    request = text_request()
    snapshot = await workflow.submit(request)
    assert snapshot.show_credential_prompt

    workflow.generator.__provider__.error = None
    snapshot = await workflow.continue_with_credential()
    assert credential.__provider__.selections == 1
    assert snapshot.state == WorkflowState.SUCCESS
    assert calls(workflow) == [request, request]
