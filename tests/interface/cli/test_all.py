import builtins

import pytest

from common.media import write_image, write_video

from veostudio.ai.video_generation import (
    AspectRatio,
    GenerationMode,
    Resolution,
    VeoModel,
)
from veostudio.core.exceptions import BadRequestError
from veostudio.interface.cli import CLI
from veostudio.interface.cli.providers.default import Default
from veostudio.studio import Studio, WorkflowState
from veostudio.studio.presenter import LOADING_TITLE, SUCCESS_TITLE

from ...studio._providers import get_credential, get_generator


def get_cli(tmp_path, credential=None, **parameters) -> CLI:
    studio = Studio(
        generator=get_generator(output_dir=str(tmp_path), **parameters),
        credential=credential,
        output=str(tmp_path / "output"),
    )
    return CLI(studio=studio)


def shell(cli: CLI) -> Default:
    return cli.__provider__


@pytest.mark.asyncio
async def test_compose(tmp_path):
    cli = get_cli(tmp_path)
    studio = cli.studio

    await shell(cli).execute('prompt "a neon city" at night')
    await shell(cli).execute("model pro")
    await shell(cli).execute("aspect portrait")
    await shell(cli).execute("resolution 1080P")
    params = studio.composer.params
    assert params.prompt == "a neon city at night"
    assert params.model == VeoModel.VEO
    assert params.aspect_ratio == AspectRatio.PORTRAIT
    assert params.resolution == Resolution.P1080

    status = await shell(cli).execute("status")
    assert "submit: ready" in status
    assert "Veo 3.1 Pro" in status


@pytest.mark.asyncio
async def test_frames(tmp_path):
    cli = get_cli(tmp_path)
    composer = cli.studio.composer

    await shell(cli).execute("mode frames")
    status = await shell(cli).execute("status")
    assert "A start frame is required." in status

    output = await shell(cli).execute(f"start {write_image(tmp_path)}")
    assert output == "Start frame attached."
    await shell(cli).execute("loop on")
    assert composer.params.is_looping

    await shell(cli).execute("remove start")
    assert composer.params.start_frame is None
    assert not composer.params.is_looping

    output = await shell(cli).execute(f"end {tmp_path / 'missing.png'}")
    assert output.startswith("Could not read")


@pytest.mark.asyncio
async def test_references(tmp_path):
    cli = get_cli(tmp_path)
    composer = cli.studio.composer

    await shell(cli).execute("mode references")
    assert composer.mode == GenerationMode.REFERENCES_TO_VIDEO
    for _ in range(2):
        await shell(cli).execute(f"ref {write_image(tmp_path)}")
    await shell(cli).execute(f"style {write_image(tmp_path)}")
    assert len(composer.params.reference_images) == 2

    await shell(cli).execute("unref 1")
    assert len(composer.params.reference_images) == 1
    with pytest.raises(BadRequestError):
        await shell(cli).execute("model fast")
    with pytest.raises(BadRequestError):
        await shell(cli).execute("unref first")


@pytest.mark.asyncio
async def test_video_requires_extend_mode(tmp_path):
    cli = get_cli(tmp_path)

    with pytest.raises(BadRequestError):
        await shell(cli).execute(f"video {write_video(tmp_path)}")


@pytest.mark.asyncio
async def test_extend_mode_not_selectable(tmp_path):
    cli = get_cli(tmp_path)

    with pytest.raises(BadRequestError) as exc_info:
        await shell(cli).execute("mode extend")
    assert "Run 'extend'" in str(exc_info.value)
    assert cli.studio.composer.mode == GenerationMode.TEXT_TO_VIDEO


@pytest.mark.asyncio
async def test_generate_blocked(tmp_path, capsys):
    cli = get_cli(tmp_path)

    with pytest.raises(BadRequestError) as exc_info:
        await shell(cli).execute("generate")
    assert str(exc_info.value) == "Please enter a prompt."
    assert LOADING_TITLE not in capsys.readouterr().out
    assert cli.studio.workflow.generator.__provider__.calls == []


@pytest.mark.asyncio
async def test_presets(tmp_path):
    cli = get_cli(tmp_path)

    listing = await shell(cli).execute("presets")
    assert "restaurant" in listing
    await shell(cli).execute("preset medical")
    assert "medical" in cli.studio.composer.params.prompt.lower()
    with pytest.raises(BadRequestError):
        await shell(cli).execute("preset")


@pytest.mark.asyncio
async def test_generate_and_actions(tmp_path):
    cli = get_cli(tmp_path)
    studio = cli.studio
    await shell(cli).execute("prompt a neon city")

    output = await shell(cli).execute("generate")
    assert SUCCESS_TITLE in output
    assert "regenerate, extend, new" in output

    output = await shell(cli).execute("save")
    assert output.startswith("Saved to ")

    await shell(cli).execute("regenerate")
    assert len(studio.workflow.generator.__provider__.calls) == 2

    await shell(cli).execute("extend")
    assert studio.composer.mode == GenerationMode.EXTEND_VIDEO
    status = await shell(cli).execute("status")
    assert "last_video.mp4" in status

    await shell(cli).execute("generate")
    await shell(cli).execute("new")
    assert studio.snapshot().state == WorkflowState.IDLE
    assert studio.composer.params.prompt == ""


@pytest.mark.asyncio
async def test_failure_and_retry(tmp_path):
    cli = get_cli(tmp_path, error="Requested entity was not found.")
    await shell(cli).execute("prompt a neon city")

    output = await shell(cli).execute("generate")
    assert "Model not found." in output
    assert "Run 'key'" in output

    await shell(cli).execute("retry")
    assert cli.studio.snapshot().state == WorkflowState.IDLE
    assert cli.studio.composer.params.prompt == "a neon city"


@pytest.mark.asyncio
async def test_key(tmp_path):
    credential = get_credential(available=False)
    cli = get_cli(tmp_path, credential=credential)
    await shell(cli).execute("prompt a neon city")

    output = await shell(cli).execute("generate")
    assert "Run 'key'" in output

    await shell(cli).execute("key")
    assert credential.__provider__.selections == 1


@pytest.mark.asyncio
async def test_unknown_command(tmp_path):
    with pytest.raises(BadRequestError):
        await shell(get_cli(tmp_path)).execute("dance")


@pytest.mark.asyncio
async def test_loop(tmp_path, monkeypatch, capsys):
    cli = get_cli(tmp_path)
    statements = iter(["", "prompt a neon city", "dance", "generate", "quit"])
    monkeypatch.setattr(builtins, "input", lambda prompt: next(statements))

    await cli.__arun__()
    out = capsys.readouterr().out
    assert "Welcome to veostudio" in out
    assert "BadRequestError: Unknown command dance" in out
    assert SUCCESS_TITLE in out
    assert cli.studio.snapshot().state == WorkflowState.SUCCESS


@pytest.mark.asyncio
async def test_loop_exits_on_eof(tmp_path, monkeypatch):
    def end(prompt):
        raise EOFError

    monkeypatch.setattr(builtins, "input", end)
    assert await get_cli(tmp_path).__arun__() is None
